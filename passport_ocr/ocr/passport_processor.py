"""End-to-end passport processing: image in, passport record out.

Runs the configured OCR provider on an image and parses the returned
text. OCR failures of any kind surface as one generic error; parsing
itself never fails.
"""

import io
import mimetypes
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from passport_ocr.extraction.pipeline import PassportParser
from passport_ocr.extraction.record import PassportRecord
from passport_ocr.utils.config import AppConfig
from passport_ocr.utils.logger import get_logger

from .errors import OCRServiceError
from .ocr_space import OCRSpaceClient
from .tesseract_engine import TesseractEngine

logger = get_logger(__name__)

OCR_FAILURE_MESSAGE = "Failed to extract text from image"


@dataclass
class PassportResult:
    """Parsed passport record together with the OCR text it came from."""

    source_file: str
    raw_text: str
    record: PassportRecord


class PassportProcessor:
    """OCR plus parsing for a single passport image.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.parser = PassportParser(config.mrz)
        self._ocr_space: OCRSpaceClient | None = None
        self._tesseract: TesseractEngine | None = None

    def process(
        self, source: Path | bytes, filename: str = "passport.jpg"
    ) -> PassportResult:
        """Process a passport image from a file path or bytes.

        Args:
            source: Path to an image file, or raw image bytes.
            filename: Display name for the source image.

        Returns:
            The parsed record and the raw OCR text.

        Raises:
            OCRServiceError: If the image could not be read or OCR failed.
        """
        logger.info("Processing passport image: %s", filename)
        try:
            text = self.run_ocr(source, filename)
        except (OCRServiceError, OSError) as exc:
            logger.error("OCR failed for %s: %s", filename, exc)
            raise OCRServiceError(OCR_FAILURE_MESSAGE) from exc

        record = self.parser.parse(text)
        return PassportResult(source_file=filename, raw_text=text, record=record)

    def run_ocr(self, source: Path | bytes, filename: str) -> str:
        """Return the OCR text for an image using the configured provider."""
        image_bytes = source if isinstance(source, bytes) else Path(source).read_bytes()

        if self.config.ocr.provider == "tesseract":
            image = np.array(Image.open(io.BytesIO(image_bytes)))
            return self._get_tesseract().extract_text(image)

        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        return self._get_ocr_space().extract_text(image_bytes, filename, content_type)

    def _get_ocr_space(self) -> OCRSpaceClient:
        if self._ocr_space is None:
            self._ocr_space = OCRSpaceClient(self.config.ocr)
        return self._ocr_space

    def _get_tesseract(self) -> TesseractEngine:
        if self._tesseract is None:
            self._tesseract = TesseractEngine(self.config.ocr)
        return self._tesseract
