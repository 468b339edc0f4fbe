"""Local Tesseract OCR provider.

Offline alternative to the OCR.space client for deployments that have
the ``tesseract`` binary installed.
"""

import numpy as np
import pytesseract
from PIL import Image

from passport_ocr.utils.config import OCRConfig
from passport_ocr.utils.logger import get_logger

from .errors import OCRServiceError

logger = get_logger(__name__)


class TesseractEngine:
    """Wrapper around pytesseract returning page text.

    Args:
        config: OCR settings; uses ``tesseract_cmd``, ``language`` and ``psm``.
    """

    def __init__(self, config: OCRConfig) -> None:
        if config.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = config.tesseract_cmd
        self.lang = config.language
        self.psm = config.psm

    def extract_text(self, image: np.ndarray) -> str:
        """Extract text from an image.

        Args:
            image: Input image as a numpy array.

        Returns:
            The recognized text in reading order.

        Raises:
            OCRServiceError: If Tesseract is missing or fails on the image.
        """
        pil_image = Image.fromarray(image)
        try:
            text = pytesseract.image_to_string(
                pil_image, lang=self.lang, config=f"--psm {self.psm}"
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as exc:
            logger.error("Tesseract OCR failed: %s", exc)
            raise OCRServiceError(f"Tesseract OCR failed: {exc}") from exc

        logger.info("Tesseract extracted %d characters", len(text))
        return text
