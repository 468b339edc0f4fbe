"""Passport text parsing pipeline.

Runs the line heuristics first, overlays the machine-readable zone onto
whatever they left empty, and finishes with a whitespace cleanup pass.
"""

from passport_ocr.utils.config import MRZConfig
from passport_ocr.utils.logger import get_logger

from .line_extractor import LineHeuristicExtractor, split_lines
from .mrz_decoder import MRZDecoder
from .record import FIELD_NAMES, PassportRecord

logger = get_logger(__name__)


class PassportParser:
    """Combines label heuristics and MRZ decoding into one record.

    Parsing is total: any input string, including an empty one, yields a
    record, with undetected fields left empty.

    Args:
        mrz_config: MRZ decoder settings.
    """

    def __init__(self, mrz_config: MRZConfig | None = None) -> None:
        self.line_extractor = LineHeuristicExtractor()
        self.mrz_decoder = MRZDecoder(mrz_config)

    def parse(self, text: str) -> PassportRecord:
        """Parse raw OCR text into a cleaned passport record.

        Args:
            text: OCR output for one passport page.

        Returns:
            The best-effort passport record.
        """
        lines = split_lines(text)

        record = PassportRecord().fill_missing(self.line_extractor.extract_lines(lines))
        record = self.mrz_decoder.apply(lines, record).cleaned()

        found = sum(1 for name in FIELD_NAMES if getattr(record, name))
        logger.info("Parsed passport text: %d/%d fields", found, len(FIELD_NAMES))
        return record


def parse_passport_text(
    text: str, mrz_config: MRZConfig | None = None
) -> PassportRecord:
    """Parse raw OCR text with a default-configured ``PassportParser``."""
    return PassportParser(mrz_config).parse(text)
