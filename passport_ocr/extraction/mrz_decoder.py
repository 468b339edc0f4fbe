"""Decoder for the two-line passport machine-readable zone.

Reads holder name, passport number, birth date and expiry date from the
fixed columns of an ICAO 9303 TD3 block. The MRZ is a secondary source:
its values only fill fields the line heuristics left empty, and any
malformed part of the block is skipped rather than reported.
"""

import re
from dataclasses import dataclass

from passport_ocr.utils.config import MRZConfig
from passport_ocr.utils.logger import get_logger

from .normalize import format_mrz_date
from .record import PassportRecord

logger = get_logger(__name__)

FILLER = "<"
NAME_SEPARATOR = FILLER * 2
DOCUMENT_TYPE = "P"
# Document type, subtype and the 3-letter issuing state.
NAME_PREFIX_LENGTH = 5

_WHITESPACE_RE = re.compile(r"\s+")
_MRZ_DATE_RE = re.compile(r"[0-9]{6}")


@dataclass(frozen=True)
class MRZSlice:
    """A fixed-column field on the second MRZ line."""

    field_name: str
    start: int
    length: int
    min_line_length: int
    kind: str


LINE2_SLICES: tuple[MRZSlice, ...] = (
    MRZSlice("passport_number", 0, 9, 9, "number"),
    MRZSlice("date_of_birth", 13, 6, 19, "birth_date"),
    MRZSlice("date_of_expiry", 21, 6, 27, "expiry_date"),
)


class MRZDecoder:
    """Finds and decodes a passport MRZ among OCR lines.

    Args:
        config: MRZ settings. Defaults to ``MRZConfig()``.
    """

    def __init__(self, config: MRZConfig | None = None) -> None:
        self.config = config or MRZConfig()
        self._line_re = re.compile(
            rf"^[A-Z0-9<]{{{self.config.min_line_length},{self.config.line_length}}}$"
        )

    def find_mrz_lines(self, lines: list[str]) -> list[str]:
        """Return candidate MRZ lines with internal whitespace removed.

        A line is a candidate when it contains ``P<`` or consists only of
        uppercase letters, digits and filler characters with a length close
        to the nominal 44 columns.
        """
        candidates = []
        for line in lines:
            compact = _WHITESPACE_RE.sub("", line)
            # Only the "P<" test tolerates spaces; the charset test does not.
            has_prefix = DOCUMENT_TYPE + FILLER in compact
            if has_prefix or self._line_re.match(line.strip()):
                candidates.append(compact)
        return candidates

    def decode(self, lines: list[str]) -> dict[str, str]:
        """Decode MRZ fields from OCR lines.

        Args:
            lines: Ordered, trimmed OCR lines.

        Returns:
            Decoded field values. Empty when no passport MRZ is present.
        """
        candidates = self.find_mrz_lines(lines)
        if len(candidates) < 2:
            logger.debug("No MRZ block found (%d candidate lines)", len(candidates))
            return {}

        line1, line2 = candidates[0], candidates[1]
        if not line1.startswith(DOCUMENT_TYPE):
            logger.debug("MRZ first line is not a passport line: %r", line1[:5])
            return {}

        values = self._decode_name(line1)
        for mrz_slice in LINE2_SLICES:
            if len(line2) < mrz_slice.min_line_length:
                logger.debug(
                    "MRZ line 2 too short for %s (%d chars)",
                    mrz_slice.field_name,
                    len(line2),
                )
                continue
            raw = line2[mrz_slice.start : mrz_slice.start + mrz_slice.length]
            value = self._convert(mrz_slice.kind, raw)
            if value:
                values[mrz_slice.field_name] = value

        logger.info("MRZ decoded %d fields", len(values))
        return values

    def apply(self, lines: list[str], record: PassportRecord) -> PassportRecord:
        """Fill the record's empty fields from the MRZ, if one is present."""
        return record.fill_missing(self.decode(lines))

    def _decode_name(self, line1: str) -> dict[str, str]:
        """Split ``P<ISSSURNAME<<GIVEN<NAMES<<<`` into surname and given names."""
        parts = line1.split(NAME_SEPARATOR)
        if len(parts) < 2:
            return {}

        values = {}
        surname = parts[0][NAME_PREFIX_LENGTH:].replace(FILLER, " ").strip()
        if surname:
            values["surname"] = surname
        given_names = parts[1].replace(FILLER, " ").strip()
        if given_names:
            values["given_names"] = given_names
        return values

    def _convert(self, kind: str, raw: str) -> str:
        """Turn a raw column slice into a field value, or ``""`` if unusable."""
        if kind == "number":
            return raw.replace(FILLER, "")

        if not _MRZ_DATE_RE.fullmatch(raw):
            return ""
        if kind == "birth_date":
            century = "19" if int(raw[:2]) > self.config.birth_century_pivot else "20"
        else:
            century = "20"
        return format_mrz_date(raw, century)
