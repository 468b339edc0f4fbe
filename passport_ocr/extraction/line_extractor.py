"""Label-driven field extraction from OCR text lines.

Scans the OCR output line by line for printed passport labels such as
"SURNAME" or "DATE OF BIRTH" and reads the value next to the label, or
from the following line when the label stands alone.
"""

import re
from dataclasses import dataclass

from passport_ocr.utils.logger import get_logger

from .normalize import extract_date

logger = get_logger(__name__)

_SEPARATOR_RE = re.compile(r"[:\-]")
_PASSPORT_NUMBER_NOISE_RE = re.compile(r"[^A-Z0-9]")


@dataclass(frozen=True)
class LabelRule:
    """Trigger labels for one field and how its value is read.

    ``kind`` is ``"text"`` (label value, else the next line), ``"date"``
    (first date on the line, else on the next line) or
    ``"passport_number"`` (label value stripped to ``A-Z0-9``).
    """

    field_name: str
    labels: tuple[str, ...]
    kind: str = "text"


# Labels are matched as substrings of the uppercased line. Order only
# matters for logging; every rule is checked on every line.
LABEL_RULES: tuple[LabelRule, ...] = (
    LabelRule("surname", ("SURNAME", "LAST NAME")),
    LabelRule("given_names", ("GIVEN NAME", "FIRST NAME", "NAMES")),
    LabelRule(
        "passport_number", ("PASSPORT NO", "DOCUMENT NO", "NO."), "passport_number"
    ),
    LabelRule("place_of_birth", ("PLACE OF BIRTH", "BIRTH PLACE")),
    LabelRule("date_of_birth", ("DATE OF BIRTH", "BIRTH DATE", "BIRTH"), "date"),
    LabelRule("date_of_issue", ("DATE OF ISSUE", "ISSUE DATE", "ISSUED"), "date"),
    LabelRule(
        "date_of_expiry", ("DATE OF EXPIRY", "EXPIRY", "EXPIRATION"), "date"
    ),
    LabelRule("issuing_authority", ("AUTHORITY", "ISSUED BY", "ISSUING")),
)


def split_lines(text: str) -> list[str]:
    """Split OCR text into trimmed lines, keeping blank lines in place."""
    return [line.strip() for line in text.splitlines()]


def value_after_label(line: str) -> str:
    """Return the text after the last ``:`` or ``-`` on a line.

    Args:
        line: A single OCR line.

    Returns:
        The trimmed trailing text, or an empty string when the line has no
        separator or nothing follows it.
    """
    parts = _SEPARATOR_RE.split(line)
    if len(parts) < 2:
        return ""
    return parts[-1].strip()


class LineHeuristicExtractor:
    """Label-matching extractor over ordered OCR lines.

    When several lines match the same field the last one wins, including
    a later match that yields an empty value. Printed labels overlap
    ("ISSUED BY" also contains "ISSUED"), so a later line can replace an
    earlier and more accurate match.

    Args:
        rules: Label table to evaluate. Defaults to ``LABEL_RULES``.
    """

    def __init__(self, rules: tuple[LabelRule, ...] = LABEL_RULES) -> None:
        self.rules = rules

    def extract(self, text: str) -> dict[str, str]:
        """Extract field values from raw OCR text.

        Args:
            text: Full OCR output with embedded line breaks.

        Returns:
            Mapping of field name to extracted value for every field that
            had at least one matching label line.
        """
        return self.extract_lines(split_lines(text))

    def extract_lines(self, lines: list[str]) -> dict[str, str]:
        """Extract field values from already split, trimmed lines."""
        values: dict[str, str] = {}

        for index, line in enumerate(lines):
            upper = line.upper()
            next_line = lines[index + 1] if index + 1 < len(lines) else None

            for rule in self.rules:
                if not any(label in upper for label in rule.labels):
                    continue
                values[rule.field_name] = self._read_value(rule, line, next_line)
                logger.debug(
                    "Line %d matched %s: %r",
                    index,
                    rule.field_name,
                    values[rule.field_name],
                )

        logger.info(
            "Line heuristics matched %d fields",
            sum(1 for value in values.values() if value),
        )
        return values

    def _read_value(self, rule: LabelRule, line: str, next_line: str | None) -> str:
        """Read the value for a matched rule from the line or the next one."""
        if rule.kind == "date":
            value = extract_date(line)
            if not value and next_line is not None:
                value = extract_date(next_line)
            return value

        value = value_after_label(line)
        if rule.kind == "passport_number":
            return _PASSPORT_NUMBER_NOISE_RE.sub("", value.upper())

        if not value and next_line is not None:
            value = next_line
        return value
