"""Whitespace cleanup and date normalization helpers."""

import re

_WHITESPACE_RE = re.compile(r"\s+")

# Day, month, then a 4- or 2-digit year, separated by "/", "." or "-".
DATE_PATTERN = re.compile(
    r"\b(\d{1,2})[/.\-](\d{1,2})[/.\-](\d{4}|\d{2})\b", re.ASCII
)


def clean_value(value: str) -> str:
    """Collapse whitespace runs to a single space and trim the ends."""
    return _WHITESPACE_RE.sub(" ", value).strip()


def normalize_date(day: str, month: str, year: str) -> str:
    """Render date parts as ``DD/MM/YYYY``.

    Day and month are zero-padded; a 2-digit year is prefixed with ``20``.
    """
    if len(year) == 2:
        year = "20" + year
    return f"{day.zfill(2)}/{month.zfill(2)}/{year}"


def extract_date(line: str) -> str:
    """Find the first date in a line and normalize it.

    Args:
        line: A single line of OCR text.

    Returns:
        The date as ``DD/MM/YYYY``, or an empty string when the line holds
        no recognizable date.
    """
    match = DATE_PATTERN.search(line)
    if not match:
        return ""
    return normalize_date(*match.groups())


def format_mrz_date(yymmdd: str, century: str) -> str:
    """Render a ``YYMMDD`` MRZ date as ``DD/MM/{century}YY``."""
    return f"{yymmdd[4:6]}/{yymmdd[2:4]}/{century}{yymmdd[0:2]}"
