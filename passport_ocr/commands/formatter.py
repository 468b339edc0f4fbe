"""Reservation-system command generation from passport records.

Builds the Amadeus ``NM1`` name element and the ``SR DOCS`` passport
special service request from an extracted record plus the traveller
details the passport scan cannot supply.
"""

import re
from dataclasses import dataclass, field

from passport_ocr.extraction.record import PassportRecord
from passport_ocr.utils.logger import get_logger

logger = get_logger(__name__)

MONTH_ABBREVIATIONS: dict[str, str] = {
    "01": "JAN",
    "02": "FEB",
    "03": "MAR",
    "04": "APR",
    "05": "MAY",
    "06": "JUN",
    "07": "JUL",
    "08": "AUG",
    "09": "SEP",
    "10": "OCT",
    "11": "NOV",
    "12": "DEC",
}

VALID_GENDERS = ("M", "F")

MISSING_FIELDS_MESSAGE = "Please fill all required fields to generate commands"
INVALID_DATE_MESSAGE = (
    "Invalid date format detected. Dates should be in DD/MM/YYYY format."
)
INVALID_GENDER_MESSAGE = "Gender must be M or F"

_DATE_RE = re.compile(r"^([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})$")

_REQUIRED_RECORD_FIELDS = (
    "surname",
    "given_names",
    "passport_number",
    "date_of_birth",
    "date_of_expiry",
)


@dataclass
class TravellerDetails:
    """Booking details entered by the agent alongside the passport scan."""

    nationality: str = ""
    gender: str = ""
    airline_code: str = ""
    issuing_location: str = ""

    def __post_init__(self) -> None:
        self.nationality = self.nationality.strip().upper()
        self.gender = self.gender.strip().upper()
        self.airline_code = self.airline_code.strip().upper()
        self.issuing_location = self.issuing_location.strip().upper()


@dataclass
class CommandResult:
    """Generated commands, or the validation errors that prevented them."""

    name_command: str = ""
    reservation_command: str = ""
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


def format_amadeus_date(date: str) -> str:
    """Convert ``DD/MM/YYYY`` to the ``DDMMMYY`` form, e.g. ``15JUN90``.

    Args:
        date: Date string as produced by the parser.

    Returns:
        The reformatted date, or an empty string when ``date`` is not a
        well-formed ``DD/MM/YYYY`` value.
    """
    match = _DATE_RE.match(date.strip())
    if not match:
        return ""
    day, month, year = match.groups()
    abbreviation = MONTH_ABBREVIATIONS.get(month.zfill(2))
    if abbreviation is None or not 1 <= int(day) <= 31:
        return ""
    return f"{day.zfill(2)}{abbreviation}{year[-2:]}"


class CommandFormatter:
    """Validates inputs and renders the NM1 and SR DOCS commands."""

    def generate(
        self, record: PassportRecord, details: TravellerDetails
    ) -> CommandResult:
        """Generate both commands for a traveller.

        Validation problems are returned in ``CommandResult.errors``; no
        partial command is produced when any check fails.

        Args:
            record: Extracted (and possibly hand-corrected) passport record.
            details: Nationality, gender, airline and issuing location.

        Returns:
            The commands, or the validation errors.
        """
        missing = self.missing_fields(record, details)
        if missing:
            logger.info("Command generation missing fields: %s", ", ".join(missing))
            return CommandResult(
                errors=[f"{MISSING_FIELDS_MESSAGE} (missing: {', '.join(missing)})"]
            )

        if details.gender not in VALID_GENDERS:
            return CommandResult(errors=[INVALID_GENDER_MESSAGE])

        birth = format_amadeus_date(record.date_of_birth)
        expiry = format_amadeus_date(record.date_of_expiry)
        if not birth or not expiry:
            logger.info(
                "Invalid dates for command generation: %r, %r",
                record.date_of_birth,
                record.date_of_expiry,
            )
            return CommandResult(errors=[INVALID_DATE_MESSAGE])

        name_command = f"NM1{record.surname}/{record.given_names}"
        reservation_command = (
            f"SR DOCS {details.airline_code} HK1-P-{details.nationality}"
            f"-{record.passport_number}-{details.issuing_location}-{birth}"
            f"-{details.gender}-{expiry}-{record.surname}-{record.given_names}"
        )
        return CommandResult(
            name_command=name_command, reservation_command=reservation_command
        )

    @staticmethod
    def missing_fields(
        record: PassportRecord, details: TravellerDetails
    ) -> list[str]:
        """List required inputs that are empty."""
        missing = [
            name
            for name in ("nationality", "gender", "airline_code", "issuing_location")
            if not getattr(details, name)
        ]
        missing.extend(
            name
            for name in _REQUIRED_RECORD_FIELDS
            if not getattr(record, name).strip()
        )
        return missing
