"""The structured passport record produced by the parser."""

from dataclasses import asdict, dataclass, fields, replace

from .normalize import clean_value


@dataclass(frozen=True)
class PassportRecord:
    """Passport holder and document fields.

    Every field is a string; an empty string means the field was not
    detected. Dates are ``DD/MM/YYYY`` once the record has been cleaned.
    """

    surname: str = ""
    given_names: str = ""
    passport_number: str = ""
    place_of_birth: str = ""
    date_of_birth: str = ""
    date_of_issue: str = ""
    date_of_expiry: str = ""
    issuing_authority: str = ""

    def to_dict(self) -> dict[str, str]:
        """Return the fields as a plain dictionary in declaration order."""
        return asdict(self)

    def fill_missing(self, values: dict[str, str]) -> "PassportRecord":
        """Return a copy with empty fields taken from ``values``.

        Fields that already hold a value are never replaced, and empty
        values in ``values`` are ignored.

        Args:
            values: Candidate field values keyed by field name.

        Returns:
            A new record with the gaps filled.
        """
        updates = {
            name: value
            for name, value in values.items()
            if name in FIELD_NAMES and value and not getattr(self, name)
        }
        return replace(self, **updates) if updates else self

    def cleaned(self) -> "PassportRecord":
        """Return a copy with whitespace normalized in every field."""
        return replace(
            self, **{name: clean_value(getattr(self, name)) for name in FIELD_NAMES}
        )


FIELD_NAMES: tuple[str, ...] = tuple(f.name for f in fields(PassportRecord))
