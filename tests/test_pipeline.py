"""Tests for the end-to-end passport text parser."""

from passport_ocr.extraction.pipeline import PassportParser, parse_passport_text
from passport_ocr.extraction.record import FIELD_NAMES, PassportRecord
from passport_ocr.utils.config import MRZConfig

SMITH_MRZ = (
    "P<UTOSMITH<<JOHN<<<<<<<<<<<<<<<<<<<<<<<<<<<\n"
    "1234567890UTO9003054M2501017<<<<<<<<<<<<<4"
)


class TestPassportParser:
    """Tests for the PassportParser class."""

    def setup_method(self) -> None:
        self.parser = PassportParser()

    def test_labelled_surname(self) -> None:
        record = self.parser.parse("Surname: SMITH")
        assert record.surname == "SMITH"

    def test_date_of_birth_on_next_line(self) -> None:
        record = self.parser.parse("DATE OF BIRTH\n05.03.1990")
        assert record.date_of_birth == "05/03/1990"

    def test_mrz_only(self) -> None:
        record = self.parser.parse(SMITH_MRZ)
        assert record.surname == "SMITH"
        assert record.given_names == "JOHN"
        assert record.passport_number == "123456789"
        assert record.date_of_birth == "05/03/1990"
        assert record.date_of_expiry == "01/01/2025"
        assert record.place_of_birth == ""
        assert record.date_of_issue == ""
        assert record.issuing_authority == ""

    def test_spaced_header_above_mrz(self) -> None:
        text = "REPUBLIC OF UTOPIA PASSPORT PASSEPORT PASAPORTE\n" + SMITH_MRZ
        record = self.parser.parse(text)
        assert record.surname == "SMITH"
        assert record.date_of_birth == "05/03/1990"

    def test_empty_text_gives_empty_record(self) -> None:
        record = self.parser.parse("")
        assert record == PassportRecord()
        assert all(getattr(record, name) == "" for name in FIELD_NAMES)

    def test_whitespace_only_text(self) -> None:
        assert self.parser.parse(" \n\t\n ") == PassportRecord()

    def test_full_page(self, passport_text: str) -> None:
        record = self.parser.parse(passport_text)
        assert record == PassportRecord(
            surname="ERIKSSON",
            given_names="Anna Maria",
            passport_number="L898902C3",
            place_of_birth="ZENITH",
            date_of_birth="12/08/1974",
            date_of_issue="16/04/2007",
            date_of_expiry="15/04/2012",
            issuing_authority="PASSPORT OFFICE",
        )

    def test_heuristic_values_win_over_mrz(self) -> None:
        text = "Surname: DOE\nDate of birth: 01/02/1985\n" + SMITH_MRZ
        record = self.parser.parse(text)
        assert record.surname == "DOE"
        assert record.date_of_birth == "01/02/1985"
        assert record.given_names == "JOHN"
        assert record.passport_number == "123456789"

    def test_mrz_fills_field_cleared_by_later_label(self) -> None:
        text = "Date of birth: 01/02/1985\nPlace of birth: Springfield\n" + SMITH_MRZ
        record = self.parser.parse(text)
        assert record.place_of_birth == "Springfield"
        assert record.date_of_birth == "05/03/1990"

    def test_output_is_cleaned(self) -> None:
        record = self.parser.parse("GIVEN NAMES\n  John    Paul  \n")
        assert record.given_names == "John Paul"

    def test_windows_line_endings(self) -> None:
        record = self.parser.parse("SURNAME\r\nSmith\r\nDATE OF EXPIRY\r\n1/2/2030\r\n")
        assert record.surname == "Smith"
        assert record.date_of_expiry == "01/02/2030"

    def test_mrz_config_is_used(self) -> None:
        parser = PassportParser(MRZConfig(birth_century_pivot=95))
        record = parser.parse(SMITH_MRZ)
        assert record.date_of_birth == "05/03/2090"


class TestParsePassportText:
    """Tests for the module-level convenience function."""

    def test_matches_parser(self, passport_text: str) -> None:
        assert parse_passport_text(passport_text) == PassportParser().parse(passport_text)

    def test_garbage_never_raises(self) -> None:
        record = parse_passport_text("P<\nP<<<\n:::\n---\nNO.\n12/99/")
        assert isinstance(record, PassportRecord)

    def test_superscript_digits_in_mrz_never_raise(self) -> None:
        text = (
            "P<UTOSMITH<<JOHN<<<<<<<<<<<<<<<<<<<<<<<<<<<\n"
            "1234567890UTO¹¹03054M2501017P<<<<<<<<<<<<4"
        )
        record = parse_passport_text(text)
        assert record.surname == "SMITH"
        assert record.date_of_birth == ""
        assert record.date_of_expiry == "01/01/2025"
