"""Pydantic request/response schemas for the FastAPI endpoints."""

from pydantic import BaseModel


class PassportFields(BaseModel):
    """Passport record fields; empty strings mean "not detected"."""

    surname: str = ""
    given_names: str = ""
    passport_number: str = ""
    place_of_birth: str = ""
    date_of_birth: str = ""
    date_of_issue: str = ""
    date_of_expiry: str = ""
    issuing_authority: str = ""


class ExtractionResponse(BaseModel):
    """Response schema for a passport image extraction."""

    success: bool
    document_id: str
    source_file: str
    fields: PassportFields
    raw_text: str
    processing_time_ms: float


class ParseRequest(BaseModel):
    """Raw OCR text to parse without running OCR."""

    text: str = ""


class CommandRequest(BaseModel):
    """Passport fields plus the traveller details needed for commands."""

    passport: PassportFields
    nationality: str = ""
    gender: str = ""
    airline_code: str = ""
    issuing_location: str = ""


class CommandResponse(BaseModel):
    """Generated reservation commands."""

    name_command: str
    reservation_command: str


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    ocr_provider: str
    tesseract_available: bool
