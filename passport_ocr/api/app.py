"""FastAPI application for the Passport OCR API.

Provides REST endpoints for passport image extraction, raw text parsing,
reservation command generation, and health checks.
"""

import shutil
import time
import uuid
from typing import Annotated

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from passport_ocr.commands.formatter import CommandFormatter, TravellerDetails
from passport_ocr.extraction.pipeline import PassportParser
from passport_ocr.extraction.record import PassportRecord
from passport_ocr.ocr.errors import OCRServiceError
from passport_ocr.ocr.passport_processor import OCR_FAILURE_MESSAGE, PassportProcessor
from passport_ocr.utils.config import load_config
from passport_ocr.utils.logger import get_logger

from .schemas import (
    CommandRequest,
    CommandResponse,
    ExtractionResponse,
    HealthResponse,
    ParseRequest,
    PassportFields,
)

logger = get_logger(__name__)

VERSION = "1.0.0"

app = FastAPI(
    title="Passport OCR API",
    description="Extract passport fields and build reservation commands",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ALLOWED_CONTENT_TYPES = {
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/gif",
    "image/bmp",
    "image/tiff",
    "image/webp",
    "application/octet-stream",
}


def _get_processor() -> PassportProcessor:
    """Build a processor from the current configuration."""
    return PassportProcessor(load_config())


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return system health status."""
    config = load_config()
    return HealthResponse(
        status="healthy",
        version=VERSION,
        ocr_provider=config.ocr.provider,
        tesseract_available=shutil.which("tesseract") is not None,
    )


@app.post("/extract", response_model=ExtractionResponse)
async def extract_passport(
    file: Annotated[UploadFile, File(...)],
) -> ExtractionResponse:
    """Extract passport fields from an uploaded image.

    Args:
        file: Uploaded passport image.

    Returns:
        The extracted fields and the raw OCR text.
    """
    start_time = time.time()

    if file.content_type and file.content_type not in _ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: {file.content_type}",
        )

    content = await file.read()
    try:
        result = _get_processor().process(content, file.filename or "passport.jpg")
    except OCRServiceError as exc:
        logger.error("Extraction failed: %s", exc)
        raise HTTPException(status_code=502, detail=OCR_FAILURE_MESSAGE) from exc

    return ExtractionResponse(
        success=True,
        document_id=str(uuid.uuid4()),
        source_file=result.source_file,
        fields=PassportFields(**result.record.to_dict()),
        raw_text=result.raw_text,
        processing_time_ms=(time.time() - start_time) * 1000,
    )


@app.post("/parse", response_model=PassportFields)
async def parse_text(request: ParseRequest) -> PassportFields:
    """Parse raw OCR text into passport fields."""
    record = PassportParser(load_config().mrz).parse(request.text)
    return PassportFields(**record.to_dict())


@app.post("/commands", response_model=CommandResponse)
async def generate_commands(request: CommandRequest) -> CommandResponse:
    """Build the NM1 and SR DOCS commands for a traveller.

    Validation failures are returned as HTTP 422 with the message.
    """
    details = TravellerDetails(
        nationality=request.nationality,
        gender=request.gender,
        airline_code=request.airline_code,
        issuing_location=request.issuing_location,
    )
    result = CommandFormatter().generate(
        PassportRecord(**request.passport.model_dump()), details
    )
    if not result.success:
        raise HTTPException(status_code=422, detail="; ".join(result.errors))

    return CommandResponse(
        name_command=result.name_command,
        reservation_command=result.reservation_command,
    )
