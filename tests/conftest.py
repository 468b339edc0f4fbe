"""Shared test fixtures for the passport OCR test suite."""

import io
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# ICAO 9303 specimen passport.
SPECIMEN_MRZ_LINE1 = "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<"
SPECIMEN_MRZ_LINE2 = "L898902C36UTO7408122F1204159ZE184226B<<<<<10"


@pytest.fixture
def mrz_lines() -> list[str]:
    """Both lines of the specimen passport MRZ."""
    return [SPECIMEN_MRZ_LINE1, SPECIMEN_MRZ_LINE2]


@pytest.fixture
def passport_text() -> str:
    """OCR output of a full passport data page, labels and MRZ included."""
    return "\n".join(
        [
            "REPUBLIC OF UTOPIA",
            "PASSPORT",
            "Surname: ERIKSSON",
            "Given Names: Anna   Maria",
            "Passport No: L898902C3",
            "Nationality: UTOPIAN",
            "Place of Birth: ZENITH",
            "Date of Birth: 12.08.1974",
            "Date of Issue: 16/04/2007",
            "Date of Expiry: 15-04-2012",
            "Authority: PASSPORT OFFICE",
            SPECIMEN_MRZ_LINE1,
            SPECIMEN_MRZ_LINE2,
        ]
    )


@pytest.fixture
def png_bytes() -> bytes:
    """A small synthetic PNG image."""
    image = np.zeros((100, 200, 3), dtype=np.uint8)
    image[20:80, 20:180] = (255, 255, 255)
    buf = io.BytesIO()
    Image.fromarray(image).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent
