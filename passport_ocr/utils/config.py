"""Configuration management for the passport OCR extractor.

Loads and validates YAML configuration with defaults for the OCR
provider, the machine-readable zone decoder, and logging.
"""

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "OCR_API_KEY"


class OCRConfig(BaseModel):
    """Configuration for the OCR provider."""

    provider: Literal["ocr_space", "tesseract"] = "ocr_space"
    api_url: str = "https://api.ocr.space/parse/image"
    api_key: str = ""
    language: str = "eng"
    engine: int = 2
    detect_orientation: bool = True
    scale: bool = True
    timeout: float = 30.0
    tesseract_cmd: str | None = None
    psm: int = 3


class MRZConfig(BaseModel):
    """Configuration for machine-readable zone detection and decoding."""

    line_length: int = 44
    min_line_length: int = 40
    birth_century_pivot: int = 30


class AppConfig(BaseModel):
    """Top-level application configuration."""

    ocr: OCRConfig = Field(default_factory=OCRConfig)
    mrz: MRZConfig = Field(default_factory=MRZConfig)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    An empty ``ocr.api_key`` is filled from the ``OCR_API_KEY``
    environment variable so the key never has to live in the YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        config = AppConfig(**raw)
    else:
        logger.info("No config file found at %s, using defaults", path)
        config = AppConfig()

    if not config.ocr.api_key:
        config.ocr.api_key = os.environ.get(API_KEY_ENV_VAR, "")
    return config
