"""Application entry point for the Passport OCR API server."""

import uvicorn

from passport_ocr.api.app import app
from passport_ocr.utils.config import load_config
from passport_ocr.utils.logger import setup_logging


def main(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Configure logging and start the FastAPI application server."""
    config = load_config()
    setup_logging(config.log_level)
    uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
