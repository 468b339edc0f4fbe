"""Logging setup shared by the API server, the CLI and the parsing core.

Every module logs through ``get_logger(__name__)``; the process entry
points call ``setup_logging`` once with the configured level.
"""

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# HTTP and imaging libraries log every request/decoder step at DEBUG.
_NOISY_LOGGERS = ("urllib3", "PIL", "multipart")


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Install a single handler on the root logger.

    Calling it again is a no-op so embedding applications (uvicorn, pytest)
    keep their own handlers.

    Args:
        level: Logging level name. Unknown names fall back to INFO.
        stream: Output stream, stdout by default.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()

    if root.handlers:
        return

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
    root.setLevel(numeric_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module, typically called with ``__name__``."""
    return logging.getLogger(name)
