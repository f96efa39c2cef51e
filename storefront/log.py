"""File logging for the storefront app."""

from __future__ import annotations

import logging
from pathlib import Path

from storefront.config import LOG_LEVEL, LOG_PATH

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(path: str = LOG_PATH, level: str = LOG_LEVEL) -> logging.Handler:
    """Attach a single file handler to the ``storefront`` logger tree."""
    log_file = Path(path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("storefront")
    for handler in list(logger.handlers):
        if getattr(handler, "_storefront_handler", False):
            logger.removeHandler(handler)
            handler.close()

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._storefront_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    return handler
