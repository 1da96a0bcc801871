"""Logging setup for the command line entry point."""
from __future__ import annotations

import logging

LOG_FORMAT = "[%(asctime)s] [%(name)s] %(levelname)s: %(message)s"


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Attach a single stream handler to the ``boxer`` logger."""

    logger = logging.getLogger("boxer")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    return logger
