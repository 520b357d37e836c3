"""Logging setup for command line use. The library itself only creates loggers."""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "IMAGE_FONT_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> str:
    """Send log records to stderr and return the level used.

    `level` falls back to $IMAGE_FONT_LOG_LEVEL, then WARNING.
    """
    level = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"unknown log level {level!r}")
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return level
