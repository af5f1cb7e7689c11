"""Logging setup for the ``traceview`` logger namespace.

The terminal belongs to the viewer while it runs, so records only ever go
to a file. Without a log file the namespace gets a ``NullHandler``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOGGER_NAME = "traceview"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL_ENV = "TRACEVIEW_LOG_LEVEL"
DEFAULT_LEVEL = "INFO"


def resolve_level(level: str | int | None) -> str | int:
    """Return a level ``setLevel`` accepts; unknown names fall back to ``INFO``.

    ``None`` reads ``$TRACEVIEW_LOG_LEVEL``.
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, DEFAULT_LEVEL)
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    # getLevelName maps known names to ints and echoes "Level X" otherwise.
    if isinstance(logging.getLevelName(name), int):
        return name
    return DEFAULT_LEVEL


def setup_logging(log_file: Path | None = None, level: str | int | None = None) -> logging.Logger:
    """Configure the package logger and return it.

    Calling again replaces previously installed handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(resolve_level(level))
    logger.propagate = False

    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    return logger
