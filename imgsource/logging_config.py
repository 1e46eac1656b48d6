"""Logging configuration helpers for imgsource."""

from __future__ import annotations

import logging
import os
from typing import Final

_DEFAULT_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DEFAULT_DATEFMT: Final[str] = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level_name: str) -> int:
    """Translate a log level string or number into a logging level."""

    value = level_name.strip()
    if value.isdigit():
        return int(value)

    numeric = getattr(logging, value.upper(), None)
    if isinstance(numeric, int):
        return numeric

    return logging.INFO


def configure_logging(*, debug: bool = False) -> logging.Logger:
    """Ensure the imgsource logger tree streams to the console."""

    env_level = os.getenv("LOG_LEVEL")
    default_level = "DEBUG" if debug else "INFO"
    level = _resolve_level(env_level or default_level)

    app_logger = logging.getLogger("imgsource")
    if not app_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT, _DEFAULT_DATEFMT))
        app_logger.addHandler(handler)
    app_logger.setLevel(level)
    app_logger.propagate = False
    return app_logger
