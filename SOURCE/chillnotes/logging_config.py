"""
Logging setup for the notes service.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

from .config import Settings

LOGGER_NAME = "chillnotes"
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler()
    if settings.log_json:
        formatter: logging.Formatter = JsonFormatter(_FORMAT)
    else:
        formatter = logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handler.setFormatter(formatter)

    # Replace rather than stack handlers when the app factory runs twice.
    logger.handlers = [handler]
    return logger


__all__ = ["configure_logging", "LOGGER_NAME"]
