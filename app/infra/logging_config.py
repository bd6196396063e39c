"""Process-wide logging setup and the ``get_logger`` helper."""

from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Optional

from app.config import get_settings

ROOT_LOGGER_NAME = "pairtalk"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class LoggingConfig:
    """Applies the console logging configuration once per process."""

    _configured = False

    def __init__(self, level: Optional[str] = None) -> None:
        if LoggingConfig._configured:
            return
        level = (level or get_settings().log_level or "INFO").upper()
        dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "default": {"format": LOG_FORMAT},
                },
                "handlers": {
                    "console": {
                        "class": "logging.StreamHandler",
                        "formatter": "default",
                    },
                },
                "loggers": {
                    ROOT_LOGGER_NAME: {
                        "level": level,
                        "handlers": ["console"],
                        "propagate": False,
                    },
                    "sqlalchemy.engine": {"level": "WARNING"},
                },
            }
        )
        LoggingConfig._configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the app logger, or a named child of it."""
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
