"""Centralized logging configuration for the user API."""

from __future__ import annotations

import copy
import logging
from logging.config import dictConfig
from pathlib import Path
from typing import Any, Protocol

_LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        }
    },
    "loggers": {
        "uvicorn": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "uvicorn.error": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "uvicorn.access": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "user_api": {"handlers": ["console"], "level": "INFO", "propagate": False},
    },
}


class EventLogger(Protocol):
    """The subset of :class:`logging.Logger` that request handlers rely on."""

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


def build_logging_config(level: str = "INFO", log_file: Path | None = None) -> dict[str, Any]:
    """Return a ``dictConfig`` mapping, adding a file handler when ``log_file`` is set."""

    config = copy.deepcopy(_LOGGING_CONFIG)
    handlers = ["console"]
    if log_file is not None:
        config["handlers"]["file"] = {
            "class": "logging.FileHandler",
            "formatter": "standard",
            "filename": str(log_file),
            "encoding": "utf-8",
        }
        handlers.append("file")

    for logger_config in config["loggers"].values():
        logger_config["handlers"] = list(handlers)
    config["loggers"]["user_api"]["level"] = level.upper()
    config["root"] = {"level": level.upper(), "handlers": list(handlers)}
    return config


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure application-wide logging once."""

    dictConfig(build_logging_config(level, log_file))


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a namespaced logger within the user_api hierarchy."""

    full_name = f"user_api.{name}" if name else "user_api"
    return logging.getLogger(full_name)
