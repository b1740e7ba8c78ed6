"""Logging setup for the Zensai API.

Engine modules log through plain ``logging.getLogger(__name__)`` and attach
context (``user_id``, ``stage``, ``feature``) with ``extra=``; the JSON
formatter below carries those fields into each line.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.config import dictConfig
from typing import Any, Dict

from zensai.libs.schemas import AppSettings

_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

_WARNING_COLOR = "\033[33m"
_ERROR_COLOR = "\033[31m"
_RESET = "\033[0m"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update({key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ColorTextFormatter(logging.Formatter):
    """Console formatter for local runs; warnings yellow, errors red."""

    def __init__(self, fmt: str | None = None, *, use_color: bool = True) -> None:
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if not self.use_color or record.levelno < logging.WARNING:
            return formatted
        color = _ERROR_COLOR if record.levelno >= logging.ERROR else _WARNING_COLOR
        return f"{color}{formatted}{_RESET}"


def configure_logging(settings: AppSettings) -> None:
    log_level = (settings.log_level or ("DEBUG" if settings.is_dev else "INFO")).upper()
    formatter_name = "text" if settings.log_format.lower() == "text" else "json"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": JsonFormatter},
                "text": {
                    "()": ColorTextFormatter,
                    "fmt": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                    "use_color": settings.is_dev,
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter_name,
                    "level": log_level,
                }
            },
            "loggers": {
                "httpx": {"level": "WARNING"},
            },
            "root": {
                "handlers": ["console"],
                "level": log_level,
            },
        }
    )


__all__ = ["ColorTextFormatter", "JsonFormatter", "configure_logging"]
