from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any, Dict, Iterable

from settings import get_settings

READING_CONTEXT_KEYS = (
    "timestamp",
    "terminal",
    "sensor",
    "value",
    "error",
    "outcome",
    "duration_ms",
    "url",
)

_configured = False


class ContextualFormatter(logging.Formatter):
    """Append ``key=value`` pairs for reading context passed via ``extra``."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        extra_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self.extra_keys = tuple(extra_keys or READING_CONTEXT_KEYS)

    def context_of(self, record: logging.LogRecord) -> str:
        pairs = (
            f"{key}={getattr(record, key)}"
            for key in self.extra_keys
            if getattr(record, key, None) is not None
        )
        return " ".join(pairs)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = self.context_of(record)
        return f"{line} | {context}" if context else line


def build_logging_config(level: str | int) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "contextual": {
                "()": ContextualFormatter,
                "fmt": "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S",
                "extra_keys": list(READING_CONTEXT_KEYS),
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "contextual",
            }
        },
        "root": {"handlers": ["console"], "level": level},
    }


def configure_logging(level: str | int | None = None) -> None:
    """Install the contextual console handler once per process."""
    global _configured
    if _configured:
        return
    dictConfig(build_logging_config(level if level is not None else get_settings().log_level))
    _configured = True
