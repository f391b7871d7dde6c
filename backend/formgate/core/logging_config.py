"""
Central logging configuration.

Validation passes and upload gate decisions are logged as one-line events
("forms.validated", "upload.rejected", ...) whose details travel in
``extra={...}``. In JSON mode those extras, plus request_id / upload_slot
from the request context, become top-level keys. LOG_FORMAT=text gives a
plain line for local runs.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from logging.config import dictConfig

from formgate.core.request_context import get_context

# Attributes every LogRecord carries; anything else came in through `extra`.
_STANDARD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def event_fields(record: logging.LogRecord) -> dict:
    fields = get_context()
    for k, v in vars(record).items():
        if k in _STANDARD_ATTRS or k.startswith("_") or v is None:
            continue
        fields[k] = v
    return fields


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for k, v in event_fields(record).items():
            base.setdefault(k, v)

        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)

        # Non-serializable extras fall back to str()
        return json.dumps(base, ensure_ascii=False, default=str)


class EventFormatter(logging.Formatter):
    """Human-readable variant: `LEVEL logger msg key=value ...`."""

    def format(self, record: logging.LogRecord) -> str:
        pairs = " ".join(f"{k}={v}" for k, v in event_fields(record).items())
        line = f"{record.levelname} {record.name} {record.getMessage()}"
        if pairs:
            line = f"{line} {pairs}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging() -> None:
    """
    Call once at process startup.
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    fmt = "text" if os.getenv("LOG_FORMAT", "json").lower() == "text" else "json"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": "formgate.core.logging_config.JsonFormatter"},
                "text": {"()": "formgate.core.logging_config.EventFormatter"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": fmt,
                    "stream": sys.stdout,
                }
            },
            "root": {"level": "WARNING", "handlers": ["console"]},
            "loggers": {
                "formgate": {"level": level, "handlers": ["console"], "propagate": False},
                "uvicorn": {"level": level, "handlers": ["console"], "propagate": False},
            },
        }
    )
