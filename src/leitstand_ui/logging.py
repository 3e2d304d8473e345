"""
Logging setup for the Leitstand UI backend.

Configures the root logger once, either with a plain text format or with one
JSON object per line for log collectors.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_STANDARD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_configured = False


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    log_format: str = "text"
    service_name: str = "leitstand-ui"

    @classmethod
    def from_settings(cls, settings: Any) -> "LoggingSettings":
        """Build logging settings from the application settings."""
        return cls(level=settings.log_level, log_format=settings.log_format)


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service_name,
            "message": record.getMessage(),
        }
        # Fields passed via extra=...
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(settings: LoggingSettings | None = None, force: bool = False) -> None:
    """
    Configure the root logger.

    Args:
        settings: Logging settings (defaults to LoggingSettings())
        force: Reconfigure even if logging was already set up
    """
    global _configured
    if _configured and not force:
        return

    settings = settings or LoggingSettings()

    handler = logging.StreamHandler(sys.stderr)
    if settings.log_format == "json":
        handler.setFormatter(JsonFormatter(settings.service_name))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(settings.level.upper())

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a named logger."""
    return logging.getLogger(name)
