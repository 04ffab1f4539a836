"""Logging configuration utilities for the server."""

import json
import logging
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from jserver.domain.connection_id import ConnectionLoggerAdapter

LOGGER_NAME = "jserver"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(connection_id)s] %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5

SENSITIVE_PATTERNS = [
    re.compile(r"(?i)(authorization|cookie|token|password|secret|api[_-]?key)"),
    re.compile(r"\b[A-Za-z0-9+/]{32,}={0,2}\b"),
]

# Keys copied from ``extra`` into the JSON document when present.
EXTRA_KEYS = (
    "client",
    "route",
    "method",
    "header",
    "status_code",
    "bytes_in",
    "bytes_out",
    "header_bytes",
    "provisional_body_bytes",
    "content_length",
    "limit",
    "duration_ms",
    "error_type",
    "error",
    "host",
    "port",
    "log_destination",
    "log_level",
    "socket_timeout",
    "shutdown_grace_seconds",
    "remaining_workers",
    "signal",
)


def redact_sensitive(value: str) -> str:
    """Replace values that look like credentials with a placeholder."""
    if not value:
        return value
    if any(pattern.search(value) for pattern in SENSITIVE_PATTERNS):
        return "[REDACTED]"
    return value


class ConnectionIdFilter(logging.Filter):  # pylint: disable=too-few-public-methods
    """Give records logged outside an adapter a placeholder connection id."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "connection_id"):
            record.connection_id = "-"
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per record with sorted keys."""

    def format(self, record: logging.LogRecord) -> str:
        document = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "connection_id": getattr(record, "connection_id", "-"),
            "component": getattr(record, "component", record.name),
            "message": record.getMessage(),
        }
        if hasattr(record, "event"):
            document["event"] = record.event

        for key in EXTRA_KEYS:
            if hasattr(record, key):
                value = getattr(record, key)
                if isinstance(value, str):
                    value = redact_sensitive(value)
                document[key] = value

        if record.exc_info:
            document["exception"] = self.formatException(record.exc_info)
        return json.dumps(document, sort_keys=True, default=str)


def _resolve_level(level_name: str) -> int:
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.INFO


def _build_handler(
    destination: Optional[str], level: int, use_json: bool
) -> logging.Handler:
    """Create a stdout or rotating file handler."""
    if destination and destination.lower() != "stdout":
        target_path = Path(destination)
        target_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(
            target_path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT
        )
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if use_json:
        handler.setFormatter(JsonFormatter(datefmt=DATE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    handler.addFilter(ConnectionIdFilter())
    return handler


def configure_logging(
    level: str = "INFO", destination: Optional[str] = None, use_json: bool = True
) -> ConnectionLoggerAdapter:
    """Install a single handler on the ``jserver`` logger and return an adapter."""
    logger = logging.getLogger(LOGGER_NAME)
    numeric_level = _resolve_level(level)
    logger.setLevel(numeric_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    logger.addHandler(_build_handler(destination, numeric_level, use_json))
    return ConnectionLoggerAdapter(logger, {})
