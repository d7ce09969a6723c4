"""Structured logging configuration.

Diagnostics go to stderr so the run summary printed on stdout stays
machine-readable. structlog is preferred; when it is not installed the stdlib adapter
below accepts the same keyword fields and writes the same sorted JSON
event lines.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_STRUCTLOG_CONFIGURED = False
_FIELDS_ATTRIBUTE = "keysnap_fields"
_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog or stdlib logger with structured output.
    """
    try:
        import structlog
    except ImportError:
        return _get_standard_logger(name)

    _configure_structlog(structlog)
    return structlog.get_logger(name)


def _configure_structlog(structlog: Any) -> None:
    """Configure structlog processors once per process."""
    global _STRUCTLOG_CONFIGURED
    if _STRUCTLOG_CONFIGURED:
        return
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
    _STRUCTLOG_CONFIGURED = True


def _get_standard_logger(name: str) -> Any:
    """Create a stdlib logger writing JSON event lines to stderr.

    Args:
        name: Logger name.

    Returns:
        Structured adapter around a standard logger.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_JsonEventFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return _StructuredStandardLogger(logger)


class _StructuredStandardLogger:
    """Stdlib logger adapter that accepts structured keyword fields."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def debug(self, event: str, **fields: object) -> None:
        """Log a debug-level structured event."""
        self._logger.debug(event, extra={_FIELDS_ATTRIBUTE: fields})

    def info(self, event: str, **fields: object) -> None:
        """Log an info-level structured event."""
        self._logger.info(event, extra={_FIELDS_ATTRIBUTE: fields})

    def warning(self, event: str, **fields: object) -> None:
        """Log a warning-level structured event."""
        self._logger.warning(event, extra={_FIELDS_ATTRIBUTE: fields})

    def error(self, event: str, **fields: object) -> None:
        """Log an error-level structured event."""
        self._logger.error(event, extra={_FIELDS_ATTRIBUTE: fields})


class _JsonEventFormatter(logging.Formatter):
    """Render records in the same JSON line shape as the structlog renderer."""

    def format(self, record: logging.LogRecord) -> str:
        fields = getattr(record, _FIELDS_ATTRIBUTE, {})
        return _format_event(record.getMessage(), record.levelname.lower(), record.created, fields)


def _format_event(
    event: str,
    level: str,
    created: float,
    fields: dict[str, object],
) -> str:
    """Render a structured event line for standard logging.

    Args:
        event: Event name.
        level: Lower-case level name.
        created: Record creation time as a POSIX timestamp.
        fields: Event fields.

    Returns:
        JSON-encoded event string with sorted keys.
    """
    timestamp = datetime.fromtimestamp(created, tz=timezone.utc).strftime(_TIMESTAMP_FORMAT)
    payload = {**fields, "event": event, "level": level, "timestamp": timestamp}
    return json.dumps(payload, sort_keys=True, default=str)
