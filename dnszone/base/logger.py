"""
Structured logging for dnszone.

Provides a pre-configured logger that emits JSON-structured log records
with reconciliation context (provider, zone, zone id, operation) for easy
filtering in log aggregation tools.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

_CONTEXT_KEYS = ("request_id", "provider", "zone", "zone_id", "operation")


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Attach any extras injected via ZoneLogger.log
        for key in _CONTEXT_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        fields = getattr(record, "fields", None)
        if fields:
            log_entry.update(fields)
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry, default=str)


class ZoneLogger:
    """Convenience wrapper around :mod:`logging` carrying bound context.

    ``bind`` returns a new logger with extra fields attached, so a call
    site can narrow the context (``log.bind(zone_id=...)``) without
    affecting the parent.
    """

    def __init__(
        self,
        name: str = "dnszone",
        *,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)
        self.context: dict[str, Any] = dict(context or {})
        self.context.setdefault("request_id", uuid.uuid4().hex[:12])

    def bind(self, **fields: Any) -> ZoneLogger:
        """Return a child logger with *fields* added to the context."""
        child = ZoneLogger.__new__(ZoneLogger)
        child.logger = self.logger
        child.context = {**self.context, **fields}
        return child

    def log(self, level: int, message: str, *, exc_info: bool = False, **fields: Any) -> None:
        """Emit a structured log record with the bound context.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: Human-readable message.
            exc_info: Whether to include exception info.
            **fields: One-off fields for this record only.
        """
        merged = {**self.context, **fields}
        extra: dict[str, Any] = {key: merged.pop(key, None) for key in _CONTEXT_KEYS}
        extra["fields"] = merged
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log(logging.DEBUG, message, **kwargs)


# Module-level singleton
zone_logger = ZoneLogger()
