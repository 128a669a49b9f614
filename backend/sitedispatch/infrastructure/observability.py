"""Structured Logging: JSON formatter, setup, and the default fault sink.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (method, path, status_code, error_type) surfaced when present
    - setup_logging is idempotent: lifespan and CLI may both call it
    - LoggingFaultSink emits exactly one ERROR record per fault

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - uvicorn loggers routed through the same root handler (log_config=None)
"""

import json
import logging
from datetime import datetime, timezone

from sitedispatch.core.outcomes import FaultDetail

_EXTRA_FIELDS = (
    "method", "path", "status_code", "error_type", "error_code",
    "handler", "dispatch_state",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        elif record.__dict__.get("traceback"):
            log["exception"] = record.__dict__["traceback"]
        return json.dumps(log, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable format; appends a fault traceback carried as an extra."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        tb = record.__dict__.get("traceback")
        if tb and not record.exc_info:
            text = f"{text}\n{tb.rstrip()}"
        return text


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if getattr(root, "_sitedispatch_configured", False):
        return
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root._sitedispatch_configured = True


class LoggingFaultSink:
    """Records handler faults to the 'sitedispatch.faults' logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger("sitedispatch.faults")

    def record(self, fault: FaultDetail) -> None:
        self._logger.error(
            f"Handler {fault.handler_name} failed on "
            f"{fault.request.method} {fault.request.path}: "
            f"{fault.error_type}: {fault.message}",
            extra={
                "method": fault.request.method,
                "path": fault.request.path,
                "error_type": fault.error_type,
                "handler": fault.handler_name,
                "traceback": fault.traceback,
            },
        )
