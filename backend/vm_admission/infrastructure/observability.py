"""Structured Logging — JSON formatter and setup for admission decisions.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (operation, error_code, field_path) surfaced when present
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging is idempotent: a second call replaces our handler instead of stacking
    - configure_logging reads Settings so the host process needs one call at startup
"""

import logging
import json
from datetime import datetime, timezone

from vm_admission.config import Settings, get_settings


_EXTRA_FIELDS: tuple[str, ...] = ("operation", "error_code", "field_path", "allowed")


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
        return json.dumps(log, ensure_ascii=False)


_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging for the admission process."""
    global _handler
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    if _handler is not None:
        logging.root.removeHandler(_handler)
    _handler = handler
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def configure_logging(settings: Settings | None = None) -> logging.Handler:
    """setup_logging from VM_ADMISSION_* settings; call once at process start."""
    settings = settings or get_settings()
    return setup_logging(settings.log_level, settings.log_format)
