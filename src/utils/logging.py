"""Structured JSON logging configuration."""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any

REDACTED = "[REDACTED]"

# Extra fields whose values must never reach the log stream
SENSITIVE_KEYS = {"password", "password_hash", "passwordhash", "token", "authorization", "secret"}


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    # Standard LogRecord attributes that should not be included as extra fields
    _STANDARD_ATTRS = {
        'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
        'levelno', 'lineno', 'module', 'msecs', 'message', 'pathname',
        'process', 'processName', 'relativeCreated', 'thread', 'threadName',
        'exc_info', 'exc_text', 'stack_info', 'taskName'
    }

    def __init__(self, service: str | None = None):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.service:
            log_data["service"] = self.service

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # logger.info("msg", extra={"userId": "123"}) lands in record.__dict__
        for key, value in record.__dict__.items():
            if key in self._STANDARD_ATTRS or callable(value):
                continue
            if key.lower() in SENSITIVE_KEYS:
                value = REDACTED
            log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_structured_logging(level: str = "INFO", service: str | None = None):
    """Configure structured JSON logging for the application.

    Replaces root handlers and routes uvicorn access logs through the same
    formatter.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter(service=service))
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    uvicorn_access = logging.getLogger("uvicorn.access")
    uvicorn_access.handlers = [handler]
    uvicorn_access.setLevel(logging.WARNING)

    # Driver-level chatter is noise for request logs
    logging.getLogger("pymongo").setLevel(logging.WARNING)
