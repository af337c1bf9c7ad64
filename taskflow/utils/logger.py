"""
Logging Utility.

Structured logging: each record is written as one JSON object per line.
Every logger under the ``taskflow`` namespace, including plain
``logging.getLogger(__name__)`` loggers, goes through the same handler.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
ROOT_LOGGER = "taskflow"

# Never written to the logs, whatever the caller passes
REDACTED_KEYS = {"password", "password_hash", "token", "secret"}


def redact(params: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``params`` with sensitive values masked."""
    return {k: ("***" if k in REDACTED_KEYS else v) for k, v in params.items()}


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "service": record.name
        }
        log_data.update(getattr(record, "fields", {}))
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


def configure_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """Attach the JSON handler to the ``taskflow`` logger once."""
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level, logging.INFO))

    # Prevent adding handlers multiple times
    if not root.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(JsonFormatter())
        root.addHandler(console_handler)
    return root


class StructuredLogger:
    """Structured logger for the API."""

    def __init__(self, name: str, level: str = LOG_LEVEL):
        """
        Initialize structured logger.

        Args:
            name: Logger name, expected under the ``taskflow`` namespace
            level: Logging level name
        """
        configure_logging(level)
        self.logger = logging.getLogger(name)

    def _log_structured(self, level: int, message: str, **kwargs):
        """
        Log a structured message.

        Args:
            level: Logging level
            message: Log message
            **kwargs: Additional structured data
        """
        self.logger.log(level, message, extra={"fields": redact(kwargs)})

    def debug(self, message: str, **kwargs):
        self._log_structured(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log_structured(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log_structured(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log_structured(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with traceback."""
        self.logger.exception(message, extra={"fields": redact(kwargs)})


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name)
