"""
Logging Configuration

Centralized logging setup for the calculator.
Supports structured JSON logging and per-operation IDs.
"""

import logging
import sys
import json
import uuid
from typing import Optional, Dict, Any
from contextvars import ContextVar

# Context variable holding the ID of the menu cycle being processed
_operation_id_ctx: ContextVar[Optional[str]] = ContextVar("operation_id", default=None)

_logging_configured = False

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED_ATTRS = {
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "levelname", "levelno", "lineno", "module", "msecs",
    "message", "msg", "name", "pathname", "process", "processName",
    "relativeCreated", "stack_info", "thread", "threadName", "taskName",
}


def get_operation_id() -> Optional[str]:
    """Get the current operation ID."""
    return _operation_id_ctx.get()


def set_operation_id(operation_id: Optional[str]) -> None:
    """Set the current operation ID."""
    _operation_id_ctx.set(operation_id)


def new_operation_id() -> str:
    """Start a new operation and return its ID."""
    operation_id = uuid.uuid4().hex[:8]
    set_operation_id(operation_id)
    return operation_id


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as a JSON string.
        """
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }

        operation_id = get_operation_id()
        if operation_id:
            log_data["operation_id"] = operation_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file to write logs to
        json_format: Whether to use JSON formatting
    """
    global _logging_configured

    # Avoid duplicate configuration
    if _logging_configured:
        return

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    root_logger = logging.getLogger("badcalc")
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Remove existing handlers to avoid duplicates
    root_logger.handlers = []

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler (optional)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Retry messages are ours to report
    logging.getLogger("tenacity").setLevel(logging.WARNING)

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name (will be prefixed with 'badcalc.')

    Returns:
        Configured logger instance
    """
    return logging.getLogger(f"badcalc.{name}")
