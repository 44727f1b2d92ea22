"""
Structured logging module with JSON formatting and correlation ID support.

This module provides:
- JSON log formatting for structured logging
- Component tags: diagnostic lines such as "[BOOK-INDEX] NHL: indexed 12/12 games"
  carry their bracketed component name as a separate "component" field so
  alerting can filter on it
- Correlation ID tracking via context variables (one ID per polling cycle or request)
- Logger factory for consistent logger creation
"""
import logging
import json
import re
import sys
from datetime import datetime
from typing import Any, Optional
from contextvars import ContextVar

# Context variable for correlation ID - shared across the application
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

# Leading "[COMPONENT]" tag on diagnostic log lines
COMPONENT_TAG_RE = re.compile(r"^\[([A-Z0-9][A-Z0-9_-]*)\]\s*")

_STANDARD_RECORD_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "asctime",
    "taskName",
}


def extract_component(message: str) -> Optional[str]:
    """
    Return the bracketed component tag of a log message, if any.

    Examples:
        >>> extract_component("[BOOK-INDEX] NHL: indexed 3/3 games")
        'BOOK-INDEX'
        >>> extract_component("plain message") is None
        True
    """
    match = COMPONENT_TAG_RE.match(message)
    return match.group(1) if match else None


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Outputs logs as JSON objects with the following fields:
    - timestamp: ISO 8601 formatted timestamp
    - level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - logger: Logger name
    - message: Log message
    - component: Bracketed component tag (if the message has one)
    - correlation_id: Cycle/request correlation ID (if available)
    - exception: Exception details (if an exception occurred)
    - extra: Any additional context from extra dict
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        message = record.getMessage()
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
            "correlation_id": correlation_id_var.get(),
        }

        component = extract_component(message)
        if component:
            log_data["component"] = component

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_keys = {
            k: v
            for k, v in record.__dict__.items()
            if k not in _STANDARD_RECORD_ATTRS
        }
        if extra_keys:
            log_data["extra"] = extra_keys

        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """
    Colored console formatter for development.

    Keeps the line-oriented "[COMPONENT] ..." shape of diagnostic messages
    readable while still including correlation IDs.
    """

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        level_color = self.COLORS.get(record.levelname, "")
        correlation_id = correlation_id_var.get()

        base_msg = f"{level_color}[{record.levelname}]{self.RESET} {record.name}: {record.getMessage()}"

        if correlation_id:
            base_msg += f" | correlation_id={correlation_id}"

        if record.exc_info:
            base_msg += "\n" + self.formatException(record.exc_info)

        return base_msg


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    handler: logging.Handler | None = None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, use JSON formatter. If False, use colored console formatter.
        handler: Optional custom handler. If None, creates StreamHandler to stdout.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)

    formatter = JSONFormatter() if json_output else ColoredFormatter()

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Reduce noise from third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__ from the calling module)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def set_correlation_id(correlation_id: str) -> Any:
    """
    Set the correlation ID in the context.

    Returns:
        Token that can be used to reset the context variable
    """
    return correlation_id_var.set(correlation_id)


def get_correlation_id() -> str:
    """Get the current correlation ID from the context."""
    return correlation_id_var.get()


def clear_correlation_id(token: Any) -> None:
    """Clear the correlation ID from the context."""
    correlation_id_var.reset(token)
