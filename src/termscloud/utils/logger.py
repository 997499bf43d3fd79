"""
Structured Logging Utility.

This module provides structured JSON logging so that request and LLM-call logs
can be queried by field (http_path, provider, duration_ms, cloud_id, ...).

Features:
- JSON format with consistent base fields
- Correlation IDs (request_id, cloud_id) for request tracing
- Performance metrics (duration, timing) via log_performance
- Log level based on environment (LOG_LEVEL, default INFO)

Usage:
    from termscloud.utils.logger import get_logger, log_performance

    logger = get_logger(__name__)
    logger.info("Message", extra={"extra_fields": {"cloud_id": "123"}})

    with log_performance("llm_call", provider="groq"):
        ...
"""

import json
import logging
import os
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

# Determine log level from environment
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL, logging.INFO)

# Global context for correlation IDs
_log_context: Dict[str, Any] = {}

# Attributes every LogRecord has; anything else was passed through ``extra``
_RESERVED_ATTRS = {
    "name",
    "msg",
    "args",
    "created",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "thread",
    "threadName",
    "taskName",
    "exc_info",
    "exc_text",
    "stack_info",
    "extra_fields",
}


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logs.

    Formats log records as JSON with the base fields, correlation IDs, the
    ``extra_fields`` dict passed by callers and any other custom attributes.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add correlation IDs from global context
        for key in ("request_id", "cloud_id"):
            if key in _log_context:
                log_data[key] = _log_context[key]

        # Add custom fields from extra parameter
        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            log_data.update(extra_fields)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
            log_data["exception_type"] = (
                record.exc_info[0].__name__ if record.exc_info[0] else None
            )

        return json.dumps(log_data, default=str)


def configure_logging(level: Optional[int] = None) -> None:
    """Configure the root logger with the JSON formatter.

    Args:
        level: Log level to use (defaults to LOG_LEVEL from the environment).
    """
    level = level or LOG_LEVEL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicate logs
    root_logger.handlers = []

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())

    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with structured logging support.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance configured for structured JSON logging.
    """
    return logging.getLogger(name)


def set_correlation_id(
    request_id: Optional[str] = None, cloud_id: Optional[str] = None
) -> None:
    """Set correlation IDs that are added to all subsequent log records.

    Args:
        request_id: Request ID (from the X-Request-ID header).
        cloud_id: Cloud session the request operates on.
    """
    if request_id:
        _log_context["request_id"] = request_id
    if cloud_id:
        _log_context["cloud_id"] = cloud_id


def clear_correlation_ids() -> None:
    """Clear correlation IDs from log context."""
    _log_context.clear()


@contextmanager
def log_performance(operation: str, **extra_fields):
    """Context manager for logging operation performance.

    Logs start, completion (or failure) and duration of an operation.
    Exceptions are logged and re-raised.

    Args:
        operation: Operation name (e.g., "llm_call").
        **extra_fields: Additional fields to include in log records.

    Example:
        with log_performance("llm_call", provider="groq"):
            text = call_llm("groq", prompt)
    """
    start_time = time.time()
    logger = get_logger(__name__)

    logger.info(
        f"Starting {operation}",
        extra={"extra_fields": {"operation": operation, **extra_fields}},
    )

    try:
        yield
    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        logger.error(
            f"Failed {operation}",
            extra={
                "extra_fields": {
                    "operation": operation,
                    "duration_ms": round(duration_ms, 2),
                    "status": "error",
                    "error": str(e),
                    "error_type": type(e).__name__,
                    **extra_fields,
                }
            },
        )
        raise

    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        f"Completed {operation}",
        extra={
            "extra_fields": {
                "operation": operation,
                "duration_ms": round(duration_ms, 2),
                "status": "success",
                **extra_fields,
            }
        },
    )
