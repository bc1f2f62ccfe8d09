"""Structured logging configuration for eqsolver."""

import logging
import sys
from datetime import datetime
from typing import Any, Optional

ROOT_LOGGER_NAME = "eqsolver"

# Solve context passed through ``extra=``; rendered in this order when present
CONTEXT_FIELDS = ("algorithm", "method", "expression", "iteration")


def solve_context(**fields: Any) -> dict[str, Any]:
    """Build an ``extra`` mapping for a log call, dropping unset fields."""
    return {key: value for key, value in fields.items() if value is not None}


class StructuredFormatter(logging.Formatter):
    """Timestamp, level, logger name and message, then any solve context.

    ``2026-10-18T12:00:00 [INFO] eqsolver.equation: converged | algorithm=newton expression='x^2 - 2'``
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        context = []
        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                value = getattr(record, field)
                text = repr(value) if isinstance(value, str) else str(value)
                context.append(f"{field}={text}")
        if context:
            message = f"{message} | {' '.join(context)}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(
    level: str = "WARNING", log_file: Optional[str] = None
) -> logging.Logger:
    """Set up structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs (if None, logs to stderr)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Remove existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(StructuredFormatter())
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically module name)

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
