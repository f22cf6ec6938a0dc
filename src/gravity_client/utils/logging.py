"""Centralized logging helpers for the Gravity client."""

import logging
from enum import Enum
from typing import Any, Dict, Optional

LOGGER_PREFIX = "gravity-client"


class LogLevel(str, Enum):
    """Log level enum for the Gravity client."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: Logger name (typically module name)

    Returns:
        Logger instance
    """
    # Ensure all loggers hang off the package logger
    if not name.startswith(LOGGER_PREFIX):
        if name != "__main__":
            name = f"{LOGGER_PREFIX}.{name}"
        else:
            name = LOGGER_PREFIX

    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: Optional[BaseException] = None,
    level: LogLevel = LogLevel.ERROR,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Log an exception with consistent formatting.

    Args:
        logger: Logger instance
        message: Error message
        exc: Exception object (if available)
        level: Log level (default: ERROR)
        extra: Additional context to include in the log
    """
    log_method = getattr(logger, level.lower())

    if exc is not None:
        if level in (LogLevel.ERROR, LogLevel.CRITICAL):
            logger.exception(f"{message}: {exc}", extra=extra)
        else:
            log_method(f"{message}: {exc}", extra=extra)
    else:
        log_method(message, extra=extra)


# A library leaves handler configuration to the application
logging.getLogger(LOGGER_PREFIX).addHandler(logging.NullHandler())
