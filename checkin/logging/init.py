from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Logging initialization with labeled prefixes.

Every line is written as ``LABEL message`` with the labels
INFO|WARN|ERROR|SUMMARY (plus DEBUG/CRITICAL). SUMMARY is a custom level
used for the one-line import summary.

The application logger is the package logger ``checkin``: module loggers
created with ``logging.getLogger(__name__)`` inside the package propagate to
it and share its handler.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "set_debug",
    "reset_logging",
]

LOGGER_NAME = "checkin"

# between INFO=20 and WARNING=30
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter that prefixes each message with its level label."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        text = f"{label} {record.getMessage()}"
        if record.exc_info:
            # tracebacks only reach the output in debug runs
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text


def setup_logging(stream: TextIO | None = None, level: int = logging.INFO) -> logging.Logger:
    """Configure the ``checkin`` logger once and return it.

    Args:
        stream: Output stream (default: ``sys.stdout`` at call time)
        level: Initial level for the logger and its handler

    Later calls return the configured logger unchanged until
    :func:`reset_logging` is called. Propagation to the root logger is off so
    that an embedding application's handlers do not print every line twice.
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for old in logger.handlers[:]:
        logger.removeHandler(old)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    """Log ``message`` at SUMMARY level (the formatter adds the label)."""
    get_logger().log(SUMMARY_LEVEL, message)


def set_debug() -> None:
    """Lower the application logger and its handlers to DEBUG."""
    logger = get_logger()
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG)


def reset_logging() -> None:
    """Forget the configured logger so the next setup binds a fresh stream (tests)."""
    global _logger
    _logger = None
