"""
Logging setup for tracetint.

Usage:
    from tracetint.log import setup_logging

    # Once at startup
    setup_logging(level="DEBUG", log_file="/tmp/tracetint.log")

    # In any module
    logger = logging.getLogger(__name__)
"""

import logging
import sys
from typing import Optional

LOGGER_NAME = "tracetint"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    console: bool = True,
) -> logging.Logger:
    """
    Configure the tracetint logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        level: Log level name ('DEBUG', 'INFO', 'WARNING', ...)
        log_file: Optional path to also log to
        console: Log to stderr

    Returns:
        The configured package logger
    """
    numeric_level = getattr(logging, str(level).upper(), logging.WARNING)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    if console:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setLevel(numeric_level)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
