"""
Logging configuration for the subtitle filter.

This module provides centralized logging setup with colored level names,
configurable verbosity, and optional file output. Console diagnostics go to
stderr by default so they never interleave with filtered subtitles on stdout.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO
from .constants import DEFAULT_LOG_FORMAT, DEFAULT_LOG_DATE_FORMAT

ROOT_LOGGER_NAME = "subfilter"


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name for terminal output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record with a colored level name.

        The record is copied so that other handlers (e.g. the log file)
        still see the plain level name.

        Args:
            record: Log record to format

        Returns:
            Formatted log message with colors
        """
        colored_record = logging.makeLogRecord(record.__dict__)
        log_color = self.COLORS.get(record.levelname, self.RESET)
        colored_record.levelname = f"{log_color}{record.levelname}{self.RESET}"
        return super().format(colored_record)


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    use_colors: bool = True,
    logger_name: str = ROOT_LOGGER_NAME,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Set up logging with appropriate level and formatting.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO)
        log_file: Optional path to log file for file output
        use_colors: Whether to use colored level names on a terminal
        logger_name: Name for the logger instance
        stream: Console stream (defaults to sys.stderr)

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging(logging.DEBUG, Path("subfilter.log"))
        >>> logger.info("Filtering started")
    """
    if stream is None:
        stream = sys.stderr

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(level)

    if use_colors and hasattr(stream, 'isatty') and stream.isatty():
        console_formatter = ColoredFormatter(
            DEFAULT_LOG_FORMAT,
            datefmt=DEFAULT_LOG_DATE_FORMAT
        )
    else:
        console_formatter = logging.Formatter(
            DEFAULT_LOG_FORMAT,
            datefmt=DEFAULT_LOG_DATE_FORMAT
        )

    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            DEFAULT_LOG_FORMAT,
            datefmt=DEFAULT_LOG_DATE_FORMAT
        ))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger that propagates to the application logger.

    Module names (``core.subtitle_formats``) are placed under the
    ``subfilter`` namespace so a single setup_logging() call configures
    every module.

    Args:
        name: Logger name, usually ``__name__``

    Returns:
        Logger instance
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)

