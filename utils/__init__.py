"""
Utility modules.

This package contains shared utility functions and configurations:
- Logging configuration
- Shared constants for formats, encodings and terminal output
"""

from .logging_config import setup_logging, get_logger
from .constants import (
    SubtitleFormat,
    ENCODING_PRIORITY,
    UTF8_BOM,
    DEFAULT_SEPARATION_INTERVAL_MS,
    TIME_DECORATION,
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_DATE_FORMAT,
    APP_NAME,
    APP_VERSION,
    APP_DESCRIPTION,
)

__all__ = [
    'setup_logging',
    'get_logger',
    'SubtitleFormat',
    'ENCODING_PRIORITY',
    'UTF8_BOM',
    'DEFAULT_SEPARATION_INTERVAL_MS',
    'TIME_DECORATION',
    'DEFAULT_LOG_FORMAT',
    'DEFAULT_LOG_DATE_FORMAT',
    'APP_NAME',
    'APP_VERSION',
    'APP_DESCRIPTION',
]
