"""
Time conversion utilities for subtitle filtering.

This module provides functions for:
- Converting SRT, ASS and WebVTT timestamps to integer milliseconds
- Parsing cue timing lines
- Formatting milliseconds for display
"""

import re
from typing import Tuple
from utils.logging_config import get_logger

logger = get_logger(__name__)

SRT_TIMING_PATTERN = re.compile(
    r'(\d{1,2}:\d{2}:\d{2}[,\.]\d{1,3})\s*-->\s*(\d{1,2}:\d{2}:\d{2}[,\.]\d{1,3})'
)
VTT_TIMING_PATTERN = re.compile(
    r'((?:\d{1,2}:)?\d{2}:\d{2}\.\d{3})\s*-->\s*((?:\d{1,2}:)?\d{2}:\d{2}\.\d{3})'
)


class TimeConverter:
    """Handles time format conversions for subtitles."""

    @staticmethod
    def time_to_milliseconds(time_str: str, format_type: str = 'srt') -> int:
        """
        Convert a timestamp string to milliseconds based on format type.

        Args:
            time_str: Time string to convert
            format_type: Format type ('srt', 'ass', or 'vtt')

        Returns:
            Time in milliseconds

        Raises:
            ValueError: If time string format is invalid

        Example:
            >>> TimeConverter.time_to_milliseconds("01:23:45,678", "srt")
            5025678
        """
        try:
            parts = time_str.strip().replace(',', '.').split(':')
            if len(parts) == 2 and format_type == 'vtt':
                # WebVTT allows MM:SS.mmm
                h, m, s = '0', parts[0], parts[1]
            elif len(parts) == 3:
                h, m, s = parts
            else:
                raise ValueError(f"expected H:MM:SS, got {len(parts)} fields")

            whole, _, fraction = s.partition('.')
            if format_type == 'ass':
                # ASS fractions are centiseconds
                fraction_ms = int(fraction.ljust(2, '0')[:2]) * 10 if fraction else 0
            else:
                fraction_ms = int(fraction.ljust(3, '0')[:3]) if fraction else 0

            return ((int(h) * 3600 + int(m) * 60 + int(whole)) * 1000) + fraction_ms

        except ValueError as e:
            logger.debug(f"Failed to parse time string '{time_str}' as {format_type}: {e}")
            raise ValueError(f"Invalid time format: {time_str}")

    @staticmethod
    def parse_srt_timestamp(timestamp_line: str) -> Tuple[int, int]:
        """
        Parse an SRT timing line to get start and end times in milliseconds.

        Args:
            timestamp_line: SRT timing line (e.g., "00:01:23,456 --> 00:01:26,789")

        Returns:
            Tuple of (start_ms, end_ms)

        Raises:
            ValueError: If timestamp format is invalid
        """
        match = SRT_TIMING_PATTERN.match(timestamp_line.strip())
        if not match:
            raise ValueError(f"Invalid SRT timestamp format: {timestamp_line}")

        start_str, end_str = match.groups()
        return (TimeConverter.time_to_milliseconds(start_str, 'srt'),
                TimeConverter.time_to_milliseconds(end_str, 'srt'))

    @staticmethod
    def parse_vtt_timestamp(timestamp_line: str) -> Tuple[int, int]:
        """
        Parse a WebVTT cue timing line, ignoring any cue settings.

        Args:
            timestamp_line: Timing line (e.g., "00:01.000 --> 00:04.000 align:start")

        Returns:
            Tuple of (start_ms, end_ms)

        Raises:
            ValueError: If timestamp format is invalid
        """
        match = VTT_TIMING_PATTERN.match(timestamp_line.strip())
        if not match:
            raise ValueError(f"Invalid WebVTT timestamp format: {timestamp_line}")

        start_str, end_str = match.groups()
        return (TimeConverter.time_to_milliseconds(start_str, 'vtt'),
                TimeConverter.time_to_milliseconds(end_str, 'vtt'))

    @staticmethod
    def milliseconds_to_readable(ms: int) -> str:
        """
        Convert milliseconds to readable format (HH:MM:SS.mmm).

        Args:
            ms: Time in milliseconds

        Returns:
            Readable time string

        Example:
            >>> TimeConverter.milliseconds_to_readable(3825678)
            '01:03:45.678'
        """
        if ms < 0:
            ms = 0
        hours = ms // 3600000
        ms %= 3600000
        minutes = ms // 60000
        ms %= 60000
        seconds = ms // 1000
        milliseconds = ms % 1000
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{milliseconds:03d}"

    @staticmethod
    def format_duration(ms: int) -> str:
        """
        Format a duration in milliseconds as a short human-readable string.

        Example:
            >>> TimeConverter.format_duration(3825500)
            '1h 3m 45.5s'
        """
        seconds = ms / 1000.0
        if seconds < 60:
            return f"{seconds:.1f}s"
        elif seconds < 3600:
            minutes = int(seconds // 60)
            return f"{minutes}m {seconds % 60:.1f}s"
        else:
            hours = int(seconds // 3600)
            remaining_seconds = seconds % 3600
            minutes = int(remaining_seconds // 60)
            return f"{hours}h {minutes}m {remaining_seconds % 60:.1f}s"
