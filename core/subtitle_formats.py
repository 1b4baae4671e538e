"""
Subtitle format handlers and data structures.

This module provides:
- Core data structures for subtitle events and files
- Format detection from file extension or content
- Parsers for SRT, WebVTT and ASS/SSA producing millisecond timings
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from utils.constants import SubtitleFormat
from utils.logging_config import get_logger
from core.encoding_detection import EncodingDetector
from core.timing_utils import TimeConverter, SRT_TIMING_PATTERN

logger = get_logger(__name__)

BLOCK_SEPARATOR = re.compile(r'\n[ \t]*\n')
VTT_SKIPPED_BLOCKS = ('NOTE', 'STYLE', 'REGION')


class SubtitleFormatError(ValueError):
    """Raised when the subtitle format of a file cannot be determined."""
    pass


class SubtitleParseError(ValueError):
    """Raised when subtitle content cannot be parsed into events."""
    pass


@dataclass
class SubtitleEvent:
    """Represents a single subtitle event/cue as read from the source file."""
    start_ms: int
    end_ms: int
    text: Optional[str]            # None when the cue carries no text
    style: Optional[str] = None    # Style name (for ASS/SSA)


@dataclass
class SubtitleFile:
    """Represents a parsed subtitle file."""
    path: Optional[Path]
    format: SubtitleFormat
    events: List[SubtitleEvent] = field(default_factory=list)
    encoding: str = 'utf-8'


class SubtitleParser:
    """Base class for subtitle format parsers."""

    format_name = ""

    @classmethod
    def parse(cls, content: str) -> List[SubtitleEvent]:
        """Parse subtitle content into events, in file order."""
        raise NotImplementedError

    @staticmethod
    def clean_subtitle_text(text: str) -> str:
        """Turn ASS hard line breaks into newlines and strip surrounding blanks."""
        text = text.replace('\\N', '\n').replace('\\n', '\n')
        return text.strip()

    @staticmethod
    def split_blocks(content: str) -> List[str]:
        """Split content into blank-line separated blocks."""
        content = content.replace('\r\n', '\n').replace('\r', '\n').strip()
        if not content:
            return []
        return [block for block in BLOCK_SEPARATOR.split(content) if block.strip()]


class SRTParser(SubtitleParser):
    """Parser for SRT subtitle format."""

    format_name = "SRT"

    @classmethod
    def parse(cls, content: str) -> List[SubtitleEvent]:
        events = []

        for block_idx, block in enumerate(cls.split_blocks(content)):
            lines = block.strip().split('\n')

            # Skip index number if present
            if lines[0].strip().isdigit():
                lines = lines[1:]
            if not lines:
                continue

            time_line = lines[0].strip()
            try:
                start_ms, end_ms = TimeConverter.parse_srt_timestamp(time_line)
            except ValueError as e:
                logger.warning(f"Invalid timestamp in block {block_idx}: {time_line} - {e}")
                continue

            text = '\n'.join(lines[1:]).strip()
            events.append(SubtitleEvent(
                start_ms=start_ms,
                end_ms=end_ms,
                text=text or None
            ))

        return events


class VTTParser(SubtitleParser):
    """Parser for WebVTT subtitle format."""

    format_name = "WebVTT"

    @classmethod
    def parse(cls, content: str) -> List[SubtitleEvent]:
        events = []

        for block in cls.split_blocks(content):
            lines = block.strip().split('\n')
            first = lines[0].strip()

            # Header and non-cue blocks
            if first.startswith('WEBVTT') or first.split(' ', 1)[0] in VTT_SKIPPED_BLOCKS:
                continue

            # Cue identifier is optional, the timing line is the first with an arrow
            time_line_idx = next((i for i, line in enumerate(lines) if '-->' in line), -1)
            if time_line_idx == -1:
                logger.debug(f"Skipping WebVTT block without timing: {first}")
                continue

            try:
                start_ms, end_ms = TimeConverter.parse_vtt_timestamp(lines[time_line_idx])
            except ValueError as e:
                logger.warning(f"Invalid WebVTT cue timing: {lines[time_line_idx]} - {e}")
                continue

            text = '\n'.join(lines[time_line_idx + 1:]).strip()
            events.append(SubtitleEvent(
                start_ms=start_ms,
                end_ms=end_ms,
                text=text or None
            ))

        return events


class ASSParser(SubtitleParser):
    """Parser for ASS/SSA subtitle format."""

    format_name = "ASS/SSA"

    # Field order used when the [Events] section has no Format line
    DEFAULT_FIELDS = ['layer', 'start', 'end', 'style', 'name',
                      'marginl', 'marginr', 'marginv', 'effect', 'text']

    @classmethod
    def parse(cls, content: str) -> List[SubtitleEvent]:
        events = []
        format_fields: List[str] = []
        in_events = False

        for line in content.split('\n'):
            line = line.strip()

            if re.match(r'^\[.*\]$', line):
                in_events = line.lower() == '[events]'
                continue
            if not in_events:
                continue

            lowered = line.lower()
            if lowered.startswith('format:'):
                format_fields = [f.strip().lower() for f in line.split(':', 1)[1].split(',')]
            elif lowered.startswith('dialogue:'):
                try:
                    events.append(cls._parse_dialogue_line(line, format_fields or cls.DEFAULT_FIELDS))
                except (ValueError, IndexError) as e:
                    logger.debug(f"Failed to parse dialogue line: {line} - {e}")

        return events

    @classmethod
    def _parse_dialogue_line(cls, line: str, format_fields: List[str]) -> SubtitleEvent:
        """
        Parse a dialogue line from ASS format.

        Args:
            line: Dialogue line to parse
            format_fields: List of field names from the Format line

        Returns:
            SubtitleEvent for the line

        Raises:
            ValueError: If the line lacks timing fields or has bad timestamps
        """
        # Text is the last field and may contain commas
        parts = line.split(':', 1)[1].split(',', len(format_fields) - 1)

        try:
            start_idx = format_fields.index('start')
            end_idx = format_fields.index('end')
            text_idx = format_fields.index('text')
        except ValueError:
            raise ValueError(f"Format line lacks start/end/text fields: {format_fields}")
        style_idx = format_fields.index('style') if 'style' in format_fields else None

        text = parts[text_idx] if text_idx < len(parts) else ""
        text = cls.clean_subtitle_text(text)

        return SubtitleEvent(
            start_ms=TimeConverter.time_to_milliseconds(parts[start_idx], 'ass'),
            end_ms=TimeConverter.time_to_milliseconds(parts[end_idx], 'ass'),
            text=text or None,
            style=parts[style_idx].strip() if style_idx is not None and style_idx < len(parts) else None
        )


class SubtitleFormatFactory:
    """Factory class for detecting formats and parsing subtitle content."""

    _parsers = {
        SubtitleFormat.SRT: SRTParser,
        SubtitleFormat.VTT: VTTParser,
        SubtitleFormat.ASS: ASSParser,
        SubtitleFormat.SSA: ASSParser,
    }

    @classmethod
    def get_parser(cls, format_type: SubtitleFormat) -> type:
        """
        Get the parser class for the specified format.

        Raises:
            SubtitleFormatError: If format is not supported
        """
        if format_type not in cls._parsers:
            raise SubtitleFormatError(f"Unsupported subtitle format: {format_type}")
        return cls._parsers[format_type]

    @classmethod
    def detect_format(cls, extension: Optional[str], content: str) -> SubtitleFormat:
        """
        Detect the subtitle format from the file extension, falling back to
        the content when the extension is missing or unknown.

        Args:
            extension: File extension (with or without dot), may be None
            content: Decoded file content

        Returns:
            SubtitleFormat enum value

        Raises:
            SubtitleFormatError: If neither extension nor content identify a format
        """
        if extension:
            try:
                return SubtitleFormat.from_extension(extension)
            except ValueError:
                logger.debug(f"Unknown extension '{extension}', inspecting content")

        head = content.lstrip('\ufeff \t\n')
        if head.startswith('WEBVTT'):
            return SubtitleFormat.VTT
        if re.search(r'^\[(Script Info|Events)\]', content, re.MULTILINE | re.IGNORECASE):
            return SubtitleFormat.ASS
        if SRT_TIMING_PATTERN.search(content):
            return SubtitleFormat.SRT

        raise SubtitleFormatError("Couldn't detect subtitle format")

    @classmethod
    def parse_content(cls, content: str, extension: Optional[str] = None,
                      path: Optional[Path] = None, encoding: str = 'utf-8') -> SubtitleFile:
        """
        Parse decoded subtitle content.

        Args:
            content: Decoded file content
            extension: File extension used for format detection
            path: Originating file, for reporting
            encoding: Encoding the content was decoded with

        Returns:
            SubtitleFile object

        Raises:
            SubtitleFormatError: If the format cannot be detected
            SubtitleParseError: If non-empty content yields no events
        """
        format_type = cls.detect_format(extension, content)
        parser = cls.get_parser(format_type)
        events = parser.parse(content)

        name = path.name if path else "<content>"
        if not events and content.strip():
            raise SubtitleParseError(f"Couldn't parse {parser.format_name} subtitles from {name}")

        logger.info(f"Parsed {len(events)} events from {parser.format_name} file: {name}")
        return SubtitleFile(path=path, format=format_type, events=events, encoding=encoding)

    @classmethod
    def parse_file(cls, file_path: Path) -> SubtitleFile:
        """
        Read and parse a subtitle file, detecting encoding and format.

        Args:
            file_path: Path to the subtitle file

        Returns:
            SubtitleFile object

        Raises:
            IOError: If file cannot be read
            SubtitleFormatError: If format is not supported
            SubtitleParseError: If the file has no parsable events
        """
        content, encoding = EncodingDetector.read_file_with_encoding(file_path)
        return cls.parse_content(content, file_path.suffix or None, file_path, encoding)
