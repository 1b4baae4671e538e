"""
Subtitle filter processor.

This module runs the filtering pipeline over a subtitle file:
read and parse the file, rewrite each entry before matching, test it against
the pattern, let the context window decide what to keep, and rewrite the kept
entries.
"""

from pathlib import Path
from typing import Iterable, List, Optional
from core.context_window import Entry, create_context_window
from core.filter_config import FilterConfig
from core.match_predicate import MatchPredicate
from core.subtitle_formats import SubtitleEvent, SubtitleFormatFactory
from core.text_rewriter import TextRewriter
from core.timing_utils import TimeConverter
from utils.logging_config import get_logger

logger = get_logger(__name__)


class SubtitleFilter:
    """Filters subtitle entries by pattern, keeping context around matches."""

    def __init__(self, config: FilterConfig):
        """
        Initialize the filter and compile every regular expression of the config.

        Args:
            config: Filter configuration

        Raises:
            ConfigurationError: If a pattern or replacement is invalid
        """
        self.config = config
        self.predicate = MatchPredicate(config.pattern)
        self.pre_rewriter = TextRewriter.from_rule(config.pre_replace, "pre-replace pattern")
        self.post_rewriter = TextRewriter.from_rule(config.post_replace, "post-replace pattern")

    def filter_events(self, events: Iterable[SubtitleEvent]) -> List[Entry]:
        """
        Filter parsed subtitle events.

        Events without text, and events whose text is emptied by the
        pre-replace rewrite, are skipped as if they were not in the file.

        Args:
            events: Subtitle events in file order

        Returns:
            Kept entries in file order, matches flagged with is_match

        Example:
            >>> subtitle_filter = SubtitleFilter(FilterConfig(pattern="hello"))
            >>> entries = subtitle_filter.filter_events(subtitle_file.events)
        """
        window = create_context_window(self.config.window, self.post_rewriter)
        index = 0
        skipped = 0
        matched = 0

        for event in events:
            if event.text is None:
                skipped += 1
                continue

            entry = Entry(start_ms=event.start_ms, end_ms=event.end_ms, text=event.text)

            if self.pre_rewriter is not None:
                entry.text = self.pre_rewriter(entry.text)
                if not entry.text:
                    skipped += 1
                    continue

            if self.predicate.keeps(entry.text):
                if self.predicate.has_pattern:
                    entry.is_match = True
                    matched += 1
                window.on_match(entry, index)
            else:
                window.on_non_match(entry, index)
            index += 1

        entries = window.finalize()

        logger.info(f"Kept {len(entries)} of {index} entries ({matched} matches, "
                    f"{skipped} entries without text skipped)")
        if entries:
            logger.debug(f"Kept entries span "
                         f"{TimeConverter.format_duration(entries[-1].end_ms - entries[0].start_ms)}")
        return entries

    def filter_content(self, content: str, extension: Optional[str] = None) -> List[Entry]:
        """
        Parse subtitle content and filter it.

        Args:
            content: Decoded subtitle content
            extension: File extension used to pick the format, sniffed when None

        Returns:
            Kept entries

        Raises:
            SubtitleFormatError: If the format cannot be detected
            SubtitleParseError: If the content cannot be parsed
        """
        subtitle_file = SubtitleFormatFactory.parse_content(content, extension)
        return self.filter_events(subtitle_file.events)

    def filter_file(self, file_path: Path) -> List[Entry]:
        """
        Read, parse and filter a subtitle file.

        Args:
            file_path: Path to the subtitle file

        Returns:
            Kept entries

        Raises:
            IOError: If the file cannot be read
            SubtitleFormatError: If the format cannot be detected
            SubtitleParseError: If the file cannot be parsed
        """
        subtitle_file = SubtitleFormatFactory.parse_file(file_path)
        logger.debug(f"Filtering {file_path.name} ({subtitle_file.format.value}, {subtitle_file.encoding})")
        return self.filter_events(subtitle_file.events)
