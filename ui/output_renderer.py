"""
Terminal output for filtered subtitle entries.

Kept entries are grouped into blocks: a new block starts whenever an entry
starts at least the separation interval after the previous entry ended.
Each block is framed by its start and end timecodes.
"""

import sys
from typing import List, Optional, TextIO
from core.context_window import Entry
from core.timing_utils import TimeConverter
from utils.constants import (
    ANSI_BRIGHT_BLUE,
    ANSI_BRIGHT_RED,
    ANSI_RESET,
    ANSI_YELLOW,
    DEFAULT_SEPARATION_INTERVAL_MS,
    TIME_DECORATION,
)


def group_into_blocks(entries: List[Entry], sep_interval_ms: int) -> List[List[Entry]]:
    """
    Split entries into display blocks.

    Args:
        entries: Kept entries in file order
        sep_interval_ms: Minimum gap (end of one entry to start of the next)
            that separates two blocks

    Returns:
        List of non-empty blocks, in order
    """
    blocks: List[List[Entry]] = []
    previous_end: Optional[int] = None

    for entry in entries:
        if previous_end is None or entry.start_ms - previous_end >= sep_interval_ms:
            blocks.append([])
        blocks[-1].append(entry)
        previous_end = entry.end_ms

    return blocks


class OutputRenderer:
    """Prints filtered entries grouped into timecoded blocks."""

    def __init__(self, use_colors: bool = True, hide_time: bool = False,
                 sep_interval_ms: int = DEFAULT_SEPARATION_INTERVAL_MS,
                 stream: Optional[TextIO] = None):
        """
        Initialize the renderer.

        Args:
            use_colors: Whether to color timecodes and matched lines
            hide_time: Whether to leave out block timecodes
            sep_interval_ms: Gap that starts a new block
            stream: Output stream (defaults to sys.stdout)
        """
        self.use_colors = use_colors
        self.hide_time = hide_time
        self.sep_interval_ms = sep_interval_ms
        self.stream = stream if stream is not None else sys.stdout

    def render_lines(self, entries: List[Entry]) -> List[str]:
        """
        Build the output lines for the entries.

        Args:
            entries: Kept entries in file order

        Returns:
            Lines to print, without trailing newlines
        """
        lines: List[str] = []

        for block_idx, block in enumerate(group_into_blocks(entries, self.sep_interval_ms)):
            if block_idx > 0:
                if not self.hide_time:
                    lines.append(self._format_timecode(previous_block[-1].end_ms))
                lines.append("")
            if not self.hide_time:
                lines.append(self._format_timecode(block[0].start_ms))

            for entry in block:
                lines.append(self._format_text(entry))
            previous_block = block

        if entries and not self.hide_time:
            lines.append(self._format_timecode(entries[-1].end_ms))

        return lines

    def render(self, entries: List[Entry]) -> None:
        """Print the entries to the output stream."""
        for line in self.render_lines(entries):
            print(line, file=self.stream)

    def _format_timecode(self, ms: int) -> str:
        timecode = TimeConverter.milliseconds_to_readable(ms)
        if not self.use_colors:
            return f"{TIME_DECORATION} {timecode} {TIME_DECORATION}"
        decoration = f"{ANSI_YELLOW}{TIME_DECORATION}{ANSI_RESET}"
        return f"{decoration} {ANSI_BRIGHT_BLUE}{timecode}{ANSI_RESET} {decoration}"

    def _format_text(self, entry: Entry) -> str:
        if entry.is_match and self.use_colors:
            return f"{ANSI_BRIGHT_RED}{entry.text}{ANSI_RESET}"
        return entry.text
