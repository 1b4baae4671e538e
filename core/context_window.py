"""
Context window accumulation for subtitle filtering.

This module decides, in one forward pass over the entries, which entries are
shown around the matches. Two strategies are provided:
- EntryCountWindow: N entries before and after each match
- DurationWindow: entries within a number of milliseconds of each match

Both keep a buffer of candidate before-context entries that is flushed when
the next match arrives, and emit after-context entries directly. Output is
always an ordered subsequence of the input.
"""

from collections import deque
from dataclasses import dataclass
from typing import Callable, List, Optional
from core.filter_config import (
    DurationWindowConfig,
    EntryCountWindowConfig,
    WindowConfig,
)
from utils.logging_config import get_logger

logger = get_logger(__name__)

PostProcess = Callable[[str], str]


@dataclass
class Entry:
    """One timestamped subtitle line going through the filter."""
    start_ms: int
    end_ms: int
    text: str
    is_match: bool = False


class ContextWindow:
    """
    Base class for context window strategies.

    Subclasses implement on_match() and on_non_match(); entries are handed
    over in source order together with their 0-based position in the
    filtered stream. Entries are passed through the optional post_process
    rewrite as they are emitted.
    """

    def __init__(self, post_process: Optional[PostProcess] = None):
        self.post_process = post_process
        self.output: List[Entry] = []

    def on_match(self, entry: Entry, index: int) -> None:
        """Flush the pending before-context and emit the kept entry."""
        raise NotImplementedError

    def on_non_match(self, entry: Entry, index: int) -> None:
        """Emit the entry as after-context, buffer it as before-context, or drop it."""
        raise NotImplementedError

    def finalize(self) -> List[Entry]:
        """
        End the pass and return the emitted entries.

        Buffered before-context that was never followed by a match is dropped.
        """
        self._clear_pending()
        return self.output

    def _emit(self, entry: Entry) -> None:
        if self.post_process is not None:
            entry.text = self.post_process(entry.text)
        self.output.append(entry)

    def _clear_pending(self) -> None:
        raise NotImplementedError


class EntryCountWindow(ContextWindow):
    """Keeps a fixed number of entries before and after each match."""

    def __init__(self, before: int, after: int, post_process: Optional[PostProcess] = None):
        super().__init__(post_process)
        self.before = before
        self.after = after
        self.last_match_index: Optional[int] = None
        # Sliding window of the most recent before-context candidates
        self.pending_before: deque = deque(maxlen=before or None)

    def on_match(self, entry: Entry, index: int) -> None:
        while self.pending_before:
            self._emit(self.pending_before.popleft())
        self._emit(entry)
        self.last_match_index = index

    def on_non_match(self, entry: Entry, index: int) -> None:
        if self.last_match_index is not None and index <= self.last_match_index + self.after:
            # The after-window continues, nothing buffered can be older context
            self.pending_before.clear()
            self._emit(entry)
        elif self.before >= 1:
            self.pending_before.append(entry)

    def _clear_pending(self) -> None:
        self.pending_before.clear()


class DurationWindow(ContextWindow):
    """
    Keeps entries close in time to each match.

    An entry is after-context when it starts at most after_ms after the end
    of the last match, and before-context when it ends strictly less than
    before_ms before the start of the next match. Since the next match is
    unknown while buffering, candidates are only pruned when a match flushes
    them.
    """

    def __init__(self, before_ms: int, after_ms: int, post_process: Optional[PostProcess] = None):
        super().__init__(post_process)
        self.before_ms = before_ms
        self.after_ms = after_ms
        self.last_match_end_ms: Optional[int] = None
        self.pending_before: List[Entry] = []

    def on_match(self, entry: Entry, index: int) -> None:
        dropped = 0
        for pending in self.pending_before:
            if entry.start_ms - pending.end_ms < self.before_ms:
                self._emit(pending)
            else:
                dropped += 1
        if dropped:
            logger.debug(f"Dropped {dropped} buffered entries outside {self.before_ms}ms before-context")
        self.pending_before = []

        self._emit(entry)
        self.last_match_end_ms = entry.end_ms

    def on_non_match(self, entry: Entry, index: int) -> None:
        if (self.last_match_end_ms is not None
                and entry.start_ms - self.last_match_end_ms <= self.after_ms):
            self.pending_before = []
            self._emit(entry)
        else:
            self.pending_before.append(entry)

    def _clear_pending(self) -> None:
        self.pending_before = []


def create_context_window(window: WindowConfig,
                          post_process: Optional[PostProcess] = None) -> ContextWindow:
    """
    Create the context window strategy for a window configuration.

    Args:
        window: Entry-count or duration window configuration
        post_process: Rewrite applied to the text of every emitted entry

    Returns:
        A fresh ContextWindow for one pass

    Raises:
        TypeError: If the configuration type is unknown
    """
    if isinstance(window, DurationWindowConfig):
        return DurationWindow(window.before_ms, window.after_ms, post_process)
    if isinstance(window, EntryCountWindowConfig):
        return EntryCountWindow(window.before, window.after, post_process)
    raise TypeError(f"Unknown window configuration: {window!r}")
