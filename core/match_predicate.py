"""
Pattern test deciding which subtitle entries are direct matches.
"""

from typing import Optional
from core.text_rewriter import compile_pattern


class MatchPredicate:
    """Tests entry text against an optional pattern."""

    def __init__(self, pattern: Optional[str] = None):
        """
        Args:
            pattern: Regular expression searched for in entry text. None keeps
                every entry without flagging any of them as a match.

        Raises:
            ConfigurationError: If the pattern is not a valid regular expression
        """
        self.pattern = compile_pattern(pattern) if pattern is not None else None

    @property
    def has_pattern(self) -> bool:
        return self.pattern is not None

    def matches(self, text: str) -> bool:
        """True if the pattern occurs anywhere in the text. Always False without a pattern."""
        if self.pattern is None:
            return False
        return self.pattern.search(text) is not None

    def keeps(self, text: str) -> bool:
        """True if the entry is kept on its own, i.e. it matches or no pattern is set."""
        return self.pattern is None or self.matches(text)
