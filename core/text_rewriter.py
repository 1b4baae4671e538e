"""
Regex-based text rewriting for subtitle entries.

Rewriters are plain callables over strings so they can be used and tested
without the context window machinery.
"""

import re
from typing import Optional, Pattern
from core.filter_config import ConfigurationError, ReplaceRule
from utils.logging_config import get_logger

logger = get_logger(__name__)


def compile_pattern(pattern: str, option_name: str = "pattern") -> Pattern:
    """
    Compile a regular expression, reporting syntax errors as configuration errors.

    Args:
        pattern: Regular expression source
        option_name: Name of the option the pattern came from, for the error message

    Returns:
        Compiled pattern

    Raises:
        ConfigurationError: If the pattern is not a valid regular expression
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Bad {option_name} '{pattern}': {e}")


class TextRewriter:
    """Replaces every occurrence of a pattern in a text."""

    def __init__(self, pattern: str, replacement: str, option_name: str = "replace pattern"):
        """
        Initialize the rewriter.

        Args:
            pattern: Regular expression to search for
            replacement: Replacement template (``\\1`` and ``\\g<name>`` refer to groups)
            option_name: Name of the option, used in error messages

        Raises:
            ConfigurationError: If the pattern or the replacement template is invalid
        """
        self.pattern = compile_pattern(pattern, option_name)
        self.replacement = replacement

        # Group references in the template are resolved when sub() is first called
        try:
            self.pattern.sub(self.replacement, "")
        except (re.error, IndexError) as e:
            raise ConfigurationError(f"Bad replacement '{replacement}' for {option_name}: {e}")

        logger.debug(f"Compiled {option_name}: {self!r}")

    @classmethod
    def from_rule(cls, rule: Optional[ReplaceRule],
                  option_name: str = "replace pattern") -> Optional['TextRewriter']:
        """Build a rewriter for an optional rule; None stays None."""
        if rule is None:
            return None
        return cls(rule.pattern, rule.replacement, option_name)

    def __call__(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)

    def __repr__(self) -> str:
        return f"TextRewriter({self.pattern.pattern!r} -> {self.replacement!r})"

