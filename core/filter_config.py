"""
Run configuration for subtitle filtering.

A run uses exactly one context window: either a count of neighbouring
entries or a duration in milliseconds around each match.
"""

from dataclasses import dataclass
from typing import Optional, Union


class ConfigurationError(ValueError):
    """Raised when the filter configuration is invalid."""
    pass


@dataclass(frozen=True)
class ReplaceRule:
    """A regex substitution applied to entry text."""
    pattern: str
    replacement: str


@dataclass(frozen=True)
class EntryCountWindowConfig:
    """Context measured in number of neighbouring entries."""
    before: int = 0
    after: int = 0

    def __post_init__(self):
        if self.before < 0 or self.after < 0:
            raise ConfigurationError(
                f"Context entry counts must be non-negative (before={self.before}, after={self.after})"
            )


@dataclass(frozen=True)
class DurationWindowConfig:
    """Context measured in milliseconds around a match."""
    before_ms: int = 0
    after_ms: int = 0

    def __post_init__(self):
        if self.before_ms < 0 or self.after_ms < 0:
            raise ConfigurationError(
                f"Context durations must be non-negative (before={self.before_ms}ms, after={self.after_ms}ms)"
            )


WindowConfig = Union[EntryCountWindowConfig, DurationWindowConfig]


@dataclass(frozen=True)
class FilterConfig:
    """Immutable configuration of one filtering run."""
    window: WindowConfig = EntryCountWindowConfig()
    pattern: Optional[str] = None
    pre_replace: Optional[ReplaceRule] = None
    post_replace: Optional[ReplaceRule] = None
