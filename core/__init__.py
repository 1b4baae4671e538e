"""
Core subtitle filtering modules.

This package contains the fundamental components for subtitle filtering:
- Subtitle format detection and parsing (SRT, ASS, VTT)
- Encoding detection for reading subtitle files
- Timestamp conversion
- Filter configuration, text rewriting and matching
- Context window strategies deciding which entries are kept
"""

from .subtitle_formats import (
    SubtitleEvent,
    SubtitleFile,
    SubtitleFormatFactory,
    SubtitleFormatError,
    SubtitleParseError,
)
from .encoding_detection import EncodingDetector
from .timing_utils import TimeConverter
from .filter_config import (
    ConfigurationError,
    ReplaceRule,
    EntryCountWindowConfig,
    DurationWindowConfig,
    FilterConfig,
)
from .text_rewriter import TextRewriter
from .match_predicate import MatchPredicate
from .context_window import (
    Entry,
    ContextWindow,
    EntryCountWindow,
    DurationWindow,
    create_context_window,
)

__all__ = [
    'SubtitleEvent',
    'SubtitleFile',
    'SubtitleFormatFactory',
    'SubtitleFormatError',
    'SubtitleParseError',
    'EncodingDetector',
    'TimeConverter',
    'ConfigurationError',
    'ReplaceRule',
    'EntryCountWindowConfig',
    'DurationWindowConfig',
    'FilterConfig',
    'TextRewriter',
    'MatchPredicate',
    'Entry',
    'ContextWindow',
    'EntryCountWindow',
    'DurationWindow',
    'create_context_window',
]
