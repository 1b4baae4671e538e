"""
Subtitle processing modules.

This package contains the processors that run subtitle operations end to end:
- Pattern filtering with entry-count or time-based context
"""

from .subtitle_filter import SubtitleFilter

__all__ = [
    'SubtitleFilter'
]
