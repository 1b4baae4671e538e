"""
Shared constants and configurations for the subtitle filter.

This module contains all the constants used across different modules including:
- Supported subtitle formats and extensions
- Encoding detection priorities
- Display defaults for the filtered output
- Logging and application metadata
"""

from enum import Enum
from typing import List, Tuple

# ============================================================================
# FILE FORMAT CONSTANTS
# ============================================================================

class SubtitleFormat(Enum):
    """Supported subtitle formats."""
    SRT = "srt"
    ASS = "ass"
    SSA = "ssa"
    VTT = "vtt"

    @classmethod
    def from_extension(cls, ext: str) -> 'SubtitleFormat':
        """
        Get format from file extension.

        Args:
            ext: File extension (with or without dot)

        Returns:
            SubtitleFormat enum value

        Raises:
            ValueError: If extension is not supported
        """
        ext = ext.lower().lstrip('.')
        for format_type in cls:
            if format_type.value == ext:
                return format_type
        raise ValueError(f"Unsupported subtitle format: {ext}")

# ============================================================================
# ENCODING DETECTION CONSTANTS
# ============================================================================

# Encodings tried in order when automatic detection gives no confident answer
ENCODING_PRIORITY: List[str] = [
    'utf-8', 'cp1252', 'gb18030', 'big5', 'shift-jis', 'latin-1'
]

# charset-normalizer matches below this coherence are ignored
MIN_DETECTION_COHERENCE: float = 0.1

# Byte order marks
UTF8_BOM: bytes = b"\xef\xbb\xbf"
UTF16_BOMS: Tuple[bytes, ...] = (b"\xff\xfe", b"\xfe\xff")

# ============================================================================
# OUTPUT CONSTANTS
# ============================================================================

# Gap between two kept entries that starts a new output block (milliseconds)
DEFAULT_SEPARATION_INTERVAL_MS: int = 5000

# Decoration printed around block timecodes
TIME_DECORATION: str = "###"

# ANSI color codes used by the output renderer
ANSI_RESET: str = '\033[0m'
ANSI_YELLOW: str = '\033[33m'
ANSI_BRIGHT_BLUE: str = '\033[94m'
ANSI_BRIGHT_RED: str = '\033[91m'

# ============================================================================
# DEFAULT CONFIGURATION VALUES
# ============================================================================

# Default log format
DEFAULT_LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

# Application metadata
APP_NAME: str = "subfilter"
APP_VERSION: str = "0.2.0"
APP_DESCRIPTION: str = """
Filter subtitle files like grep, with context measured in subtitle lines or time:
- Regex matching on SRT, WebVTT and ASS/SSA subtitle text
- Context windows by entry count (-B/-A/-C) or by milliseconds (--time-*)
- Regex rewriting of subtitle text before and after matching
- Output grouped into blocks separated by timecodes
"""
