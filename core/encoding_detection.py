"""
Encoding detection utilities for subtitle files.

This module reads subtitle files into memory, picking the text encoding from
a byte order mark, a strict UTF-8 decode, a confident charset-normalizer
match, or a priority list of common subtitle encodings.
"""

from pathlib import Path
from typing import Optional, Tuple

from charset_normalizer import from_bytes

from utils.constants import (
    ENCODING_PRIORITY,
    MIN_DETECTION_COHERENCE,
    UTF16_BOMS,
    UTF8_BOM,
)
from utils.logging_config import get_logger

logger = get_logger(__name__)


class EncodingDetector:
    """Handles encoding detection for subtitle files."""

    @staticmethod
    def detect_encoding(raw_data: bytes) -> Optional[str]:
        """
        Detect the encoding of raw subtitle bytes.

        Args:
            raw_data: File content as bytes

        Returns:
            Detected encoding name or None if detection failed

        Example:
            >>> encoding = EncodingDetector.detect_encoding(Path("movie.srt").read_bytes())
            >>> print(f"Detected encoding: {encoding}")
        """
        if raw_data.startswith(UTF8_BOM):
            return 'utf-8-sig'
        if raw_data.startswith(UTF16_BOMS):
            return 'utf-16'

        # Valid UTF-8 is never reinterpreted as a legacy code page
        try:
            raw_data.decode('utf-8')
            return 'utf-8'
        except UnicodeDecodeError:
            pass

        best = from_bytes(raw_data).best()
        if best is not None and best.coherence >= MIN_DETECTION_COHERENCE:
            logger.debug(f"charset-normalizer detected encoding: {best.encoding} "
                         f"(coherence {best.coherence:.2f})")
            return best.encoding.lower()

        if best is not None:
            logger.debug(f"Ignoring low-coherence charset-normalizer guess {best.encoding} "
                         f"(coherence {best.coherence:.2f})")
        logger.debug("No confident detection, trying encoding priority list")
        return EncodingDetector._manual_detect_encoding(raw_data)

    @staticmethod
    def _manual_detect_encoding(raw_data: bytes) -> Optional[str]:
        """
        Try each encoding of the priority list until one decodes cleanly.

        Args:
            raw_data: File content as bytes

        Returns:
            First encoding that decodes without errors, or None
        """
        for encoding in ENCODING_PRIORITY:
            try:
                raw_data.decode(encoding)
                return encoding
            except (UnicodeDecodeError, LookupError):
                continue
        return None

    @staticmethod
    def read_file_with_encoding(file_path: Path) -> Tuple[str, str]:
        """
        Read a file with automatic encoding detection.

        Line endings are normalized to LF.

        Args:
            file_path: Path to the file to read

        Returns:
            Tuple of (file_content, encoding_used)

        Raises:
            FileNotFoundError: If the file does not exist
            IOError: If the file cannot be read or decoded
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        try:
            raw_data = file_path.read_bytes()
        except OSError as e:
            raise IOError(f"Cannot read file {file_path}: {e}")

        encoding = EncodingDetector.detect_encoding(raw_data)
        if not encoding:
            raise IOError(f"Cannot detect text encoding of {file_path}")

        try:
            content = raw_data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise IOError(f"Cannot read file {file_path} with encoding {encoding}: {e}")

        logger.debug(f"Read {file_path.name} ({len(raw_data)} bytes) with encoding: {encoding}")
        return EncodingDetector.normalize_line_endings(content), encoding

    @staticmethod
    def normalize_line_endings(text: str) -> str:
        """Replace CRLF and CR line endings with LF."""
        return text.replace('\r\n', '\n').replace('\r', '\n')

