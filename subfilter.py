#!/usr/bin/env python3
"""
subfilter - Main Application Entry Point
========================================

Filter subtitle files like grep, keeping context around matching lines either
as a number of subtitle lines or as a duration around each match.

Usage:
    # Lines matching a pattern, one line of context on each side
    python subfilter.py movie.srt "pattern" -C 1

    # Lines within two seconds of a match
    python subfilter.py movie.ass "pattern" --time-around 2000

    # Help
    python subfilter.py --help
"""

import sys
from pathlib import Path

# Add the current directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent))

from ui.cli import main as cli_main


def main():
    """
    Main application entry point.

    Parses the command line, runs the filter and exits with its status code.
    """
    try:
        sys.exit(cli_main())
    except KeyboardInterrupt:
        sys.exit(1)


if __name__ == '__main__':
    main()
