"""
User interface modules.

This package contains user interface components:
- Command-line interface (CLI)
- Rendering of filtered entries to the terminal
"""

from .cli import CLIHandler, main
from .output_renderer import OutputRenderer, group_into_blocks

__all__ = [
    'CLIHandler',
    'main',
    'OutputRenderer',
    'group_into_blocks'
]
