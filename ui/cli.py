"""
Command-line interface for subfilter.

This module parses the command line, resolves the context window options into
a FilterConfig, runs the filter over the input file and prints the result.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional
from core.filter_config import (
    ConfigurationError,
    DurationWindowConfig,
    EntryCountWindowConfig,
    FilterConfig,
    ReplaceRule,
)
from core.subtitle_formats import SubtitleFormatError, SubtitleParseError
from processors.subtitle_filter import SubtitleFilter
from ui.output_renderer import OutputRenderer
from utils.constants import APP_NAME, APP_VERSION, APP_DESCRIPTION, DEFAULT_SEPARATION_INTERVAL_MS
from utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def setup_cli_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Set up logging for CLI operations."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    return setup_logging(level=level, use_colors=True)


class CLIHandler:
    """Handles command-line interface operations."""

    def create_parser(self) -> argparse.ArgumentParser:
        """
        Create the argument parser.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog=APP_NAME,
            description=APP_DESCRIPTION,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Lines mentioning "train", with 2 lines of context on each side
  subfilter movie.srt train -C 2

  # Everything said within 3 seconds after each question
  subfilter episode.ass '\\?$' --time-after 3000

  # Strip italics tags before matching
  subfilter show.vtt hello --pre-replace-pattern '</?i>' --pre-replace-with ''

  # Print every line without timecodes, dashes removed
  subfilter show.srt --hide-time --post-replace-pattern '^- ' --post-replace-with ''
            """
        )

        parser.add_argument('--version', action='version', version=f'{APP_NAME} {APP_VERSION}')
        parser.add_argument('-v', '--verbose', action='store_true',
                            help='Log the parsed arguments and the resolved configuration')
        parser.add_argument('-d', '--debug', action='store_true', help='Enable debug output')

        parser.add_argument('file_path', type=Path, help='Input subtitle file (SRT, WebVTT, ASS/SSA)')
        parser.add_argument('pattern', nargs='?', default=None,
                            help='Regular expression to find; every line is shown when omitted')

        display = parser.add_argument_group('display options')
        display.add_argument('--no-color', action='store_true',
                             help='Disable color output for timecodes and matching lines')
        display.add_argument('--hide-time', action='store_true',
                             help='Do not print block timecodes')
        display.add_argument('-i', '--sep-interval', dest='separation_interval_ms', type=int,
                             default=DEFAULT_SEPARATION_INTERVAL_MS, metavar='MS',
                             help='Start a new block when the next line starts this many '
                                  f'milliseconds after the previous one ended (default: {DEFAULT_SEPARATION_INTERVAL_MS})')

        context = parser.add_argument_group('context options')
        context.add_argument('-C', '--context', dest='around_context', type=int, metavar='N',
                             help='Number of lines to show before and after each match. '
                                  'Overrides -B/--before-context and -A/--after-context')
        context.add_argument('-A', '--after-context', type=int, default=0, metavar='N',
                             help='Number of lines to show after each match')
        context.add_argument('-B', '--before-context', type=int, default=0, metavar='N',
                             help='Number of lines to show before each match')
        context.add_argument('--time-around', dest='time_around_context', type=int, metavar='MS',
                             help='Show lines within this many milliseconds of a match. '
                                  'Overrides --time-after, --time-before and all line context options')
        context.add_argument('--time-after', dest='time_after_context', type=int, metavar='MS',
                             help='Show lines starting within this many milliseconds after a match. '
                                  'Overrides all line context options')
        context.add_argument('--time-before', dest='time_before_context', type=int, metavar='MS',
                             help='Show lines ending within this many milliseconds before a match. '
                                  'Overrides all line context options')

        rewrite = parser.add_argument_group('rewrite options')
        rewrite.add_argument('--pre-replace-pattern', metavar='REGEX',
                             help='Pattern to replace before pattern matching')
        rewrite.add_argument('--pre-replace-with', metavar='TEMPLATE',
                             help='Replacement before pattern matching (\\1 or \\g<name> for groups)')
        rewrite.add_argument('--post-replace-pattern', metavar='REGEX',
                             help='Pattern to replace in the lines that are shown')
        rewrite.add_argument('--post-replace-with', metavar='TEMPLATE',
                             help='Replacement in the lines that are shown (\\1 or \\g<name> for groups)')

        return parser

    def build_filter_config(self, args) -> FilterConfig:
        """
        Resolve parsed arguments into a filter configuration.

        Time options take precedence over line options; --time-around over
        --time-before/--time-after; -C over -B/-A.

        Args:
            args: Parsed arguments from argparse

        Returns:
            FilterConfig for the run

        Raises:
            ConfigurationError: If a replace pattern has no replacement or a
                window size is negative
        """
        if args.time_around_context is not None:
            window = DurationWindowConfig(
                before_ms=args.time_around_context,
                after_ms=args.time_around_context
            )
        elif args.time_before_context is not None or args.time_after_context is not None:
            window = DurationWindowConfig(
                before_ms=args.time_before_context or 0,
                after_ms=args.time_after_context or 0
            )
        elif args.around_context is not None:
            window = EntryCountWindowConfig(before=args.around_context, after=args.around_context)
        else:
            window = EntryCountWindowConfig(before=args.before_context, after=args.after_context)

        return FilterConfig(
            window=window,
            pattern=args.pattern,
            pre_replace=self._replace_rule(args.pre_replace_pattern, args.pre_replace_with, 'pre'),
            post_replace=self._replace_rule(args.post_replace_pattern, args.post_replace_with, 'post'),
        )

    @staticmethod
    def _replace_rule(pattern: Optional[str], replacement: Optional[str],
                      stage: str) -> Optional[ReplaceRule]:
        if pattern is None:
            if replacement is not None:
                logger.warning(f"--{stage}-replace-with is ignored without --{stage}-replace-pattern")
            return None
        if replacement is None:
            raise ConfigurationError(f"--{stage}-replace-with is missing")
        return ReplaceRule(pattern=pattern, replacement=replacement)

    def handle_command(self, args) -> int:
        """
        Run the filter for parsed command-line arguments.

        Args:
            args: Parsed arguments from argparse

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        setup_cli_logging(args.verbose, args.debug)
        logger.info(f"args: {args}")

        try:
            config = self.build_filter_config(args)
            logger.info(f"config: {config}")

            subtitle_filter = SubtitleFilter(config)
            entries = subtitle_filter.filter_file(args.file_path)

        except ConfigurationError as e:
            logger.error(f"Invalid configuration: {e}")
            return 1
        except (SubtitleFormatError, SubtitleParseError) as e:
            logger.error(f"{e} ({args.file_path})")
            return 1
        except (IOError, OSError) as e:
            logger.error(f"Cannot read input: {e}")
            return 1
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 1
        except Exception as e:
            logger.error(f"Unexpected error: {e}")
            if args.debug:
                import traceback
                traceback.print_exc()
            return 1

        renderer = OutputRenderer(
            use_colors=not args.no_color and sys.stdout.isatty(),
            hide_time=args.hide_time,
            sep_interval_ms=args.separation_interval_ms
        )
        try:
            renderer.render(entries)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 1
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse the command line and run the filter."""
    cli_handler = CLIHandler()
    args = cli_handler.create_parser().parse_args(argv)
    return cli_handler.handle_command(args)
