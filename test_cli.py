#!/usr/bin/env python3
"""
Tests for the command-line interface.

Covers resolution of the context options into a filter configuration and
complete runs over subtitle files written to a temporary directory.
"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from core.filter_config import (
    ConfigurationError,
    DurationWindowConfig,
    EntryCountWindowConfig,
    ReplaceRule,
)
from processors.subtitle_filter import SubtitleFilter
from ui.cli import CLIHandler, main
from ui.output_renderer import OutputRenderer

SAMPLE_SRT = """1
00:00:01,000 --> 00:00:02,000
Hello there

2
00:00:03,000 --> 00:00:04,000
General Kenobi

3
00:00:20,000 --> 00:00:21,000
You are a bold one
"""


def parse(argv):
    handler = CLIHandler()
    args = handler.create_parser().parse_args(argv)
    return handler, args


@pytest.fixture
def sample_srt(tmp_path):
    path = tmp_path / "sample.srt"
    path.write_text(SAMPLE_SRT, encoding="utf-8")
    return path


def test_default_configuration():
    handler, args = parse(["movie.srt"])
    config = handler.build_filter_config(args)

    assert config.window == EntryCountWindowConfig(before=0, after=0)
    assert config.pattern is None
    assert config.pre_replace is None
    assert config.post_replace is None
    assert args.separation_interval_ms == 5000


def test_line_context_options():
    handler, args = parse(["movie.srt", "word", "-B", "2", "-A", "3"])
    assert handler.build_filter_config(args).window == EntryCountWindowConfig(before=2, after=3)

    handler, args = parse(["movie.srt", "word", "-B", "2", "-A", "3", "-C", "1"])
    assert handler.build_filter_config(args).window == EntryCountWindowConfig(before=1, after=1)


def test_time_options_override_line_options():
    handler, args = parse(["movie.srt", "word", "-C", "4", "--time-after", "1500"])
    assert handler.build_filter_config(args).window == DurationWindowConfig(before_ms=0, after_ms=1500)

    handler, args = parse(["movie.srt", "word", "--time-before", "700", "--time-after", "1500"])
    assert handler.build_filter_config(args).window == DurationWindowConfig(before_ms=700, after_ms=1500)

    handler, args = parse(["movie.srt", "word", "--time-before", "700", "--time-around", "2000"])
    assert handler.build_filter_config(args).window == DurationWindowConfig(before_ms=2000, after_ms=2000)


def test_replace_options():
    handler, args = parse(["movie.srt", "--pre-replace-pattern", "<[^>]+>", "--pre-replace-with", "",
                           "--post-replace-pattern", "(a)", "--post-replace-with", r"[\1]"])
    config = handler.build_filter_config(args)

    assert config.pre_replace == ReplaceRule(pattern="<[^>]+>", replacement="")
    assert config.post_replace == ReplaceRule(pattern="(a)", replacement=r"[\1]")


def test_replace_pattern_without_replacement_is_an_error():
    handler, args = parse(["movie.srt", "--pre-replace-pattern", "x"])
    with pytest.raises(ConfigurationError, match="pre-replace-with"):
        handler.build_filter_config(args)


def test_replacement_without_pattern_is_ignored():
    handler, args = parse(["movie.srt", "--post-replace-with", "y"])
    assert handler.build_filter_config(args).post_replace is None


def test_negative_context_is_an_error():
    handler, args = parse(["movie.srt", "-B", "-1"])
    with pytest.raises(ConfigurationError):
        handler.build_filter_config(args)


def test_main_prints_blocks(sample_srt, capsys):
    exit_code = main([str(sample_srt), "Kenobi|bold", "-B", "1", "--no-color"])

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == [
        "### 00:00:01.000 ###",
        "Hello there",
        "General Kenobi",
        "### 00:00:04.000 ###",
        "",
        "### 00:00:20.000 ###",
        "You are a bold one",
        "### 00:00:21.000 ###",
    ]


def test_main_with_time_window_and_rewrite(sample_srt, capsys):
    exit_code = main([str(sample_srt), "Hello", "--time-after", "1000", "--hide-time",
                      "--post-replace-pattern", r"(\w+) (\w+)", "--post-replace-with", r"\2 \1"])

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == ["there Hello", "Kenobi General"]


def test_main_without_pattern_prints_everything(sample_srt, capsys):
    exit_code = main([str(sample_srt), "--hide-time", "-i", "100000"])

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == [
        "Hello there", "General Kenobi", "You are a bold one"
    ]


def test_main_missing_file(tmp_path, capsys):
    exit_code = main([str(tmp_path / "missing.srt"), "x"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "missing.srt" in captured.err


def test_main_invalid_pattern(sample_srt, capsys):
    exit_code = main([str(sample_srt), "(unclosed"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "Invalid configuration" in captured.err


def test_main_missing_replacement(sample_srt, capsys):
    exit_code = main([str(sample_srt), "x", "--post-replace-pattern", "a"])

    assert exit_code == 1
    assert "post-replace-with is missing" in capsys.readouterr().err


def test_main_undetectable_format(tmp_path, capsys):
    path = tmp_path / "notes.txt"
    path.write_text("nothing to see here\n", encoding="utf-8")

    exit_code = main([str(path), "x"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "Couldn't detect subtitle format" in captured.err


def test_verbose_logs_configuration(sample_srt, capsys):
    exit_code = main([str(sample_srt), "Kenobi", "-v", "--hide-time"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.out.splitlines() == ["General Kenobi"]
    assert "config: FilterConfig(" in captured.err


def test_colors_follow_terminal(sample_srt, capsys):
    with patch.object(sys.stdout, "isatty", return_value=True):
        assert main([str(sample_srt), "Kenobi", "--hide-time"]) == 0
    assert capsys.readouterr().out.splitlines() == ["\033[91mGeneral Kenobi\033[0m"]

    with patch.object(sys.stdout, "isatty", return_value=True):
        assert main([str(sample_srt), "Kenobi", "--hide-time", "--no-color"]) == 0
    assert capsys.readouterr().out.splitlines() == ["General Kenobi"]


def test_interrupted_run_exits_with_error(sample_srt, capsys):
    with patch.object(SubtitleFilter, "filter_file", side_effect=KeyboardInterrupt):
        exit_code = main([str(sample_srt), "Kenobi"])

    assert exit_code == 1
    assert capsys.readouterr().out == ""


def test_interrupted_output_exits_with_error(sample_srt):
    with patch.object(OutputRenderer, "render", side_effect=KeyboardInterrupt):
        exit_code = main([str(sample_srt), "Kenobi"])

    assert exit_code == 1
