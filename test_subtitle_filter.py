#!/usr/bin/env python3
"""
Tests for the subtitle filter pipeline.

These tests cover the full pass over parsed events:
1. Pre-replace, matching, windowing and post-replace in order
2. Entry-count and duration windows seen through the pipeline
3. Skipping of events without text or emptied by pre-replace
"""

import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from core.filter_config import (
    ConfigurationError,
    DurationWindowConfig,
    EntryCountWindowConfig,
    FilterConfig,
    ReplaceRule,
)
from core.subtitle_formats import SubtitleEvent, SubtitleFormatError
from processors.subtitle_filter import SubtitleFilter
from utils.logging_config import get_logger

logger = get_logger(__name__)


def create_test_events(texts: List[Optional[str]], spacing_ms: int = 2000,
                       duration_ms: int = 1500) -> List[SubtitleEvent]:
    """Create evenly spaced subtitle events with the given texts."""
    return [
        SubtitleEvent(start_ms=i * spacing_ms, end_ms=i * spacing_ms + duration_ms, text=text)
        for i, text in enumerate(texts)
    ]


def texts(entries) -> List[str]:
    return [entry.text for entry in entries]


SAMPLE_TEXTS = [f"line {i}" for i in range(10)]


def test_entry_count_window_through_pipeline():
    events = create_test_events(SAMPLE_TEXTS[:5] + ["the target"] + SAMPLE_TEXTS[6:])
    config = FilterConfig(window=EntryCountWindowConfig(before=2, after=1), pattern="target")

    entries = SubtitleFilter(config).filter_events(events)

    assert texts(entries) == ["line 3", "line 4", "the target", "line 6"]
    assert [entry.is_match for entry in entries] == [False, False, True, False]


def test_duration_window_through_pipeline():
    events = [
        SubtitleEvent(start_ms=6500, end_ms=7500, text="too early"),
        SubtitleEvent(start_ms=8000, end_ms=8500, text="close before"),
        SubtitleEvent(start_ms=10000, end_ms=11000, text="MATCH"),
        SubtitleEvent(start_ms=11900, end_ms=12500, text="close after"),
        SubtitleEvent(start_ms=12100, end_ms=13000, text="too late"),
    ]
    config = FilterConfig(window=DurationWindowConfig(before_ms=2000, after_ms=1000), pattern="MATCH")

    entries = SubtitleFilter(config).filter_events(events)

    assert texts(entries) == ["close before", "MATCH", "close after"]


def test_adjacent_matches_form_one_block():
    events = create_test_events(["a", "hit 1", "b", "c", "hit 2", "d", "e"])
    config = FilterConfig(window=EntryCountWindowConfig(before=1, after=1), pattern="hit")

    entries = SubtitleFilter(config).filter_events(events)

    assert texts(entries) == ["a", "hit 1", "b", "c", "hit 2", "d"]
    assert len({entry.start_ms for entry in entries}) == len(entries)


def test_output_preserves_source_order():
    words = ["alpha", "beta", "gamma", "delta", "epsilon", "zeta", "eta", "theta", "iota", "kappa"]
    events = create_test_events(words)
    config = FilterConfig(window=EntryCountWindowConfig(before=1, after=2), pattern="ta")

    entries = SubtitleFilter(config).filter_events(events)

    starts = [entry.start_ms for entry in entries]
    assert starts == sorted(set(starts))
    source_order = [event.text for event in events]
    positions = [source_order.index(text) for text in texts(entries)]
    assert positions == sorted(positions)


def test_events_without_text_are_skipped():
    events = create_test_events(["target", None, "after 1", None, "after 2"])
    config = FilterConfig(window=EntryCountWindowConfig(before=0, after=1), pattern="target")

    entries = SubtitleFilter(config).filter_events(events)

    assert texts(entries) == ["target", "after 1"]


def test_empty_text_is_an_entry_without_pre_replace():
    events = create_test_events(["target", "", "after 2"])
    config = FilterConfig(window=EntryCountWindowConfig(before=0, after=1), pattern="target")

    assert texts(SubtitleFilter(config).filter_events(events)) == ["target", ""]
    assert texts(SubtitleFilter(FilterConfig()).filter_events(events)) == ["target", "", "after 2"]


def test_entries_emptied_by_pre_replace_are_removed():
    events = create_test_events(["target", "[music]", "after 1", "after 2"])
    config = FilterConfig(
        window=EntryCountWindowConfig(before=0, after=1),
        pattern="target|music",
        pre_replace=ReplaceRule(pattern=r"\[.*?\]", replacement="")
    )

    entries = SubtitleFilter(config).filter_events(events)

    # The emptied entry does not count towards the after-context either
    assert texts(entries) == ["target", "after 1"]


def test_pre_replace_runs_before_matching():
    events = create_test_events(["he-llo", "world"])
    config = FilterConfig(
        pattern="hello",
        pre_replace=ReplaceRule(pattern="-", replacement="")
    )

    entries = SubtitleFilter(config).filter_events(events)

    assert texts(entries) == ["hello"]
    assert entries[0].is_match


def test_post_replace_runs_after_matching():
    events = create_test_events(["hello there", "general"])
    config = FilterConfig(
        window=EntryCountWindowConfig(before=0, after=1),
        pattern="hello",
        post_replace=ReplaceRule(pattern="hello", replacement="goodbye")
    )

    entries = SubtitleFilter(config).filter_events(events)

    assert texts(entries) == ["goodbye there", "general"]
    assert [entry.is_match for entry in entries] == [True, False]


def test_no_pattern_passes_everything_through():
    events = create_test_events(SAMPLE_TEXTS)

    entries = SubtitleFilter(FilterConfig()).filter_events(events)

    assert texts(entries) == SAMPLE_TEXTS
    assert not any(entry.is_match for entry in entries)
    assert [(e.start_ms, e.end_ms) for e in entries] == [(e.start_ms, e.end_ms) for e in events]


def test_no_pattern_passes_everything_through_in_duration_mode():
    events = create_test_events(SAMPLE_TEXTS, spacing_ms=60000)
    config = FilterConfig(window=DurationWindowConfig(before_ms=0, after_ms=0))

    entries = SubtitleFilter(config).filter_events(events)

    assert texts(entries) == SAMPLE_TEXTS


def test_post_replace_only_rewrites_every_entry():
    events = create_test_events(["- Hi.", "- Hello.", "Bye."])
    rule = ReplaceRule(pattern=r"^- ", replacement="")
    config = FilterConfig(post_replace=rule)

    entries = SubtitleFilter(config).filter_events(events)

    assert texts(entries) == ["Hi.", "Hello.", "Bye."]


def test_trailing_context_candidates_are_not_shown():
    events = create_test_events(["match", "x", "y", "z"])
    config = FilterConfig(window=EntryCountWindowConfig(before=3, after=0), pattern="match")

    entries = SubtitleFilter(config).filter_events(events)

    assert texts(entries) == ["match"]


def test_filter_can_run_twice_with_fresh_state():
    subtitle_filter = SubtitleFilter(FilterConfig(
        window=EntryCountWindowConfig(before=1, after=0), pattern="b"))

    first = subtitle_filter.filter_events(create_test_events(["a", "b", "c"]))
    second = subtitle_filter.filter_events(create_test_events(["c", "d"]))

    assert texts(first) == ["a", "b"]
    assert second == []


def test_invalid_configuration_is_reported_on_construction():
    with pytest.raises(ConfigurationError):
        SubtitleFilter(FilterConfig(pattern="(oops"))
    with pytest.raises(ConfigurationError):
        SubtitleFilter(FilterConfig(post_replace=ReplaceRule(pattern="[", replacement="")))


def test_negative_window_sizes_are_rejected():
    with pytest.raises(ConfigurationError):
        EntryCountWindowConfig(before=-1, after=0)
    with pytest.raises(ConfigurationError):
        DurationWindowConfig(before_ms=0, after_ms=-5)


def test_filter_content_parses_srt():
    content = (
        "1\n00:00:01,000 --> 00:00:02,000\nfirst\n\n"
        "2\n00:00:03,000 --> 00:00:04,000\nsecond\n\n"
        "3\n00:00:05,000 --> 00:00:06,000\nthird\n"
    )
    config = FilterConfig(window=EntryCountWindowConfig(before=1, after=0), pattern="third")

    entries = SubtitleFilter(config).filter_content(content, ".srt")

    assert texts(entries) == ["second", "third"]
    assert (entries[1].start_ms, entries[1].end_ms) == (5000, 6000)


def test_filter_file_reads_from_disk(tmp_path):
    subtitle_path = tmp_path / "episode.vtt"
    subtitle_path.write_text(
        "WEBVTT\n\n00:01.000 --> 00:02.000\nI see a ship\n\n00:02.500 --> 00:03.000\nWhere?\n",
        encoding="utf-8"
    )
    config = FilterConfig(window=DurationWindowConfig(before_ms=0, after_ms=500), pattern="ship")

    entries = SubtitleFilter(config).filter_file(subtitle_path)

    assert texts(entries) == ["I see a ship", "Where?"]
    logger.info(f"Filtered {subtitle_path.name}: {len(entries)} entries")


def test_filter_content_with_unknown_format():
    with pytest.raises(SubtitleFormatError):
        SubtitleFilter(FilterConfig()).filter_content("just some text", None)
