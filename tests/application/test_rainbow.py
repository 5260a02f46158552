from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from lib_log_spans.application.formatters import (
    DataPresentation,
    RainbowFormatOptions,
    RainbowFormatter,
    dimmed,
    level_color,
    strip_class_prefix,
)
from lib_log_spans.domain.color_support import TerminalColorSupport
from lib_log_spans.domain.colors import IndexedColor
from lib_log_spans.domain.hash_colors import ColorSaturation, color_for_hash
from lib_log_spans.domain.identity import InstanceHandle
from lib_log_spans.domain.levels import LogLevel
from lib_log_spans.domain.records import LogRecord, TimeDisplay
from lib_log_spans.domain.spans import AnsiStyled, PlainText

FULL_LINE = '12:34:56.789 [info] server.py:42 app.http Handler serve hello world (user: "alice", attempt: 2)'


def test_default_layout_without_colors(sample_record: LogRecord) -> None:
    assert RainbowFormatter().format_to_string(sample_record) == FULL_LINE


@pytest.mark.parametrize(
    "level, code",
    [(LogLevel.CRITICAL, 203), (LogLevel.ERROR, 167), (LogLevel.WARNING, 179), (LogLevel.INFO, None), (LogLevel.DEBUG, None)],
)
def test_level_colors(level: LogLevel, code: int | None) -> None:
    expected = None if code is None else IndexedColor(code)
    assert level_color(level) == expected


def test_dimmed_is_dim_white() -> None:
    span = dimmed(PlainText("x"))
    assert span == AnsiStyled(PlainText("x"), foreground=IndexedColor(7), dim=True)


def test_strip_class_prefix_only_strips_the_own_class() -> None:
    assert strip_class_prefix("Handler.serve", "Handler") == "serve"
    assert strip_class_prefix("Other.serve", "Handler") == "Other.serve"


def test_warning_message_and_data_use_the_level_color(sample_record: LogRecord) -> None:
    record = sample_record.replace(level=LogLevel.WARNING)
    text = RainbowFormatter().format_to_string(record, TerminalColorSupport.ANSI256)

    assert "\x1b[38;5;179m[warning]" in text
    assert "\x1b[38;5;179mhello world" in text
    assert '\x1b[38;5;179m (user: "alice", attempt: 2)' in text


def test_info_data_is_dimmed(sample_record: LogRecord) -> None:
    text = RainbowFormatter().format_to_string(sample_record, TerminalColorSupport.ANSI256)

    assert "\x1b[2m\x1b[38;5;7m (user" in text
    assert "\x1b[38;5;7m[info]" in text


def test_identities_get_hash_colors(sample_record: LogRecord) -> None:
    support = TerminalColorSupport.ANSI256
    text = RainbowFormatter().format_to_string(sample_record, support)

    logger_color = color_for_hash("app.http", ColorSaturation.HIGH, support)
    class_color = color_for_hash("Handler", ColorSaturation.LOW, support)
    method_color = color_for_hash("serve", ColorSaturation.LOW, support)
    assert f"\x1b[38;5;{logger_color.code}mapp.http" in text
    assert f"\x1b[38;5;{class_color.code}mHandler" in text
    assert f"\x1b[38;5;{method_color.code}mserve" in text
    assert "\x1b[38;5;110mserver.py:42" in text


def test_truecolor_terminals_receive_rgb_hash_colors(sample_record: LogRecord) -> None:
    text = RainbowFormatter().format_to_string(sample_record, TerminalColorSupport.TRUECOLOR)
    color = color_for_hash("app.http", ColorSaturation.HIGH, TerminalColorSupport.TRUECOLOR)

    assert f"\x1b[38;2;{color.r};{color.g};{color.b}mapp.http" in text


def test_instance_hash_is_shown_with_four_digits(fixed_time: datetime) -> None:
    class Worker:
        pass

    record = LogRecord("tick", fixed_time, instance=Worker(), instance_hash=InstanceHandle(0x1F2E3D))
    options = RainbowFormatOptions(time_display=TimeDisplay.OFF, show_log_level=False)

    assert RainbowFormatter(options).format_to_string(record) == " Worker@2e3d tick"


@pytest.mark.parametrize(
    "mode, offset, expected",
    [
        (TimeDisplay.CLOCK, 5, "12:34:56.789"),
        (TimeDisplay.WALL_CLOCK, 5, "12:35:01.789"),
        (TimeDisplay.BOTH, 0, "12:34:56.789 [12:34:56.789]"),
        (TimeDisplay.AUTO, 0, "12:34:56.789"),
        (TimeDisplay.AUTO, 1, "12:34:57.789"),
        (TimeDisplay.AUTO, 5, "12:35:01.789 [12:34:56.789]"),
        (TimeDisplay.OFF, 5, ""),
    ],
)
def test_time_display_modes(fixed_time: datetime, mode: TimeDisplay, offset: int, expected: str) -> None:
    record = LogRecord("m", fixed_time, wall_clock=fixed_time + timedelta(seconds=offset))
    options = RainbowFormatOptions(time_display=mode, show_log_level=False)

    assert RainbowFormatter(options).format_to_string(record) == f"{expected} m"


def test_multiline_data(sample_record: LogRecord) -> None:
    options = RainbowFormatOptions(data=DataPresentation.MULTILINE, time_display=TimeDisplay.OFF)
    text = RainbowFormatter(options).format_to_string(sample_record)

    assert text.endswith('hello world\nuser: "alice"\nattempt: 2')


def test_errors_and_stack_traces_follow_on_new_lines(sample_record: LogRecord) -> None:
    record = sample_record.replace(data={}, error=KeyError("id"), stack_trace="  File x, line 1")
    text = RainbowFormatter(RainbowFormatOptions(time_display=TimeDisplay.OFF)).format_to_string(record)

    assert text.endswith("hello world\nKeyError: 'id'\n  File x, line 1")


def test_error_without_level_color_is_grey(sample_record: LogRecord) -> None:
    record = sample_record.replace(data={}, error="oops")
    text = RainbowFormatter().format_to_string(record, TerminalColorSupport.ANSI256)

    assert "\n\x1b[38;5;244moops" in text


def test_record_options_override_formatter_options(sample_record: LogRecord) -> None:
    formatter = RainbowFormatter(RainbowFormatOptions(show_logger=False))
    quiet = sample_record.replace(format_options=(RainbowFormatOptions(show_logger=True, time_display=TimeDisplay.OFF),))

    assert "app.http" not in formatter.format_to_string(sample_record)
    assert formatter.format_to_string(quiet).startswith(" [info] server.py:42 app.http")


def test_merge_keeps_unset_fields() -> None:
    merged = RainbowFormatOptions.DEFAULTS.merge(RainbowFormatOptions(show_class=False))

    assert merged.show_class is False
    assert merged.show_logger is True
    assert merged.data is DataPresentation.INLINE
    assert merged.time_display is TimeDisplay.AUTO


def test_requires_caller_info_follows_the_switches() -> None:
    assert RainbowFormatter().requires_caller_info is True
    hidden = RainbowFormatOptions(show_location=False, show_class=False, show_method=False)
    assert RainbowFormatter(hidden).requires_caller_info is False


def test_missing_parts_leave_no_gaps(fixed_time: datetime) -> None:
    record = LogRecord("bare", fixed_time)
    assert RainbowFormatter().format_to_string(record) == "12:34:56.789 [info] bare"
