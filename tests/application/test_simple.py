from __future__ import annotations

from datetime import datetime

import pytest

from lib_log_spans.application.formatters import SimpleFormatter
from lib_log_spans.domain.color_support import TerminalColorSupport
from lib_log_spans.domain.identity import InstanceHandle
from lib_log_spans.domain.levels import LogLevel
from lib_log_spans.domain.records import LogRecord

FULL_LINE = '12:34:56.789 [info] server.py:42 serve Handler [app.http] - hello world (user: "alice", attempt: 2)'


def test_default_layout(sample_record: LogRecord) -> None:
    assert SimpleFormatter().format_to_string(sample_record) == FULL_LINE


def test_output_has_no_escape_codes_even_on_color_terminals(sample_record: LogRecord) -> None:
    assert SimpleFormatter().format_to_string(sample_record, TerminalColorSupport.TRUECOLOR) == FULL_LINE


@pytest.mark.parametrize(
    "switch, expected",
    [
        ("show_timestamp", ' [info] server.py:42 serve Handler [app.http] - hello world (user: "alice", attempt: 2)'),
        ("show_level", '12:34:56.789 server.py:42 serve Handler [app.http] - hello world (user: "alice", attempt: 2)'),
        ("show_logger_name", '12:34:56.789 [info] server.py:42 serve Handler - hello world (user: "alice", attempt: 2)'),
        ("show_caller", '12:34:56.789 [info] Handler [app.http] - hello world (user: "alice", attempt: 2)'),
        ("show_method", '12:34:56.789 [info] server.py:42 Handler [app.http] - hello world (user: "alice", attempt: 2)'),
        ("show_instance", '12:34:56.789 [info] server.py:42 serve [app.http] - hello world (user: "alice", attempt: 2)'),
        ("show_data", "12:34:56.789 [info] server.py:42 serve Handler [app.http] - hello world"),
    ],
)
def test_each_part_can_be_switched_off(sample_record: LogRecord, switch: str, expected: str) -> None:
    formatter = SimpleFormatter(**{switch: False})
    assert formatter.format_to_string(sample_record) == expected


def test_message_alone_has_no_separator(fixed_time: datetime) -> None:
    formatter = SimpleFormatter(show_timestamp=False, show_level=False)
    assert formatter.format_to_string(LogRecord("just this", fixed_time)) == "just this"


def test_root_logger_is_not_shown(fixed_time: datetime) -> None:
    record = LogRecord("boot", fixed_time, LogLevel.WARNING, logger_name="root")
    assert SimpleFormatter().format_to_string(record) == "12:34:56.789 [warning] - boot"


def test_instance_hash_uses_eight_digits(fixed_time: datetime) -> None:
    class Session:
        pass

    record = LogRecord("open", fixed_time, instance=Session(), instance_hash=InstanceHandle(0xABC))
    formatter = SimpleFormatter(show_timestamp=False, show_level=False)

    assert formatter.format_to_string(record) == " Session@00000abc - open"


def test_errors_follow_on_new_lines(fixed_time: datetime) -> None:
    record = LogRecord("failed", fixed_time, LogLevel.ERROR, error=ValueError("bad"), stack_trace="trace\n")
    formatter = SimpleFormatter(show_timestamp=False)

    assert formatter.format_to_string(record) == " [error] - failed\nValueError: bad\ntrace"


@pytest.mark.parametrize(
    "kwargs, expected",
    [
        ({}, True),
        ({"show_caller": False}, True),
        ({"show_instance": False}, True),
        ({"show_caller": False, "show_instance": False}, False),
    ],
)
def test_requires_caller_info(kwargs: dict[str, bool], expected: bool) -> None:
    assert SimpleFormatter(**kwargs).requires_caller_info is expected
