from __future__ import annotations

import logging

import pytest

from lib_log_spans.application import formatting as formatting_mod
from lib_log_spans.application.formatters import RainbowFormatOptions, RainbowFormatter, SimpleFormatter
from lib_log_spans.application.formatting import ConsoleMessageFormatter, SpanFormatOptions
from lib_log_spans.domain.buffer import ConsoleMessageBuffer
from lib_log_spans.domain.records import LogRecord, TimeDisplay
from lib_log_spans.domain.spans import Bordered, BoxBorderStyle, LoggerName, LogMessage, PlainText, SpanNode

PLAIN = RainbowFormatOptions(time_display=TimeDisplay.OFF, show_location=False, show_class=False, show_method=False)


def _upper_logger(node: SpanNode, record: LogRecord) -> None:
    target = node.find_first(LoggerName)
    if target is not None:
        target.replace_span(LoggerName(target.span.name.upper()))


def _suffix_bang(node: SpanNode, record: LogRecord) -> None:
    message = node.find_first(LogMessage)
    assert message is not None
    message.insert_after(PlainText("!"))


def _box(node: SpanNode, record: LogRecord) -> None:
    wrapper = node.tree.create_node(Bordered(style=BoxBorderStyle.ASCII, padding=0))
    assert wrapper.append(node)


def test_formatters_satisfy_the_protocol() -> None:
    assert isinstance(RainbowFormatter(), ConsoleMessageFormatter)
    assert isinstance(SimpleFormatter(), ConsoleMessageFormatter)


def test_without_transformers_no_tree_is_built(monkeypatch: pytest.MonkeyPatch, sample_record: LogRecord) -> None:
    class _Forbidden:
        @staticmethod
        def from_span(span):  # noqa: ANN001, ANN205
            raise AssertionError("tree must not be built")

    monkeypatch.setattr(formatting_mod, "SpanTree", _Forbidden)

    assert "hello world" in RainbowFormatter().format_to_string(sample_record)


def test_formatter_transformers_edit_the_tree(sample_record: LogRecord) -> None:
    formatter = RainbowFormatter(PLAIN, span_transformers=[_upper_logger])

    assert formatter.format_to_string(sample_record) == ' [info] APP.HTTP hello world (user: "alice", attempt: 2)'


def test_record_transformers_run_after_formatter_transformers(sample_record: LogRecord) -> None:
    seen: list[str] = []

    def first(node: SpanNode, record: LogRecord) -> None:
        seen.append("formatter")

    def second(node: SpanNode, record: LogRecord) -> None:
        seen.append("record")
        _suffix_bang(node, record)

    record = sample_record.replace(format_options=(SpanFormatOptions(span_transformers=[second]),))
    text = RainbowFormatter(PLAIN, span_transformers=[first]).format_to_string(record)

    assert seen == ["formatter", "record"]
    assert "hello world!" in text


def test_transformers_receive_the_record(sample_record: LogRecord) -> None:
    received: list[LogRecord] = []
    SimpleFormatter(span_transformers=[lambda node, record: received.append(record)]).format_to_string(sample_record)

    assert received == [sample_record]


def test_transformer_can_put_the_root_under_a_new_parent(sample_record: LogRecord) -> None:
    formatter = SimpleFormatter(show_timestamp=False, show_caller=False, show_instance=False, show_data=False, span_transformers=[_box])

    content = " [info] [app.http] - hello world"
    rule = "+" + "-" * len(content) + "+"

    assert formatter.format_to_string(sample_record) == f"{rule}\n|{content}|\n{rule}"


def test_transformer_application_is_logged(caplog: pytest.LogCaptureFixture, sample_record: LogRecord) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_log_spans.application.formatting")
    RainbowFormatter(span_transformers=[_upper_logger, _upper_logger]).format_to_string(sample_record)

    assert any("applied 2 span transformer(s)" in record.getMessage() for record in caplog.records)


def test_format_writes_into_the_given_buffer(sample_record: LogRecord) -> None:
    buffer = ConsoleMessageBuffer()
    buffer.write(">> ")
    SimpleFormatter(show_timestamp=False).format(sample_record, buffer)

    assert buffer.text.startswith(">>  [info]")
