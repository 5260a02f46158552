"""Single-line compact formatter.

Renders ``HH:MM:SS.mmm label message (data)`` where the label is the logger
name, else the caller location, else the instance type, suffixed with
``@hash`` when the record carries an instance hash.
"""

from __future__ import annotations

from lib_log_spans.domain.color_support import TerminalColorSupport
from lib_log_spans.domain.identity import InstanceHandle
from lib_log_spans.domain.records import LogRecord
from lib_log_spans.domain.spans import (
    ErrorSpan,
    InlineData,
    LogMessage,
    LogSpan,
    NewLine,
    PlainText,
    SpanSequence,
    StackTraceSpan,
    Surrounded,
    Timestamp,
    Whitespace,
)

from ..formatting import SpanBasedFormatter


def compact_label(record: LogRecord) -> str:
    """Return the identity shown by :class:`CompactFormatter`.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> when = datetime(2025, 1, 1, tzinfo=timezone.utc)
    >>> compact_label(LogRecord("m", when, file_name="app.py", line=3))
    'app.py:3'
    >>> compact_label(LogRecord("m", when, logger_name="db", instance_hash=0x1F2E3D))
    'db@2e3d'
    """
    if record.logger_name:
        name = record.logger_name
    elif record.file_name is not None:
        name = record.file_name if record.line is None else f"{record.file_name}:{record.line}"
    elif record.instance is not None:
        name = type(record.instance).__name__
    else:
        name = "Unknown"

    if record.instance_hash is None:
        return name
    return f"{name}@{InstanceHandle.of(record.instance_hash).hex(4)}"


class CompactFormatter(SpanBasedFormatter):
    """Uncolored one-line formatter without level or method columns."""

    def build_span(self, record: LogRecord, color_support: TerminalColorSupport) -> LogSpan:
        spans: list[LogSpan] = [
            Timestamp(record.timestamp),
            Whitespace(),
            PlainText(compact_label(record)),
            Whitespace(),
            LogMessage(record.message),
        ]

        if record.data:
            spans.append(Surrounded(InlineData(record.data), prefix=PlainText(" ("), suffix=PlainText(")")))

        if record.error is not None:
            spans.extend((NewLine(), ErrorSpan(record.error)))
        if record.stack_trace is not None:
            spans.extend((NewLine(), StackTraceSpan(record.stack_trace)))

        return SpanSequence(tuple(spans))


__all__ = ["CompactFormatter", "compact_label"]
