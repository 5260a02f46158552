"""Plain, grep-friendly formatter.

Renders ``HH:MM:SS.mmm [level] file:line method Class@hash [logger] - message (data)``
with every part switchable. No colors are added; any escape codes come only
from transformers the caller installs.
"""

from __future__ import annotations

from typing import Sequence

from lib_log_spans.domain.color_support import TerminalColorSupport
from lib_log_spans.domain.records import LogRecord
from lib_log_spans.domain.spans import (
    BracketedLoggerName,
    BracketedLogLevel,
    ClassName,
    ErrorSpan,
    InlineData,
    LogMessage,
    LogSpan,
    MethodName,
    NewLine,
    PlainText,
    SourceLocation,
    SpanSequence,
    StackTraceSpan,
    Surrounded,
    Timestamp,
    Whitespace,
)

from ..formatting import SpanBasedFormatter, SpanTransformer
from .rainbow import strip_class_prefix


class SimpleFormatter(SpanBasedFormatter):
    """Uncolored formatter with independent on/off switches per part."""

    def __init__(
        self,
        *,
        show_timestamp: bool = True,
        show_level: bool = True,
        show_logger_name: bool = True,
        show_caller: bool = True,
        show_method: bool = True,
        show_instance: bool = True,
        show_data: bool = True,
        span_transformers: Sequence[SpanTransformer] = (),
    ) -> None:
        super().__init__(span_transformers=span_transformers)
        self.show_timestamp = show_timestamp
        self.show_level = show_level
        self.show_logger_name = show_logger_name
        self.show_caller = show_caller
        self.show_method = show_method
        self.show_instance = show_instance
        self.show_data = show_data

    @property
    def requires_caller_info(self) -> bool:
        return self.show_caller or self.show_instance

    def build_span(self, record: LogRecord, color_support: TerminalColorSupport) -> LogSpan:
        head: list[LogSpan] = []

        if self.show_timestamp:
            head.append(Timestamp(record.timestamp))

        if self.show_level:
            head.append(Surrounded(BracketedLogLevel(record.level), prefix=Whitespace()))

        if self.show_caller and record.file_name is not None:
            head.append(Surrounded(SourceLocation(record.file_name, record.line), prefix=Whitespace()))
            if self.show_method and record.method_name is not None:
                name = strip_class_prefix(record.method_name, record.resolved_class_name)
                head.append(Surrounded(MethodName(name), prefix=Whitespace()))

        if self.show_instance:
            head.append(Surrounded(ClassName.from_record(record), prefix=Whitespace()))

        if self.show_logger_name and record.logger_name and record.logger_name != "root":
            head.append(Surrounded(BracketedLoggerName(record.logger_name), prefix=Whitespace()))

        spans: list[LogSpan] = list(head)
        if spans:
            spans.append(PlainText(" - "))
        spans.append(LogMessage(record.message))

        if self.show_data and record.data:
            spans.append(Surrounded(InlineData(record.data), prefix=PlainText(" ("), suffix=PlainText(")")))

        if record.error is not None:
            spans.extend((NewLine(), ErrorSpan(record.error)))
        if record.stack_trace is not None:
            spans.extend((NewLine(), StackTraceSpan(record.stack_trace)))

        return SpanSequence(tuple(spans))


__all__ = ["SimpleFormatter"]
