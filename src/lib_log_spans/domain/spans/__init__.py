"""Span document model: immutable spans, the render pipeline and the editable tree."""

from __future__ import annotations

from .foundation import (
    MAX_BUILD_STEPS,
    LogSpan,
    MultiChildSpan,
    RenderSpan,
    SingleChildSpan,
    SlottedSpan,
    SpanBuildError,
    SpanKind,
    render_span,
    render_to_string,
    resolve_span,
    span_kind,
)
from .library import (
    AnsiStyled,
    Bordered,
    BoxBorderStyle,
    BracketedLoggerName,
    BracketedLogLevel,
    BracketedTimestamp,
    ClassName,
    EmptySpan,
    ErrorSpan,
    FullTimestamp,
    InlineData,
    KeyValueData,
    LoggerName,
    LogMessage,
    MethodName,
    MultilineData,
    NewLine,
    PlainText,
    SourceLocation,
    SpanSequence,
    StackTraceSpan,
    Surrounded,
    Timestamp,
    Whitespace,
    join_spans,
    sequence,
)
from .tree import SpanNode, SpanTree

__all__ = [
    "AnsiStyled",
    "Bordered",
    "BoxBorderStyle",
    "BracketedLogLevel",
    "BracketedLoggerName",
    "BracketedTimestamp",
    "ClassName",
    "EmptySpan",
    "ErrorSpan",
    "FullTimestamp",
    "InlineData",
    "KeyValueData",
    "LogMessage",
    "LogSpan",
    "LoggerName",
    "MAX_BUILD_STEPS",
    "MethodName",
    "MultiChildSpan",
    "MultilineData",
    "NewLine",
    "PlainText",
    "RenderSpan",
    "SingleChildSpan",
    "SlottedSpan",
    "SourceLocation",
    "SpanBuildError",
    "SpanKind",
    "SpanNode",
    "SpanSequence",
    "SpanTree",
    "StackTraceSpan",
    "Surrounded",
    "Timestamp",
    "Whitespace",
    "join_spans",
    "render_span",
    "render_to_string",
    "resolve_span",
    "sequence",
    "span_kind",
]
