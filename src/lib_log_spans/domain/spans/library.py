"""Concrete spans: primitives, styling wrappers and semantic log parts.

Purpose
-------
Provide the span vocabulary formatters compose log lines from. Primitives
write text, wrappers style or frame a child, and semantic spans (timestamp,
logger name, data...) mark *what* a piece of output is so transformers can
find and rewrite it.

Contents
--------
* Primitives: :class:`PlainText`, :class:`Whitespace`, :class:`NewLine`,
  :class:`EmptySpan`, :class:`SpanSequence`.
* Wrappers: :class:`AnsiStyled`, :class:`Surrounded`, :class:`Bordered`
  (with :class:`BoxBorderStyle`).
* Semantic spans: timestamps, source location, logger/class/method names,
  level, message, data, error and stack trace.

System Role
-----------
Built by :mod:`lib_log_spans.application.formatters` and rendered through
:func:`lib_log_spans.domain.spans.foundation.render_span`.
"""

from __future__ import annotations

import traceback as _traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import TracebackType
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from ..buffer import ConsoleMessageBuffer, visible_length_of
from ..colors import ConsoleColor
from ..identity import InstanceHandle
from ..levels import LogLevel
from .data_format import format_as_yaml, format_yaml_key, format_yaml_value
from .foundation import LogSpan, MultiChildSpan, RenderSpan, SingleChildSpan, SlottedSpan, render_span

if TYPE_CHECKING:
    from ..records import LogRecord


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class PlainText(RenderSpan):
    """Literal text."""

    value: str

    def render(self, buffer: ConsoleMessageBuffer) -> None:
        buffer.write(self.value)


@dataclass(slots=True, frozen=True)
class Whitespace(RenderSpan):
    """A single space."""

    def render(self, buffer: ConsoleMessageBuffer) -> None:
        buffer.write(" ")


@dataclass(slots=True, frozen=True)
class NewLine(RenderSpan):
    def render(self, buffer: ConsoleMessageBuffer) -> None:
        buffer.write("\n")


@dataclass(slots=True, frozen=True)
class EmptySpan(RenderSpan):
    """Renders nothing; placeholder for removed or missing content."""

    def render(self, buffer: ConsoleMessageBuffer) -> None:
        return None


@dataclass(slots=True, frozen=True)
class SpanSequence(MultiChildSpan, RenderSpan):
    """Children rendered one after another, without separators."""

    children: tuple[LogSpan, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    def render(self, buffer: ConsoleMessageBuffer) -> None:
        for child in self.children:
            render_span(child, buffer)


# ---------------------------------------------------------------------------
# Wrappers
# ---------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class AnsiStyled(SingleChildSpan, RenderSpan):
    """Render ``child`` with colors and text attributes.

    The style is pushed before and popped after the child, so the style of
    any enclosing span is restored afterwards.
    """

    child: LogSpan | None = None
    foreground: ConsoleColor | None = None
    background: ConsoleColor | None = None
    bold: bool = False
    dim: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False

    def render(self, buffer: ConsoleMessageBuffer) -> None:
        buffer.push_style(
            self.foreground,
            self.background,
            bold=self.bold,
            dim=self.dim,
            italic=self.italic,
            underline=self.underline,
            strikethrough=self.strikethrough,
        )
        render_span(self.child, buffer)
        buffer.pop_style()


@dataclass(slots=True, frozen=True)
class Surrounded(SlottedSpan):
    """``prefix`` + ``child`` + ``suffix``, or nothing at all without ``child``.

    Examples
    --------
    >>> from lib_log_spans.domain.spans.foundation import render_to_string
    >>> render_to_string(Surrounded(child=PlainText("x"), prefix=PlainText("["), suffix=PlainText("]")))
    '[x]'
    >>> render_to_string(Surrounded(prefix=PlainText("[")))
    ''
    """

    child: LogSpan | None = None
    prefix: LogSpan | None = None
    suffix: LogSpan | None = None

    slot_names = ("prefix", "child", "suffix")
    primary_slot = "child"

    def build(self) -> LogSpan:
        if self.child is None:
            return EmptySpan()
        return SpanSequence(tuple(span for span in (self.prefix, self.child, self.suffix) if span is not None))


class BoxBorderStyle(Enum):
    """Box drawing character sets as ``(top-left, top-right, bottom-left, bottom-right, horizontal, vertical)``."""

    SINGLE = ("┌", "┐", "└", "┘", "─", "│")
    DOUBLE = ("╔", "╗", "╚", "╝", "═", "║")
    ROUNDED = ("╭", "╮", "╰", "╯", "─", "│")
    HEAVY = ("┏", "┓", "┗", "┛", "━", "┃")
    ASCII = ("+", "+", "+", "+", "-", "|")

    @property
    def top_left(self) -> str:
        return self.value[0]

    @property
    def top_right(self) -> str:
        return self.value[1]

    @property
    def bottom_left(self) -> str:
        return self.value[2]

    @property
    def bottom_right(self) -> str:
        return self.value[3]

    @property
    def horizontal(self) -> str:
        return self.value[4]

    @property
    def vertical(self) -> str:
        return self.value[5]


@dataclass(slots=True, frozen=True)
class Bordered(SingleChildSpan, RenderSpan):
    """Draw a box around the (possibly multi-line) rendered child.

    The child is pre-rendered into a child buffer so the box width can be
    measured on visible characters, ignoring escape codes.

    Examples
    --------
    >>> from lib_log_spans.domain.spans.foundation import render_to_string
    >>> print(render_to_string(Bordered(PlainText("hi\\nyou"), style=BoxBorderStyle.ASCII)))
    +-----+
    | hi  |
    | you |
    +-----+
    """

    child: LogSpan | None = None
    style: BoxBorderStyle = BoxBorderStyle.SINGLE
    border_color: ConsoleColor | None = None
    padding: int = 1

    def render(self, buffer: ConsoleMessageBuffer) -> None:
        scratch = buffer.create_child_buffer()
        render_span(self.child, scratch)
        content = scratch.text
        if not content:
            return

        lines = content.split("\n")
        widths = [visible_length_of(line) for line in lines]
        max_width = max(widths)
        pad = " " * self.padding
        inner = max_width + self.padding * 2
        chars = self.style

        buffer.write(chars.top_left + chars.horizontal * inner + chars.top_right, foreground=self.border_color)
        buffer.write("\n")
        for line, width in zip(lines, widths):
            buffer.write(chars.vertical, foreground=self.border_color)
            buffer.write(pad + line + " " * (max_width - width) + pad)
            buffer.write(chars.vertical, foreground=self.border_color)
            buffer.write("\n")
        buffer.write(chars.bottom_left + chars.horizontal * inner + chars.bottom_right, foreground=self.border_color)


# ---------------------------------------------------------------------------
# Semantic spans
# ---------------------------------------------------------------------------


def _clock(date: datetime) -> str:
    return f"{date.hour:02d}:{date.minute:02d}:{date.second:02d}.{date.microsecond // 1000:03d}"


@dataclass(slots=True, frozen=True)
class Timestamp(LogSpan):
    """Time of day as ``HH:MM:SS.mmm``."""

    date: datetime

    def build(self) -> LogSpan:
        return PlainText(_clock(self.date))


@dataclass(slots=True, frozen=True)
class BracketedTimestamp(LogSpan):
    """Time of day as ``[HH:MM:SS.mmm]``."""

    date: datetime

    def build(self) -> LogSpan:
        return PlainText(f"[{_clock(self.date)}]")


@dataclass(slots=True, frozen=True)
class FullTimestamp(LogSpan):
    """Date and time as ``YYYY-MM-DD HH:MM:SS.mmm``."""

    date: datetime

    def build(self) -> LogSpan:
        return PlainText(f"{self.date.year:04d}-{self.date.month:02d}-{self.date.day:02d} {_clock(self.date)}")


@dataclass(slots=True, frozen=True)
class SourceLocation(LogSpan):
    """``file:line``, just ``file`` without a line, nothing without a file."""

    file_name: str | None = None
    line: int | None = None

    def build(self) -> LogSpan:
        if self.file_name is None:
            return EmptySpan()
        if self.line is not None:
            return PlainText(f"{self.file_name}:{self.line}")
        return PlainText(self.file_name)


@dataclass(slots=True, frozen=True)
class LoggerName(LogSpan):
    name: str

    def build(self) -> LogSpan:
        return PlainText(self.name)


@dataclass(slots=True, frozen=True)
class BracketedLoggerName(LogSpan):
    name: str

    def build(self) -> LogSpan:
        return PlainText(f"[{self.name}]")


@dataclass(slots=True, frozen=True)
class ClassName(LogSpan):
    """Class name, optionally followed by ``@`` and an instance hash."""

    name: str
    instance_hash: str | None = None

    def build(self) -> LogSpan:
        if self.instance_hash is not None:
            return PlainText(f"{self.name}@{self.instance_hash}")
        return PlainText(self.name)

    @classmethod
    def from_record(cls, record: "LogRecord", hash_length: int = 8) -> "ClassName | None":
        """Derive the class label of ``record``.

        With both an instance and an instance hash the instance's type name
        is used together with the last ``hash_length`` hex digits of the
        hash. Otherwise the caller's class name (or the instance type)
        appears without a hash. Returns ``None`` when nothing is known.
        """
        if record.instance is not None and record.instance_hash is not None:
            handle = InstanceHandle.of(record.instance_hash)
            return cls(type(record.instance).__name__, handle.hex(hash_length))
        name = record.resolved_class_name
        if name is None:
            return None
        return cls(name)


@dataclass(slots=True, frozen=True)
class MethodName(LogSpan):
    name: str

    def build(self) -> LogSpan:
        return PlainText(self.name)


@dataclass(slots=True, frozen=True)
class BracketedLogLevel(LogSpan):
    """Level as ``[info]``, ``[warning]``..."""

    level: LogLevel

    def build(self) -> LogSpan:
        return PlainText(f"[{self.level.severity}]")


@dataclass(slots=True, frozen=True)
class LogMessage(LogSpan):
    message: Any

    def build(self) -> LogSpan:
        text = "" if self.message is None else str(self.message)
        return PlainText(text) if text else EmptySpan()


def _data_field() -> Any:
    return field(default_factory=dict, hash=False)


@dataclass(slots=True, frozen=True)
class InlineData(LogSpan):
    """Structured data on one line: ``key: "value", other: 3``."""

    data: Mapping[str, Any] = _data_field()

    def build(self) -> LogSpan:
        if not self.data:
            return EmptySpan()
        return PlainText(", ".join(f"{format_yaml_key(key)}: {format_yaml_value(value)}" for key, value in self.data.items()))


@dataclass(slots=True, frozen=True)
class MultilineData(LogSpan):
    """Structured data as YAML lines, starting on a new line."""

    data: Mapping[str, Any] = _data_field()

    def build(self) -> LogSpan:
        if not self.data:
            return EmptySpan()
        return PlainText("\n" + "\n".join(format_as_yaml(dict(self.data))))


@dataclass(slots=True, frozen=True)
class KeyValueData(LogSpan):
    """Structured data as ``key=value`` pairs separated by spaces."""

    data: Mapping[str, Any] = _data_field()

    def build(self) -> LogSpan:
        if not self.data:
            return EmptySpan()
        return PlainText(" ".join(f"{key}={value}" for key, value in self.data.items()))


@dataclass(slots=True, frozen=True)
class ErrorSpan(LogSpan):
    error: object | None = None

    def build(self) -> LogSpan:
        if self.error is None:
            return EmptySpan()
        if isinstance(self.error, BaseException):
            return PlainText("".join(_traceback.format_exception_only(type(self.error), self.error)).rstrip("\n"))
        return PlainText(str(self.error))


@dataclass(slots=True, frozen=True)
class StackTraceSpan(LogSpan):
    """A traceback, either preformatted text or a traceback object."""

    stack_trace: str | TracebackType | None = None

    def build(self) -> LogSpan:
        if self.stack_trace is None:
            return EmptySpan()
        if isinstance(self.stack_trace, TracebackType):
            return PlainText("".join(_traceback.format_tb(self.stack_trace)).rstrip("\n"))
        return PlainText(str(self.stack_trace).rstrip("\n"))


def sequence(*spans: LogSpan | None) -> SpanSequence:
    """Build a :class:`SpanSequence`, dropping ``None`` entries."""
    return SpanSequence(tuple(span for span in spans if span is not None))


def join_spans(spans: Iterable[LogSpan], separator: LogSpan | None = None) -> SpanSequence:
    separator = separator if separator is not None else Whitespace()
    items: list[LogSpan] = []
    for span in spans:
        if items:
            items.append(separator)
        items.append(span)
    return SpanSequence(tuple(items))


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
    "LoggerName",
    "MethodName",
    "MultilineData",
    "NewLine",
    "PlainText",
    "SourceLocation",
    "SpanSequence",
    "StackTraceSpan",
    "Surrounded",
    "Timestamp",
    "Whitespace",
    "join_spans",
    "sequence",
]
