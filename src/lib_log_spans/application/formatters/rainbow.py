"""Colorful single-line formatter with per-identity hash colors.

Purpose
-------
Produce the default human-facing log layout: dimmed time, colored level,
source location, and logger/class/method names each tinted with a stable
hash color, followed by the message and its data.

Contents
--------
* :class:`DataPresentation` - inline vs. multi-line structured data.
* :class:`RainbowFormatOptions` - display switches, mergeable per record.
* :class:`RainbowFormatter` - :class:`SpanBasedFormatter` implementation.
* :func:`level_color` / :func:`dimmed` helpers.

System Role
-----------
Default formatter of the rich console adapter and the CLI demo.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import ClassVar, Sequence

from lib_log_spans.domain.color_support import TerminalColorSupport
from lib_log_spans.domain.colors import IndexedColor
from lib_log_spans.domain.hash_colors import ColorSaturation, color_for_hash
from lib_log_spans.domain.levels import LogLevel
from lib_log_spans.domain.records import FormatOptions, LogRecord, TimeDisplay
from lib_log_spans.domain.spans import (
    AnsiStyled,
    BracketedLogLevel,
    BracketedTimestamp,
    ClassName,
    ErrorSpan,
    InlineData,
    LogMessage,
    LoggerName,
    LogSpan,
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
)

from ..formatting import SpanBasedFormatter, SpanTransformer

WHITE = IndexedColor(7)
LOCATION_COLOR = IndexedColor(110)
NEUTRAL_ERROR_COLOR = IndexedColor(244)

_AUTO_WALL_CLOCK_THRESHOLD = timedelta(seconds=1)


class DataPresentation(Enum):
    INLINE = "inline"
    MULTILINE = "multiline"


@dataclass(slots=True, frozen=True)
class RainbowFormatOptions(FormatOptions):
    """Display switches of :class:`RainbowFormatter`.

    ``None`` means "inherit": :meth:`merge` lets a per-record instance
    override only the fields it sets.
    """

    data: DataPresentation | None = None
    time_display: TimeDisplay | None = None
    show_location: bool | None = None
    show_logger: bool | None = None
    show_class: bool | None = None
    show_method: bool | None = None
    show_log_level: bool | None = None

    DEFAULTS: ClassVar["RainbowFormatOptions"]

    def merge(self, other: "RainbowFormatOptions | None") -> "RainbowFormatOptions":
        """Return these options overridden by every non-``None`` field of ``other``.

        Examples
        --------
        >>> base = RainbowFormatOptions(show_logger=True, show_class=True)
        >>> base.merge(RainbowFormatOptions(show_class=False)).show_class
        False
        >>> base.merge(None) is base
        True
        """
        if other is None:
            return self
        return RainbowFormatOptions(
            data=other.data if other.data is not None else self.data,
            time_display=other.time_display if other.time_display is not None else self.time_display,
            show_location=other.show_location if other.show_location is not None else self.show_location,
            show_logger=other.show_logger if other.show_logger is not None else self.show_logger,
            show_class=other.show_class if other.show_class is not None else self.show_class,
            show_method=other.show_method if other.show_method is not None else self.show_method,
            show_log_level=other.show_log_level if other.show_log_level is not None else self.show_log_level,
        )


RainbowFormatOptions.DEFAULTS = RainbowFormatOptions(
    data=DataPresentation.INLINE,
    time_display=TimeDisplay.AUTO,
    show_location=True,
    show_logger=True,
    show_class=True,
    show_method=True,
    show_log_level=True,
)


def level_color(level: LogLevel) -> IndexedColor | None:
    """Color reserved for ``level``; ``None`` for levels below warning."""
    if level.value > LogLevel.ERROR.value:
        return IndexedColor(203)
    if level.value >= LogLevel.ERROR.value:
        return IndexedColor(167)
    if level.value >= LogLevel.WARNING.value:
        return IndexedColor(179)
    return None


def dimmed(span: LogSpan) -> AnsiStyled:
    return AnsiStyled(span, foreground=WHITE, dim=True)


class RainbowFormatter(SpanBasedFormatter):
    """Colorful formatter; see :class:`RainbowFormatOptions` for switches."""

    def __init__(
        self,
        options: RainbowFormatOptions | None = None,
        *,
        span_transformers: Sequence[SpanTransformer] = (),
    ) -> None:
        super().__init__(span_transformers=span_transformers)
        self.options = options if options is not None else RainbowFormatOptions()

    def effective_options(self, record: LogRecord | None = None) -> RainbowFormatOptions:
        merged = RainbowFormatOptions.DEFAULTS.merge(self.options)
        if record is not None:
            for override in record.options_of(RainbowFormatOptions):
                merged = merged.merge(override)
        return merged

    @property
    def requires_caller_info(self) -> bool:
        options = self.effective_options()
        return bool(options.show_location or options.show_class or options.show_method)

    def build_span(self, record: LogRecord, color_support: TerminalColorSupport) -> LogSpan:
        options = self.effective_options(record)
        color = level_color(record.level)
        spans: list[LogSpan] = []

        spans.extend(_time_spans(record, options.time_display or TimeDisplay.AUTO))

        if options.show_log_level:
            spans.append(
                Surrounded(
                    AnsiStyled(BracketedLogLevel(record.level), foreground=color or WHITE),
                    prefix=Whitespace(),
                )
            )

        if options.show_location:
            location = None
            if record.file_name is not None:
                location = AnsiStyled(SourceLocation(record.file_name, record.line), foreground=LOCATION_COLOR)
            spans.append(Surrounded(location, prefix=Whitespace()))

        if options.show_logger:
            logger_span = None
            if record.logger_name is not None:
                logger_span = AnsiStyled(
                    LoggerName(record.logger_name),
                    foreground=color_for_hash(record.logger_name, ColorSaturation.HIGH, color_support),
                )
            spans.append(Surrounded(logger_span, prefix=Whitespace()))

        class_span = ClassName.from_record(record, hash_length=4)
        if options.show_class:
            class_styled = None
            if class_span is not None:
                class_styled = AnsiStyled(
                    class_span,
                    foreground=color_for_hash(class_span.name, ColorSaturation.LOW, color_support),
                )
            spans.append(Surrounded(class_styled, prefix=Whitespace()))

        if options.show_method:
            method_styled = None
            if record.method_name is not None:
                name = strip_class_prefix(record.method_name, record.resolved_class_name)
                method_styled = AnsiStyled(
                    MethodName(name),
                    foreground=color_for_hash(name, ColorSaturation.LOW, color_support),
                )
            spans.append(Surrounded(method_styled, prefix=Whitespace()))

        spans.append(Whitespace())
        message = LogMessage(record.message)
        spans.append(message if color is None else AnsiStyled(message, foreground=color))

        if record.data:
            data_span: LogSpan
            if options.data is DataPresentation.MULTILINE:
                data_span = MultilineData(record.data)
            else:
                data_span = Surrounded(InlineData(record.data), prefix=PlainText(" ("), suffix=PlainText(")"))
            spans.append(dimmed(data_span) if color is None else AnsiStyled(data_span, foreground=color))

        if record.error is not None:
            spans.extend((NewLine(), AnsiStyled(ErrorSpan(record.error), foreground=color or NEUTRAL_ERROR_COLOR)))

        if record.stack_trace is not None:
            spans.extend(
                (NewLine(), AnsiStyled(StackTraceSpan(record.stack_trace), foreground=color or NEUTRAL_ERROR_COLOR))
            )

        return SpanSequence(tuple(spans))


def _time_spans(record: LogRecord, mode: TimeDisplay) -> list[LogSpan]:
    wall_clock = record.wall_clock or record.timestamp
    match mode:
        case TimeDisplay.CLOCK:
            return [dimmed(Timestamp(record.timestamp))]
        case TimeDisplay.WALL_CLOCK:
            return [dimmed(Timestamp(wall_clock))]
        case TimeDisplay.BOTH:
            return [dimmed(Timestamp(wall_clock)), Whitespace(), dimmed(BracketedTimestamp(record.timestamp))]
        case TimeDisplay.AUTO:
            spans: list[LogSpan] = [dimmed(Timestamp(wall_clock))]
            if abs(wall_clock - record.timestamp) > _AUTO_WALL_CLOCK_THRESHOLD:
                spans.extend((Whitespace(), dimmed(BracketedTimestamp(record.timestamp))))
            return spans
        case TimeDisplay.OFF:
            return []
    raise ValueError(f"Unsupported time display: {mode!r}")


def strip_class_prefix(method: str, class_name: str | None) -> str:
    """Drop a leading ``Class.`` from qualified method names.

    Examples
    --------
    >>> strip_class_prefix("Worker.run", "Worker")
    'run'
    >>> strip_class_prefix("main", None)
    'main'
    """
    if class_name and method.startswith(f"{class_name}."):
        return method[len(class_name) + 1 :]
    return method


__all__ = [
    "DataPresentation",
    "RainbowFormatOptions",
    "RainbowFormatter",
    "dimmed",
    "level_color",
    "strip_class_prefix",
]
