"""Formatter contracts and the span-based formatter pipeline.

Purpose
-------
Turn a :class:`~lib_log_spans.domain.records.LogRecord` into terminal text:
build a span tree, let transformers rewrite it, render it into a buffer.

Contents
--------
* :data:`SpanTransformer` - ``(root node, record) -> None`` callback type.
* :class:`SpanFormatOptions` - per-record transformers.
* :class:`ConsoleMessageFormatter` - protocol every console formatter meets.
* :class:`SpanBasedFormatter` - base class implementing the pipeline.

System Role
-----------
Application layer between the domain span model and console adapters such
as :class:`lib_log_spans.adapters.console.rich_console.RichConsoleAdapter`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence, runtime_checkable

from lib_log_spans.domain.buffer import ConsoleMessageBuffer
from lib_log_spans.domain.color_support import TerminalColorSupport
from lib_log_spans.domain.records import FormatOptions, LogRecord
from lib_log_spans.domain.spans import LogSpan, SpanNode, SpanTree, render_span

logger = logging.getLogger(__name__)

SpanTransformer = Callable[[SpanNode, LogRecord], None]


@dataclass(slots=True, frozen=True)
class SpanFormatOptions(FormatOptions):
    """Transformers to apply to a single record, after the formatter's own."""

    span_transformers: tuple[SpanTransformer, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "span_transformers", tuple(self.span_transformers))


@runtime_checkable
class ConsoleMessageFormatter(Protocol):
    """Write one record into a console buffer."""

    @property
    def requires_caller_info(self) -> bool:
        """Whether the host logger should resolve file/line/method for records."""

    def format(self, record: LogRecord, buffer: ConsoleMessageBuffer) -> None:
        """Render ``record`` into ``buffer``."""


class SpanBasedFormatter(ABC):
    """Formatter that describes its output as a span tree.

    Subclasses implement :meth:`build_span`. When transformers are
    configured (on the formatter or through :class:`SpanFormatOptions` on
    the record) the tree is mirrored into a :class:`SpanTree`, every
    transformer edits it in place and the edited tree is rendered.
    Otherwise the span is rendered directly.
    """

    def __init__(self, *, span_transformers: Sequence[SpanTransformer] = ()) -> None:
        self.span_transformers: tuple[SpanTransformer, ...] = tuple(span_transformers)

    @property
    def requires_caller_info(self) -> bool:
        return True

    @abstractmethod
    def build_span(self, record: LogRecord, color_support: TerminalColorSupport) -> LogSpan:
        """Describe ``record`` as spans for a ``color_support`` terminal."""

    def transformers_for(self, record: LogRecord) -> list[SpanTransformer]:
        transformers = list(self.span_transformers)
        for options in record.options_of(SpanFormatOptions):
            transformers.extend(options.span_transformers)
        return transformers

    def format(self, record: LogRecord, buffer: ConsoleMessageBuffer) -> None:
        span = self.build_span(record, buffer.color_support)
        transformers = self.transformers_for(record)
        if not transformers:
            render_span(span, buffer)
            return

        tree = SpanTree.from_span(span)
        for transformer in transformers:
            transformer(tree.root, record)
        logger.debug("applied %d span transformer(s) to %s record", len(transformers), record.level.severity)
        render_span(tree.to_span(), buffer)

    def format_to_string(
        self,
        record: LogRecord,
        color_support: TerminalColorSupport = TerminalColorSupport.NONE,
    ) -> str:
        """Format ``record`` into a fresh buffer and return its text."""
        buffer = ConsoleMessageBuffer(color_support)
        self.format(record, buffer)
        return buffer.text


__all__ = [
    "ConsoleMessageFormatter",
    "SpanBasedFormatter",
    "SpanFormatOptions",
    "SpanTransformer",
]
