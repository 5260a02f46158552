"""Span document model: structural kinds and the render pipeline.

Purpose
-------
Describe formatted log output as an immutable tree of spans. Each span is
one of four structural kinds (leaf, single child, multiple children, named
slots) and is either renderable or *buildable*: a buildable span returns
another span from :meth:`LogSpan.build` until a renderable one results.

Contents
--------
* :class:`SpanKind` and :func:`span_kind` - the closed set of structures.
* :class:`LogSpan`, :class:`RenderSpan` - build/render protocol.
* :class:`SingleChildSpan`, :class:`MultiChildSpan`, :class:`SlottedSpan` -
  structural bases that know how to rebuild themselves with new children.
* :func:`resolve_span`, :func:`render_span`, :func:`render_to_string`.
* :class:`SpanBuildError`.

System Role
-----------
Formatters build span trees, transformers edit them through
:mod:`lib_log_spans.domain.spans.tree`, and :func:`render_span` writes the
result into a :class:`~lib_log_spans.domain.buffer.ConsoleMessageBuffer`.
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Iterable

from ..buffer import ConsoleMessageBuffer
from ..color_support import TerminalColorSupport

if TYPE_CHECKING:
    from collections.abc import Iterator

MAX_BUILD_STEPS = 64


class SpanBuildError(RuntimeError):
    """Raised when a span never resolves to something renderable."""


class SpanKind(Enum):
    """Structural kind of a span; decides how children are stored."""

    LEAF = "leaf"
    SINGLE = "single"
    MULTI = "multi"
    SLOTTED = "slotted"


class LogSpan(ABC):
    """Immutable description of a piece of log output.

    Subclasses are frozen dataclasses. A plain :class:`LogSpan` is a leaf
    whose :meth:`build` returns another span; extend :class:`RenderSpan`
    for primitives that write to the buffer directly, or one of the
    structural bases for spans with children.
    """

    __slots__ = ()

    kind: ClassVar[SpanKind] = SpanKind.LEAF

    @abstractmethod
    def build(self) -> "LogSpan":
        """Return the span this one stands for. Must be free of side effects."""


class RenderSpan(LogSpan):
    """Span that renders itself; :meth:`build` returns ``self``."""

    __slots__ = ()

    def build(self) -> LogSpan:
        return self

    @abstractmethod
    def render(self, buffer: ConsoleMessageBuffer) -> None:
        """Write this span into ``buffer``."""


class SingleChildSpan(LogSpan):
    """Span holding zero or one child in a ``child`` field."""

    __slots__ = ()

    kind: ClassVar[SpanKind] = SpanKind.SINGLE
    child: LogSpan | None

    def with_child(self, child: LogSpan | None) -> "SingleChildSpan":
        return dataclasses.replace(self, child=child)


class MultiChildSpan(LogSpan):
    """Span holding an ordered ``children`` tuple, rendered in order."""

    __slots__ = ()

    kind: ClassVar[SpanKind] = SpanKind.MULTI
    children: tuple[LogSpan, ...]

    def with_children(self, children: Iterable[LogSpan]) -> "MultiChildSpan":
        return dataclasses.replace(self, children=tuple(children))


class SlottedSpan(LogSpan):
    """Span with a fixed set of named, optional children.

    ``slot_names`` lists the fields holding children in declaration order.
    The whole span renders as nothing while ``primary_slot`` is ``None``.
    """

    __slots__ = ()

    kind: ClassVar[SpanKind] = SpanKind.SLOTTED
    slot_names: ClassVar[tuple[str, ...]] = ()
    primary_slot: ClassVar[str] = ""

    def get_slot(self, name: str) -> LogSpan | None:
        if name not in self.slot_names:
            raise KeyError(f"{type(self).__name__} has no slot {name!r}")
        return getattr(self, name)

    def slots(self) -> tuple[tuple[str, LogSpan | None], ...]:
        """Return ``(name, child)`` pairs in declaration order."""
        return tuple((name, getattr(self, name)) for name in self.slot_names)

    def with_slots(self, **slots: LogSpan | None) -> "SlottedSpan":
        unknown = set(slots) - set(self.slot_names)
        if unknown:
            raise KeyError(f"{type(self).__name__} has no slots {sorted(unknown)!r}")
        return dataclasses.replace(self, **slots)


def span_kind(span: LogSpan) -> SpanKind:
    return span.kind


def child_spans(span: LogSpan) -> "Iterator[tuple[str | None, LogSpan]]":
    """Yield ``(slot name, child)`` for every present child of ``span``."""
    match span.kind:
        case SpanKind.LEAF:
            return
        case SpanKind.SINGLE:
            if span.child is not None:  # type: ignore[attr-defined]
                yield None, span.child  # type: ignore[attr-defined]
        case SpanKind.MULTI:
            for child in span.children:  # type: ignore[attr-defined]
                yield None, child
        case SpanKind.SLOTTED:
            for name, child in span.slots():  # type: ignore[attr-defined]
                if child is not None:
                    yield name, child


def is_absent(span: LogSpan) -> bool:
    """Return ``True`` when ``span`` renders as nothing because optional content is missing."""
    match span.kind:
        case SpanKind.SINGLE:
            return span.child is None  # type: ignore[attr-defined]
        case SpanKind.SLOTTED:
            return span.get_slot(span.primary_slot) is None  # type: ignore[attr-defined]
        case _:
            return False


def resolve_span(span: LogSpan) -> RenderSpan | None:
    """Build ``span`` until a :class:`RenderSpan` results.

    Returns ``None`` when an intermediate span is absent (see
    :func:`is_absent`). Raises :class:`SpanBuildError` when the chain does
    not end within :data:`MAX_BUILD_STEPS` or a span builds to itself
    without being renderable.
    """
    current = span
    for _ in range(MAX_BUILD_STEPS):
        if is_absent(current):
            return None
        if isinstance(current, RenderSpan):
            return current
        built = current.build()
        if built is current:
            raise SpanBuildError(f"{type(current).__name__}.build() returned itself but it is not a RenderSpan")
        current = built
    raise SpanBuildError(f"{type(span).__name__} did not resolve to a renderable span within {MAX_BUILD_STEPS} build steps")


def render_span(span: LogSpan | None, buffer: ConsoleMessageBuffer) -> None:
    """Render ``span`` into ``buffer``; ``None`` and absent spans write nothing."""
    if span is None:
        return
    renderable = resolve_span(span)
    if renderable is not None:
        renderable.render(buffer)


def render_to_string(span: LogSpan, color_support: TerminalColorSupport = TerminalColorSupport.NONE) -> str:
    """Render ``span`` into a fresh buffer and return the text.

    Examples
    --------
    >>> from lib_log_spans.domain.spans.library import PlainText, SpanSequence
    >>> render_to_string(SpanSequence((PlainText("a"), PlainText("b"))))
    'ab'
    """
    buffer = ConsoleMessageBuffer(color_support)
    render_span(span, buffer)
    return buffer.text


__all__ = [
    "LogSpan",
    "MAX_BUILD_STEPS",
    "MultiChildSpan",
    "RenderSpan",
    "SingleChildSpan",
    "SlottedSpan",
    "SpanBuildError",
    "SpanKind",
    "child_spans",
    "is_absent",
    "render_span",
    "render_to_string",
    "resolve_span",
    "span_kind",
]
