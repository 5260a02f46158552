"""Editable mirror of a span tree for transformers.

Purpose
-------
Let transformers inspect and rewrite a built span tree (find, remove,
insert, replace, wrap, unwrap) before it is rendered, without making spans
themselves mutable.

Contents
--------
* :class:`SpanTree` - arena holding payloads, parent links, child lists and
  slot names in flat lists addressed by integer index.
* :class:`SpanNode` - lightweight handle ``(tree, index)`` exposing the
  navigation and editing API.

System Role
-----------
Created once per render pass by
:class:`lib_log_spans.application.formatting.SpanBasedFormatter` when
transformers are configured, then converted back with :meth:`SpanNode.to_span`.
Nothing is cached between passes.

Notes
-----
Structural edits return ``bool``. They refuse (``False``) when the target
parent cannot hold another child: leaf payloads hold none, single-child
payloads one, slotted payloads one per declared slot. They also refuse
edits that would make a node its own ancestor.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, TypeVar

from .foundation import LogSpan, SpanKind, child_spans

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=LogSpan)


class SpanTree:
    """Flat storage of every node created during one render pass.

    Detached nodes stay in the arena (their parent is ``None``) so handles
    held by a transformer keep working after :meth:`SpanNode.remove`.
    """

    def __init__(self) -> None:
        self._spans: list[LogSpan] = []
        self._parents: list[int | None] = []
        self._children: list[list[int]] = []
        self._slots: list[str | None] = []
        self._origin = 0

    @classmethod
    def from_span(cls, span: LogSpan) -> "SpanTree":
        """Mirror ``span`` and all of its descendants."""
        tree = cls()
        tree._origin = tree._materialize(span, None)
        return tree

    def _materialize(self, span: LogSpan, slot: str | None) -> int:
        index = len(self._spans)
        self._spans.append(span)
        self._parents.append(None)
        self._children.append([])
        self._slots.append(slot)
        self._attach_children_of(index)
        return index

    def _attach_children_of(self, index: int) -> None:
        for slot, child in child_spans(self._spans[index]):
            child_index = self._materialize(child, slot)
            self._parents[child_index] = index
            self._children[index].append(child_index)

    def create_node(self, span: LogSpan) -> "SpanNode":
        """Add a detached node for ``span`` (and its subtree) to this tree."""
        return SpanNode(self, self._materialize(span, None))

    def node(self, index: int) -> "SpanNode":
        if not 0 <= index < len(self._spans):
            raise IndexError(f"no node with index {index}")
        return SpanNode(self, index)

    @property
    def root(self) -> "SpanNode":
        """Topmost ancestor of the node :meth:`from_span` started from.

        Transformers may attach the original root below a new wrapper node;
        the wrapper then becomes the root.
        """
        index = self._origin
        while self._parents[index] is not None:
            index = self._parents[index]  # type: ignore[assignment]
        return SpanNode(self, index)

    def to_span(self) -> LogSpan:
        return self.root.to_span()

    def __len__(self) -> int:
        return len(self._spans)


def _capacity(span: LogSpan) -> int | None:
    """Maximum number of children ``span`` can hold; ``None`` means unbounded."""
    match span.kind:
        case SpanKind.LEAF:
            return 0
        case SpanKind.SINGLE:
            return 1
        case SpanKind.MULTI:
            return None
        case SpanKind.SLOTTED:
            return len(span.slot_names)  # type: ignore[attr-defined]
    raise ValueError(f"Unknown span kind: {span.kind!r}")


class SpanNode:
    """Handle to one node of a :class:`SpanTree`.

    Handles are cheap and compare equal when they address the same node.

    Examples
    --------
    >>> from lib_log_spans.domain.spans.library import AnsiStyled, PlainText, SpanSequence
    >>> root = SpanNode.from_span(SpanSequence((PlainText("a"), PlainText("b"))))
    >>> root.find_first(PlainText).wrap(lambda span: AnsiStyled(span, bold=True))
    >>> root.to_span()
    SpanSequence(children=(AnsiStyled(child=PlainText(value='a'), foreground=None, background=None, bold=True, dim=False, italic=False, underline=False, strikethrough=False), PlainText(value='b')))
    """

    __slots__ = ("_tree", "_index")

    def __init__(self, tree: SpanTree, index: int) -> None:
        self._tree = tree
        self._index = index

    @classmethod
    def from_span(cls, span: LogSpan) -> "SpanNode":
        """Mirror ``span`` into a new tree and return its root node."""
        return SpanTree.from_span(span).root

    # -- navigation --------------------------------------------------------

    @property
    def tree(self) -> SpanTree:
        return self._tree

    @property
    def span(self) -> LogSpan:
        return self._tree._spans[self._index]

    @property
    def slot(self) -> str | None:
        """Slot name this node fills in a slotted parent."""
        return self._tree._slots[self._index]

    @property
    def parent(self) -> "SpanNode | None":
        parent = self._tree._parents[self._index]
        return None if parent is None else SpanNode(self._tree, parent)

    @property
    def children(self) -> tuple["SpanNode", ...]:
        return tuple(SpanNode(self._tree, index) for index in self._tree._children[self._index])

    @property
    def index(self) -> int | None:
        """Position among the parent's children, ``None`` for roots."""
        parent = self._tree._parents[self._index]
        if parent is None:
            return None
        return self._tree._children[parent].index(self._index)

    @property
    def previous_sibling(self) -> "SpanNode | None":
        position = self.index
        if position is None or position == 0:
            return None
        return self.parent.children[position - 1]  # type: ignore[union-attr]

    @property
    def next_sibling(self) -> "SpanNode | None":
        position = self.index
        if position is None:
            return None
        siblings = self._tree._children[self._tree._parents[self._index]]  # type: ignore[index]
        if position + 1 >= len(siblings):
            return None
        return SpanNode(self._tree, siblings[position + 1])

    @property
    def root(self) -> "SpanNode":
        node = self
        while (parent := node.parent) is not None:
            node = parent
        return node

    def ancestors(self) -> Iterator["SpanNode"]:
        """Yield the parent, grandparent, ... up to the root."""
        parent = self._tree._parents[self._index]
        while parent is not None:
            yield SpanNode(self._tree, parent)
            parent = self._tree._parents[parent]

    def walk(self) -> Iterator["SpanNode"]:
        """Yield this node and all descendants in pre-order."""
        stack = [self._index]
        while stack:
            index = stack.pop()
            yield SpanNode(self._tree, index)
            stack.extend(reversed(self._tree._children[index]))

    def descendants(self) -> Iterator["SpanNode"]:
        walker = self.walk()
        next(walker)
        return walker

    def find_first(self, span_type: type[S]) -> "SpanNode | None":
        """First node (pre-order, including this one) whose span is a ``span_type``."""
        for node in self.walk():
            if isinstance(node.span, span_type):
                return node
        return None

    def find_all(self, span_type: type[S]) -> list["SpanNode"]:
        return [node for node in self.walk() if isinstance(node.span, span_type)]

    # -- editing -----------------------------------------------------------

    def _adopt(self, other: "SpanNode | LogSpan") -> "SpanNode":
        """Return a node of this tree for ``other``.

        Spans are materialized as new detached nodes. Nodes of another tree
        are copied in and detached from their old tree; the passed handle is
        re-pointed at the copy.
        """
        if isinstance(other, SpanNode):
            if other._tree is self._tree:
                return other
            other.remove()
            copy = self._tree.create_node(other.to_span())
            other._tree, other._index = copy._tree, copy._index
            return other
        return self._tree.create_node(other)

    def _accepts_child(self, candidate: "SpanNode") -> bool:
        if candidate == self or any(ancestor == candidate for ancestor in self.ancestors()):
            logger.debug("refused edit: %r would become its own ancestor", candidate.span)
            return False
        occupied = [index for index in self._tree._children[self._index] if index != candidate._index]
        capacity = _capacity(self.span)
        if capacity is not None and len(occupied) >= capacity:
            logger.debug("refused edit: %s cannot hold another child", type(self.span).__name__)
            return False
        return True

    def _free_slot(self, ignoring: int | None = None) -> str | None:
        span = self.span
        if span.kind is not SpanKind.SLOTTED:
            return None
        taken = {
            self._tree._slots[index] for index in self._tree._children[self._index] if index != ignoring
        }
        for name in span.slot_names:  # type: ignore[attr-defined]
            if name not in taken:
                return name
        return None

    def _insert_child(self, child: "SpanNode", position: int | None) -> None:
        """Attach detached ``child`` at ``position`` (``None`` appends)."""
        tree = self._tree
        tree._slots[child._index] = self._free_slot()
        tree._parents[child._index] = self._index
        siblings = tree._children[self._index]
        if position is None:
            siblings.append(child._index)
        else:
            siblings.insert(position, child._index)
        if self.span.kind is SpanKind.SLOTTED:
            order = self.span.slot_names  # type: ignore[attr-defined]
            siblings.sort(key=lambda index: order.index(tree._slots[index]))

    def remove(self) -> bool:
        """Detach this node from its parent. Returns ``False`` for roots."""
        tree = self._tree
        parent = tree._parents[self._index]
        if parent is None:
            return False
        tree._children[parent].remove(self._index)
        tree._parents[self._index] = None
        tree._slots[self._index] = None
        return True

    def append(self, child: "SpanNode | LogSpan") -> bool:
        """Add ``child`` as the last child, detaching it from its old parent first."""
        node = self._adopt(child)
        if not self._accepts_child(node):
            return False
        node.remove()
        self._insert_child(node, None)
        return True

    def prepend(self, child: "SpanNode | LogSpan") -> bool:
        node = self._adopt(child)
        if not self._accepts_child(node):
            return False
        node.remove()
        self._insert_child(node, 0)
        return True

    def _insert_sibling(self, new: "SpanNode | LogSpan", offset: int) -> bool:
        parent = self.parent
        if parent is None:
            return False
        node = self._adopt(new)
        if node == self or not parent._accepts_child(node):
            return False
        node.remove()
        position = self.index
        parent._insert_child(node, position + offset)  # type: ignore[operator]
        return True

    def insert_before(self, new: "SpanNode | LogSpan") -> bool:
        """Insert ``new`` right before this node. ``False`` without a parent."""
        return self._insert_sibling(new, 0)

    def insert_after(self, new: "SpanNode | LogSpan") -> bool:
        return self._insert_sibling(new, 1)

    def replace_with(self, replacement: "SpanNode | LogSpan") -> bool:
        """Put ``replacement`` at this node's position and detach this node.

        The replacement takes over this node's slot. Returns ``False`` for
        roots and when ``replacement`` is this node or one of its ancestors.
        """
        parent_index = self._tree._parents[self._index]
        if parent_index is None:
            return False
        node = self._adopt(replacement)
        if node == self or any(ancestor == node for ancestor in self.ancestors()):
            return False
        node.remove()
        tree = self._tree
        siblings = tree._children[parent_index]
        position = siblings.index(self._index)
        siblings[position] = node._index
        tree._parents[node._index] = parent_index
        tree._slots[node._index] = tree._slots[self._index]
        tree._parents[self._index] = None
        tree._slots[self._index] = None
        return True

    def replace_span(self, span: LogSpan) -> None:
        """Swap the payload, rebuilding children from ``span``'s own structure."""
        tree = self._tree
        for index in tree._children[self._index]:
            tree._parents[index] = None
            tree._slots[index] = None
        tree._children[self._index] = []
        tree._spans[self._index] = span
        tree._attach_children_of(self._index)

    def wrap(self, wrapper: Callable[[LogSpan], LogSpan]) -> None:
        """Replace the payload with ``wrapper(current)``.

        ``current`` is this node's subtree as it stands, including earlier
        edits. ``wrapper`` should return a single-child span around it.
        """
        self.replace_span(wrapper(self.to_span()))

    def unwrap(self) -> bool:
        """Collapse this node into its only child; ``False`` unless it has exactly one."""
        tree = self._tree
        kids = tree._children[self._index]
        if len(kids) != 1:
            return False
        only = kids[0]
        tree._spans[self._index] = tree._spans[only]
        tree._children[self._index] = tree._children[only]
        for index in tree._children[self._index]:
            tree._parents[index] = self._index
        tree._children[only] = []
        tree._parents[only] = None
        tree._slots[only] = None
        return True

    # -- conversion --------------------------------------------------------

    def to_span(self) -> LogSpan:
        """Rebuild an immutable span tree reflecting every edit below this node."""
        span = self.span
        children = self.children
        match span.kind:
            case SpanKind.LEAF:
                return span
            case SpanKind.SINGLE:
                return span.with_child(children[0].to_span() if children else None)  # type: ignore[attr-defined]
            case SpanKind.MULTI:
                return span.with_children(child.to_span() for child in children)  # type: ignore[attr-defined]
            case SpanKind.SLOTTED:
                values: dict[str, LogSpan | None] = dict.fromkeys(span.slot_names)  # type: ignore[attr-defined]
                for child in children:
                    if child.slot is not None:
                        values[child.slot] = child.to_span()
                return span.with_slots(**values)  # type: ignore[attr-defined]
        raise ValueError(f"Unknown span kind: {span.kind!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpanNode):
            return NotImplemented
        return self._tree is other._tree and self._index == other._index

    def __hash__(self) -> int:
        return hash((id(self._tree), self._index))

    def __repr__(self) -> str:
        return f"SpanNode({type(self.span).__name__}, index={self._index})"


__all__ = ["SpanNode", "SpanTree"]
