from __future__ import annotations

import logging

import pytest

from lib_log_spans.domain.color_support import TerminalColorSupport
from lib_log_spans.domain.colors import IndexedColor
from lib_log_spans.domain.spans import (
    AnsiStyled,
    Bordered,
    BoxBorderStyle,
    LoggerName,
    LogSpan,
    NewLine,
    PlainText,
    SpanNode,
    SpanSequence,
    SpanTree,
    Surrounded,
    Whitespace,
    render_to_string,
)

RED = IndexedColor(1)


def _sample() -> LogSpan:
    return SpanSequence(
        (
            PlainText("A"),
            AnsiStyled(PlainText("B"), foreground=RED),
            Surrounded(LoggerName("svc"), prefix=Whitespace(), suffix=PlainText("!")),
            NewLine(),
            Bordered(PlainText("box"), style=BoxBorderStyle.ASCII),
        )
    )


def _render(node: SpanNode, support: TerminalColorSupport = TerminalColorSupport.ANSI256) -> str:
    return render_to_string(node.to_span(), support)


@pytest.mark.parametrize("support", list(TerminalColorSupport))
def test_round_trip_without_edits_renders_identically(support: TerminalColorSupport) -> None:
    span = _sample()
    assert render_to_string(SpanNode.from_span(span).to_span(), support) == render_to_string(span, support)
    assert SpanNode.from_span(span).to_span() == span


def test_navigation() -> None:
    root = SpanNode.from_span(_sample())
    first, styled, surrounded, newline, bordered = root.children

    assert root.parent is None and root.index is None
    assert styled.parent == root
    assert styled.index == 1
    assert styled.previous_sibling == first
    assert styled.next_sibling == surrounded
    assert first.previous_sibling is None
    assert bordered.next_sibling is None
    assert [child.slot for child in surrounded.children] == ["prefix", "child", "suffix"]
    logger_node = root.find_first(LoggerName)
    assert logger_node is not None
    assert list(logger_node.ancestors()) == [surrounded, root]
    assert logger_node.root == root
    assert len(root.find_all(PlainText)) == 4
    assert next(root.walk()) == root
    assert root not in list(root.descendants())


def test_tree_arena_keeps_detached_nodes() -> None:
    tree = SpanTree.from_span(_sample())
    size = len(tree)
    node = tree.root.children[0]

    assert node.remove() is True
    assert len(tree) == size
    assert node.parent is None
    assert node.span == PlainText("A")
    assert tree.node(node._index) == node
    with pytest.raises(IndexError):
        tree.node(size)


def test_remove_root_is_refused() -> None:
    assert SpanNode.from_span(PlainText("x")).remove() is False


def test_append_prepend_and_sibling_inserts() -> None:
    root = SpanNode.from_span(SpanSequence((PlainText("b"),)))
    middle = root.children[0]

    assert root.append(PlainText("d")) is True
    assert root.prepend(PlainText("a")) is True
    assert middle.insert_after(PlainText("c")) is True
    assert middle.insert_before(PlainText("_")) is True

    assert _render(root) == "a_bcd"


def test_sibling_insert_without_parent_is_refused() -> None:
    root = SpanNode.from_span(PlainText("x"))
    assert root.insert_before(PlainText("y")) is False
    assert root.insert_after(PlainText("y")) is False


def test_append_moves_an_existing_node() -> None:
    root = SpanNode.from_span(SpanSequence((PlainText("a"), SpanSequence((PlainText("b"),)))))
    a_node, inner = root.children

    assert inner.append(a_node) is True
    assert _render(root) == "ba"
    assert a_node.parent == inner


def test_leaf_and_single_child_arity_is_enforced(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_log_spans.domain.spans.tree")
    root = SpanNode.from_span(SpanSequence((PlainText("x"), AnsiStyled(PlainText("y"), bold=True))))
    leaf, styled = root.children

    assert leaf.append(PlainText("z")) is False
    assert styled.append(PlainText("z")) is False
    assert _render(root, TerminalColorSupport.NONE) == "xy"
    assert any("cannot hold another child" in record.getMessage() for record in caplog.records)


def test_single_child_slot_can_be_refilled_after_removal() -> None:
    root = SpanNode.from_span(AnsiStyled(PlainText("old"), foreground=RED))
    root.children[0].remove()

    assert _render(root) == ""
    assert root.append(PlainText("new")) is True
    assert _render(root, TerminalColorSupport.NONE) == "new"


def test_slotted_parent_fills_the_first_free_slot_in_declaration_order() -> None:
    root = SpanNode.from_span(Surrounded(PlainText("x"), prefix=PlainText("<")))

    assert root.append(PlainText(">")) is True
    assert [child.slot for child in root.children] == ["prefix", "child", "suffix"]
    assert _render(root) == "<x>"
    assert root.append(PlainText("?")) is False


def test_cycles_are_refused() -> None:
    root = SpanNode.from_span(SpanSequence((SpanSequence((PlainText("x"),)),)))
    inner = root.children[0]
    leaf = inner.children[0]

    assert inner.append(root) is False
    assert inner.append(inner) is False
    assert leaf.replace_with(root) is False
    assert _render(root) == "x"


def test_replace_with_takes_over_the_slot() -> None:
    root = SpanNode.from_span(Surrounded(LoggerName("svc"), prefix=PlainText("["), suffix=PlainText("]")))
    logger_node = root.find_first(LoggerName)

    assert logger_node.replace_with(PlainText("other")) is True
    assert logger_node.parent is None
    assert root.children[1].slot == "child"
    assert _render(root) == "[other]"
    assert root.replace_with(PlainText("x")) is False


def test_replace_span_rebuilds_children() -> None:
    root = SpanNode.from_span(SpanSequence((PlainText("a"),)))
    node = root.children[0]

    node.replace_span(SpanSequence((PlainText("b"), PlainText("c"))))

    assert len(node.children) == 2
    assert _render(root) == "bc"


def test_wrap_then_unwrap_restores_the_output() -> None:
    span = _sample()
    root = SpanNode.from_span(span)
    target = root.find_first(LoggerName)
    before = _render(root)

    target.wrap(lambda inner: AnsiStyled(inner, foreground=IndexedColor(33), underline=True))
    wrapped = _render(root)
    assert wrapped != before
    assert "\x1b[4m" in wrapped

    assert target.unwrap() is True
    assert _render(root) == before
    assert root.to_span() == span


def test_wrap_sees_earlier_edits_below_the_node() -> None:
    root = SpanNode.from_span(SpanSequence((PlainText("a"),)))
    root.append(PlainText("b"))

    root.wrap(lambda inner: AnsiStyled(inner, bold=True))

    assert _render(root, TerminalColorSupport.NONE) == "ab"
    assert isinstance(root.span, AnsiStyled)


def test_unwrap_requires_exactly_one_child() -> None:
    assert SpanNode.from_span(PlainText("x")).unwrap() is False
    assert SpanNode.from_span(SpanSequence((PlainText("a"), PlainText("b")))).unwrap() is False


def test_root_can_be_wrapped_through_a_new_parent() -> None:
    tree = SpanTree.from_span(PlainText("x"))
    original = tree.root
    wrapper = tree.create_node(Bordered(style=BoxBorderStyle.ASCII))

    assert wrapper.append(original) is True
    assert tree.root == wrapper
    assert render_to_string(tree.to_span()) == "+---+\n| x |\n+---+"


def test_nodes_from_another_tree_are_copied_in() -> None:
    target = SpanNode.from_span(SpanSequence(()))
    donor_root = SpanNode.from_span(SpanSequence((PlainText("moved"),)))
    donor = donor_root.children[0]

    assert target.append(donor) is True
    assert donor.tree is target.tree
    assert _render(target) == "moved"
    assert _render(donor_root) == ""


def test_node_handles_are_hashable_values() -> None:
    root = SpanNode.from_span(_sample())
    assert root.children[0] == root.children[0]
    assert len({root.children[0], root.children[0], root}) == 2
    assert "PlainText" in repr(root.children[0])
