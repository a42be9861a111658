"""Tests for the tree walker and the type-context combinator."""

from __future__ import annotations

import pytest
from graphql import parse
from graphql.language import FieldNode, NameNode
from graphql.utilities import TypeInfo

from gqlloc.traversal import (
    Replace,
    TypedVisitor,
    VisitAction,
    Visitor,
    iter_children,
    walk,
    with_type_context,
)
from tests.helpers import RecordingContext, star_wars_schema


class Recorder(Visitor):
    """Records enter/leave calls and answers from a per-kind table."""

    def __init__(self, on_enter=None, on_leave=None) -> None:
        self.entered: list[str] = []
        self.left: list[str] = []
        self.on_enter = on_enter or {}
        self.on_leave = on_leave or {}

    def enter(self, node):
        self.entered.append(_label(node))
        return self.on_enter.get(_label(node))

    def leave(self, node):
        self.left.append(_label(node))
        return self.on_leave.get(_label(node))


def _label(node) -> str:
    if isinstance(node, FieldNode):
        return f"field:{node.name.value}"
    if isinstance(node, NameNode):
        return f"name:{node.value}"
    return node.kind


class TestWalk:
    def test_document_order(self):
        rec = Recorder()
        assert walk(parse("{ a b }"), rec)
        assert rec.entered == [
            "document", "operation_definition", "selection_set",
            "field:a", "name:a", "field:b", "name:b",
        ]
        assert rec.left == [
            "name:a", "field:a", "name:b", "field:b",
            "selection_set", "operation_definition", "document",
        ]

    def test_iter_children_skips_empty_keys(self):
        doc = parse("{ a }")
        field = doc.definitions[0].selection_set.selections[0]
        assert [c.kind for c in iter_children(field)] == ["name"]

    def test_skip_prunes_children_but_still_leaves(self):
        rec = Recorder(on_enter={"field:a": VisitAction.SKIP})
        assert walk(parse("{ a { x } b }"), rec)
        assert "name:x" not in rec.entered
        assert "field:x" not in rec.entered
        assert "field:a" in rec.left
        assert "field:b" in rec.entered

    def test_stop_on_enter(self):
        rec = Recorder(on_enter={"field:a": VisitAction.STOP})
        assert not walk(parse("{ a b }"), rec)
        assert rec.entered[-1] == "field:a"
        assert "field:b" not in rec.entered
        assert rec.left == []

    def test_stop_on_leave(self):
        rec = Recorder(on_leave={"field:a": VisitAction.STOP})
        assert not walk(parse("{ a b }"), rec)
        assert "field:b" not in rec.entered
        assert rec.left == ["name:a", "field:a"]

    def test_none_means_continue(self):
        class Silent(Visitor):
            def enter(self, node):
                return None

            def leave(self, node):
                return None

        assert walk(parse("{ a }"), Silent())

    def test_replace_walks_new_node(self):
        replacement = parse("{ c { d } }").definitions[0].selection_set.selections[0]
        rec = Recorder(on_enter={"field:a": Replace(replacement)})
        assert walk(parse("{ a b }"), rec)
        assert "field:d" in rec.entered
        assert "name:a" not in rec.entered
        assert "field:c" in rec.left
        assert "field:a" not in rec.left

    def test_replace_on_leave_is_rejected(self):
        replacement = parse("{ c }").definitions[0].selection_set.selections[0]
        rec = Recorder(on_leave={"field:a": Replace(replacement)})
        with pytest.raises(TypeError):
            walk(parse("{ a }"), rec)


class TestTypedVisitor:
    def test_context_entered_before_visitor(self):
        ctx = RecordingContext()
        seen: list[list[str]] = []

        class Snap(Visitor):
            def enter(self, node):
                seen.append(list(ctx.stack))

        walk(parse("{ a }"), with_type_context(ctx, Snap()))
        assert seen[0] == ["document"]
        assert seen[-1] == [
            "document", "operation_definition", "selection_set", "field", "name",
        ]

    def test_balanced_after_full_walk(self):
        ctx = RecordingContext()
        assert walk(parse("query Q($v: Int) { a(x: $v) { b @skip(if: true) } }"),
                    TypedVisitor(ctx, Visitor()))
        assert ctx.stack == []

    def test_balanced_when_pruning(self):
        ctx = RecordingContext()
        rec = Recorder(on_enter={"field:a": VisitAction.SKIP, "field:c": VisitAction.SKIP})
        assert walk(parse("{ a { x y } b { c { z } } }"), TypedVisitor(ctx, rec))
        assert ctx.stack == []
        assert ctx.events.count(("enter", "field")) == ctx.events.count(("leave", "field"))

    def test_replace_leaves_original_then_enters_replacement(self):
        ctx = RecordingContext()
        replacement = parse("{ c }").definitions[0].selection_set.selections[0]
        rec = Recorder(on_enter={"field:a": Replace(replacement)})
        assert walk(parse("{ a }"), TypedVisitor(ctx, rec))
        i = ctx.events.index(("enter", "field"))
        assert ctx.events[i:i + 3] == [
            ("enter", "field"), ("leave", "field"), ("enter", "field"),
        ]
        assert ctx.stack == []

    def test_stop_on_leave_keeps_context(self):
        ctx = RecordingContext()
        rec = Recorder(on_leave={"field:a": VisitAction.STOP})
        assert not walk(parse("{ a b }"), TypedVisitor(ctx, rec))
        assert ctx.stack == [
            "document", "operation_definition", "selection_set", "field",
        ]

    def test_type_info_balanced(self):
        type_info = TypeInfo(star_wars_schema())
        doc = parse("{ hero(episode: JEDI) { name friends { id } } search(filter: {name: \"x\"}) { id } }")
        assert walk(doc, with_type_context(type_info, Visitor()))
        assert type_info.get_type() is None
        assert type_info.get_parent_type() is None
        assert type_info.get_input_type() is None
        assert type_info.get_field_def() is None
        assert type_info.get_argument() is None

    def test_type_info_tracks_fields(self):
        type_info = TypeInfo(star_wars_schema())
        types: dict[str, str] = {}

        class Types(Visitor):
            def enter(self, node):
                if isinstance(node, FieldNode):
                    types[node.name.value] = str(type_info.get_type())

        walk(parse("{ hero { name friends { id } } }"), TypedVisitor(type_info, Types()))
        assert types == {
            "hero": "Character",
            "name": "String",
            "friends": "[Character]",
            "id": "ID!",
        }
