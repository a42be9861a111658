"""Find the innermost syntax node at an editor position, with its type context."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from graphql import (
    GraphQLArgument,
    GraphQLCompositeType,
    GraphQLDirective,
    GraphQLEnumValue,
    GraphQLField,
    GraphQLInputType,
    GraphQLOutputType,
    GraphQLSchema,
    Source,
)
from graphql.language import NameNode, Node
from graphql.utilities import TypeInfo
from lsprotocol import types as lsp

from gqlloc.offsets import position_to_offset, span_of
from gqlloc.source import SourceDocument
from gqlloc.traversal import VisitAction, Visitor, walk, with_type_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeContextSnapshot:
    """The schema context a TypeInfo held at one point of a walk."""

    type: GraphQLOutputType | None = None
    parent_type: GraphQLCompositeType | None = None
    input_type: GraphQLInputType | None = None
    parent_input_type: GraphQLInputType | None = None
    field_def: GraphQLField | None = None
    default_value: Any = None
    directive: GraphQLDirective | None = None
    argument: GraphQLArgument | None = None
    enum_value: GraphQLEnumValue | None = None

    @classmethod
    def capture(cls, type_info: TypeInfo) -> TypeContextSnapshot:
        return cls(
            type=type_info.get_type(),
            parent_type=type_info.get_parent_type(),
            input_type=type_info.get_input_type(),
            parent_input_type=type_info.get_parent_input_type(),
            field_def=type_info.get_field_def(),
            default_value=type_info.get_default_value(),
            directive=type_info.get_directive(),
            argument=type_info.get_argument(),
            enum_value=type_info.get_enum_value(),
        )

    def describe(self) -> dict[str, str]:
        """Human-readable entries for the parts of the context that are set."""
        entries: dict[str, str] = {}
        if self.parent_type is not None:
            entries["parent type"] = str(self.parent_type)
        if self.type is not None:
            entries["type"] = str(self.type)
        if self.field_def is not None:
            entries["field type"] = str(self.field_def.type)
        if self.parent_input_type is not None:
            entries["parent input type"] = str(self.parent_input_type)
        if self.input_type is not None:
            entries["input type"] = str(self.input_type)
        if self.directive is not None:
            entries["directive"] = str(self.directive)
        if self.argument is not None:
            entries["argument type"] = str(self.argument.type)
        if self.enum_value is not None:
            entries["enum value"] = repr(self.enum_value.value)
        return entries


@dataclass(frozen=True)
class NodeMatch:
    node: Node
    type_context: TypeContextSnapshot


class NodeLocator(Visitor):
    """Records the deepest non-name node whose span contains ``offset``.

    Subtrees that cannot contain the offset are skipped. Once the recorded
    node is left on the way back up, nothing later in the tree can be deeper,
    so the walk stops.
    """

    def __init__(self, offset: int, type_info: TypeInfo) -> None:
        self.offset = offset
        self.type_info = type_info
        self.match: NodeMatch | None = None

    def _contains(self, node: Node) -> bool:
        span = span_of(node)
        return span is not None and span.contains(self.offset)

    def enter(self, node: Node) -> VisitAction:
        if not self._contains(node):
            return VisitAction.SKIP
        # the parent of a name is the interesting node
        if isinstance(node, NameNode):
            return VisitAction.SKIP
        self.match = NodeMatch(node, TypeContextSnapshot.capture(self.type_info))
        return VisitAction.CONTINUE

    def leave(self, node: Node) -> VisitAction:
        if self.match is not None and self.match.node is node and self._contains(node):
            return VisitAction.STOP
        return VisitAction.CONTINUE


def locate_at_offset(
    offset: int,
    root: Node,
    schema: GraphQLSchema,
    *,
    type_info: TypeInfo | None = None,
) -> NodeMatch | None:
    """Find the node at a flat offset into the root's source body."""
    if type_info is None:
        type_info = TypeInfo(schema)
    locator = NodeLocator(offset, type_info)
    walk(root, with_type_context(type_info, locator))
    if locator.match is None:
        logger.debug("no node at offset %d", offset)
    else:
        logger.debug("offset %d is in %s node", offset, locator.match.node.kind)
    return locator.match


def locate(
    source: SourceDocument | Source,
    position: lsp.Position,
    root: Node,
    schema: GraphQLSchema,
    *,
    type_info: TypeInfo | None = None,
) -> NodeMatch | None:
    """Find the node at a fragment-local editor position.

    Positions taken from the containing document go through
    ``mapping.to_fragment`` first. A position past the end of the text
    yields None, as does a root without location information.
    """
    offset = position_to_offset(source, position)
    logger.debug(
        "position %d:%d -> offset %d", position.line, position.character, offset,
    )
    return locate_at_offset(offset, root, schema, type_info=type_info)
