"""Depth-first syntax tree walking with a synchronized type context.

Visitors steer the walk by returning a VisitResult from ``enter`` and
``leave``:

    CONTINUE      descend into the node's children as usual
    SKIP          do not descend; ``leave`` is still called for the node
    STOP          end the whole walk at once, no further enter/leave calls
    Replace(n2)   walk ``n2`` in place of the entered node (``enter`` only)

``TypedVisitor`` wraps any visitor so that a type context (graphql-core's
TypeInfo, or anything with ``enter``/``leave``) is entered before and left
after the wrapped visitor sees each node.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol, Union

from graphql.language import Node
from graphql.language.ast import QUERY_DOCUMENT_KEYS


class VisitAction(Enum):
    CONTINUE = auto()
    SKIP = auto()
    STOP = auto()


@dataclass(frozen=True)
class Replace:
    node: Node


VisitResult = Union[VisitAction, Replace]


class TypeContext(Protocol):
    def enter(self, node: Node) -> None: ...

    def leave(self, node: Node) -> None: ...


class Visitor:
    """Base visitor. Both hooks continue the walk unless overridden."""

    def enter(self, node: Node) -> VisitResult | None:
        return VisitAction.CONTINUE

    def leave(self, node: Node) -> VisitResult | None:
        return VisitAction.CONTINUE


def _normalize(result: VisitResult | None) -> VisitResult:
    return VisitAction.CONTINUE if result is None else result


class TypedVisitor(Visitor):
    """Keeps ``type_context`` balanced around every call into ``visitor``.

    The context is entered before the visitor's ``enter`` and left after the
    visitor's ``leave``. A replacement leaves the original node and enters the
    new one before descent. When the visitor stops the walk, the context is
    not left: it still describes the node the walk stopped at.
    """

    def __init__(self, type_context: TypeContext, visitor: Visitor) -> None:
        self.type_context = type_context
        self.visitor = visitor

    def enter(self, node: Node) -> VisitResult:
        self.type_context.enter(node)
        result = _normalize(self.visitor.enter(node))
        if isinstance(result, Replace):
            self.type_context.leave(node)
            self.type_context.enter(result.node)
        return result

    def leave(self, node: Node) -> VisitResult:
        result = _normalize(self.visitor.leave(node))
        if result is not VisitAction.STOP:
            self.type_context.leave(node)
        return result


def with_type_context(type_context: TypeContext, visitor: Visitor) -> TypedVisitor:
    return TypedVisitor(type_context, visitor)


def iter_children(
    node: Node, visitor_keys: Mapping[str, tuple[str, ...]] = QUERY_DOCUMENT_KEYS,
) -> Iterator[Node]:
    """Yield a node's direct children in document order."""
    keys = visitor_keys.get(node.kind)
    if keys is None:
        keys = tuple(k for k in node.keys if k != "loc")
    for key in keys:
        value = getattr(node, key, None)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, (list, tuple)):
            for item in value:
                if isinstance(item, Node):
                    yield item


def walk(
    root: Node,
    visitor: Visitor,
    visitor_keys: Mapping[str, tuple[str, ...]] = QUERY_DOCUMENT_KEYS,
) -> bool:
    """Walk ``root`` depth-first. Returns False if a visitor stopped the walk."""
    return _walk_node(root, visitor, visitor_keys)


def _walk_node(
    node: Node, visitor: Visitor, visitor_keys: Mapping[str, tuple[str, ...]],
) -> bool:
    result = _normalize(visitor.enter(node))
    if result is VisitAction.STOP:
        return False
    if isinstance(result, Replace):
        node = result.node
        descend = True
    else:
        descend = result is VisitAction.CONTINUE

    if descend:
        for child in iter_children(node, visitor_keys):
            if not _walk_node(child, visitor, visitor_keys):
                return False

    result = _normalize(visitor.leave(node))
    if isinstance(result, Replace):
        raise TypeError(f"cannot replace {node.kind} node on leave")
    return result is not VisitAction.STOP
