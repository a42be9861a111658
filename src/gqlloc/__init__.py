"""Editor positions, flat offsets and GraphQL syntax nodes with their schema types."""

from __future__ import annotations

from gqlloc.locator import NodeLocator, NodeMatch, TypeContextSnapshot, locate, locate_at_offset
from gqlloc.mapping import to_container, to_container_range, to_fragment, to_fragment_range
from gqlloc.offsets import (
    offset_to_location,
    offset_to_position,
    position_to_offset,
    range_for_node,
    span_of,
    span_to_range,
)
from gqlloc.source import LocationOffset, SourceDocument, Span
from gqlloc.traversal import (
    Replace,
    TypedVisitor,
    VisitAction,
    Visitor,
    walk,
    with_type_context,
)

__version__ = "0.1.0"

__all__ = [
    "LocationOffset",
    "NodeLocator",
    "NodeMatch",
    "Replace",
    "SourceDocument",
    "Span",
    "TypeContextSnapshot",
    "TypedVisitor",
    "VisitAction",
    "Visitor",
    "locate",
    "locate_at_offset",
    "offset_to_location",
    "offset_to_position",
    "position_to_offset",
    "range_for_node",
    "span_of",
    "span_to_range",
    "to_container",
    "to_container_range",
    "to_fragment",
    "to_fragment_range",
    "walk",
    "with_type_context",
]
