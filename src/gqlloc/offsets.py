"""Conversions between editor positions and flat character offsets."""

from __future__ import annotations

from graphql import Source
from graphql.language import Node
from graphql.language.location import SourceLocation
from lsprotocol import types as lsp

from gqlloc.mapping import to_container_range
from gqlloc.source import SourceDocument, Span, as_document


def span_of(node: Node) -> Span | None:
    """Return the node's flat-offset span, or None for synthetic nodes."""
    loc = getattr(node, "loc", None)
    if loc is None:
        return None
    return Span(loc.start, loc.end)


def position_to_offset(source: SourceDocument | Source, position: lsp.Position) -> int:
    """Turn a 0-based editor position into a flat offset into the body.

    Every line before ``position.line`` contributes its length plus one
    terminator character. Positions beyond the text are not validated and
    produce offsets past the end of the body.
    """
    doc = as_document(source)
    return doc.editor_line_start(position.line) + position.character


def offset_to_location(source: SourceDocument | Source, offset: int) -> SourceLocation:
    """Return the 1-based line and column containing ``offset``."""
    doc = as_document(source)
    index = doc.line_index(offset)
    return SourceLocation(index + 1, offset + 1 - doc.line_start(index))


def offset_to_position(source: SourceDocument | Source, offset: int) -> lsp.Position:
    """Return the 0-based editor position of ``offset`` in fragment coordinates."""
    location = offset_to_location(source, offset)
    return lsp.Position(line=location.line - 1, character=location.column - 1)


def span_to_range(source: SourceDocument | Source, span: Span) -> lsp.Range:
    """Convert a span to a range in the containing document's coordinates."""
    doc = as_document(source)
    local = lsp.Range(
        start=offset_to_position(doc, span.start),
        end=offset_to_position(doc, span.end),
    )
    return to_container_range(doc, local)


def range_for_node(source: SourceDocument | Source, node: Node) -> lsp.Range | None:
    span = span_of(node)
    if span is None:
        return None
    return span_to_range(source, span)
