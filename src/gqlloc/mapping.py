"""Position mapping between an embedded fragment and its containing document.

A fragment (for example a GraphQL operation inside a tagged template literal)
carries a LocationOffset saying on which line of the outer document it
begins. Only the line axis is shifted: the fragment's first line is assumed
to sit flush at column 0 of the container.
"""

from __future__ import annotations

from graphql import Source
from lsprotocol import types as lsp

from gqlloc.source import SourceDocument


def _line_shift(source: SourceDocument | Source) -> int | None:
    """Lines to add when going from fragment to container, None if top-level."""
    offset = source.location_offset
    if offset is None:
        return None
    return offset.line - 1


def to_container(source: SourceDocument | Source, position: lsp.Position) -> lsp.Position:
    """Express a fragment-local position in the containing document."""
    shift = _line_shift(source)
    if shift is None:
        return position
    return lsp.Position(line=position.line + shift, character=position.character)


def to_fragment(source: SourceDocument | Source, position: lsp.Position) -> lsp.Position:
    """Express a containing-document position in fragment-local coordinates."""
    shift = _line_shift(source)
    if shift is None:
        return position
    return lsp.Position(line=position.line - shift, character=position.character)


def to_container_range(source: SourceDocument | Source, range_: lsp.Range) -> lsp.Range:
    if _line_shift(source) is None:
        return range_
    return lsp.Range(
        start=to_container(source, range_.start),
        end=to_container(source, range_.end),
    )


def to_fragment_range(source: SourceDocument | Source, range_: lsp.Range) -> lsp.Range:
    if _line_shift(source) is None:
        return range_
    return lsp.Range(
        start=to_fragment(source, range_.start),
        end=to_fragment(source, range_.end),
    )
