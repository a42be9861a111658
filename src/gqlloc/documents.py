"""Loading GraphQL documents and schemas from disk."""

from __future__ import annotations

import logging
from pathlib import Path

from graphql import DocumentNode, GraphQLSchema, build_ast_schema, parse
from graphql.error import GraphQLError, GraphQLSyntaxError

from gqlloc.errors import (
    INVALID_SCHEMA,
    SYNTAX_ERROR,
    Diagnostic,
    LoadError,
    Severity,
    diagnostic_from_graphql_error,
)
from gqlloc.source import LocationOffset, SourceDocument

logger = logging.getLogger(__name__)


def _read(path: Path) -> str:
    """Read text with its line terminators untouched, so offsets match the editor."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def parse_document(source: SourceDocument) -> DocumentNode:
    """Parse a source document. Raises LoadError on syntax errors."""
    try:
        return parse(source.to_graphql())
    except GraphQLSyntaxError as e:
        raise LoadError([diagnostic_from_graphql_error(e, source, SYNTAX_ERROR)]) from e


def load_document(
    path: Path, *, fragment_line: int | None = None,
) -> tuple[SourceDocument, DocumentNode]:
    """Read and parse a GraphQL document.

    ``fragment_line`` is the 1-based line of the containing document on
    which this text begins; None loads it as a top-level document.
    """
    offset = None
    if fragment_line is not None:
        offset = LocationOffset(fragment_line, 1, str(path))
    source = SourceDocument(_read(path), str(path), offset)
    logger.debug("parsing %s (%d lines)", path, source.line_count)
    return source, parse_document(source)


def load_schema(path: Path) -> GraphQLSchema:
    """Read an SDL file and build a schema. Raises LoadError if invalid."""
    source = SourceDocument(_read(path), str(path))
    document = parse_document(source)
    try:
        schema = build_ast_schema(document)
    except GraphQLError as e:
        raise LoadError([diagnostic_from_graphql_error(e, source, INVALID_SCHEMA)]) from e
    except TypeError as e:
        # SDL validation failures arrive joined into a single TypeError
        raise LoadError([Diagnostic(
            severity=Severity.ERROR,
            code=INVALID_SCHEMA,
            message=msg,
            source=source,
        ) for msg in str(e).split("\n\n")]) from e
    logger.debug("loaded schema from %s", path)
    return schema
