"""Shared test helpers for the gqlloc test suite."""

from __future__ import annotations

from graphql import GraphQLSchema, build_schema, parse
from graphql.language import DocumentNode, Location, Source, Token, TokenKind
from graphql.utilities import TypeInfo

from gqlloc.source import LocationOffset, SourceDocument

SCHEMA_SDL = """\
type Query {
  hero(episode: Episode = NEWHOPE): Character
  search(filter: SearchFilter): [Character!]
}

enum Episode { NEWHOPE EMPIRE JEDI }

input SearchFilter {
  name: String
  episode: Episode
}

type Character {
  id: ID!
  name: String
  friends: [Character]
}
"""

HERO_QUERY = (
    "query {\n"
    "  hero(episode: EMPIRE) {\n"
    "    name\n"
    "  }\n"
    "}\n"
)


def star_wars_schema() -> GraphQLSchema:
    return build_schema(SCHEMA_SDL)


def parse_source(
    text: str, *, fragment_line: int | None = None,
) -> tuple[SourceDocument, DocumentNode]:
    """Build a SourceDocument and parse it, optionally as an embedded fragment."""
    offset = LocationOffset(fragment_line) if fragment_line is not None else None
    source = SourceDocument(text, "<test>", offset)
    return source, parse(source.to_graphql())


def loc(start: int, end: int) -> Location:
    """A synthetic location spanning flat offsets start..end."""
    start_token = Token(TokenKind.NAME, start, start, 1, start + 1)
    end_token = Token(TokenKind.NAME, end, end, 1, end + 1)
    return Location(start_token, end_token, Source(" " * max(end, 1)))


class RecordingContext:
    """A type context that mirrors enter/leave as a stack of kinds."""

    def __init__(self) -> None:
        self.stack: list[str] = []
        self.events: list[tuple[str, str]] = []

    def enter(self, node) -> None:
        self.stack.append(node.kind)
        self.events.append(("enter", node.kind))

    def leave(self, node) -> None:
        popped = self.stack.pop()
        assert popped == node.kind, f"left {node.kind} while {popped} was entered"
        self.events.append(("leave", node.kind))


class RecordingTypeInfo(TypeInfo):
    """A TypeInfo that records every node it is asked to enter."""

    def __init__(self, schema: GraphQLSchema) -> None:
        super().__init__(schema)
        self.entered: list = []

    def enter(self, node) -> None:
        self.entered.append(node)
        super().enter(node)
