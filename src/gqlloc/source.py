"""Source document representation and span tracking."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from functools import lru_cache

from graphql import Source
from graphql.language.location import SourceLocation


@dataclass(frozen=True)
class Span:
    """A range of flat character offsets within a source body."""

    start: int
    end: int

    def contains(self, offset: int) -> bool:
        """Inclusive containment test, matching either end convention."""
        return self.start <= offset <= self.end

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class LocationOffset:
    """Where an embedded fragment begins inside its containing document.

    ``line`` and ``column`` are 1-based, as in graphql-core's SourceLocation.
    """

    line: int
    column: int = 1
    filename: str | None = None


class SourceDocument:
    """An immutable source body with a precomputed line table.

    The body is scanned once on construction. Three tables come out of it:
    the offsets at which each line terminator (``\\r\\n``, ``\\n`` or ``\\r``)
    begins, the real offsets at which each line begins, and the editor line
    starts, where every terminator counts as a single character.
    """

    def __init__(
        self,
        body: str,
        name: str = "GraphQL request",
        location_offset: LocationOffset | None = None,
    ) -> None:
        self.body = body
        self.name = name
        self.location_offset = location_offset

        breaks: list[int] = []
        starts: list[int] = [0]
        i = 0
        n = len(body)
        while i < n:
            ch = body[i]
            if ch == "\r" and i + 1 < n and body[i + 1] == "\n":
                breaks.append(i)
                i += 2
                starts.append(i)
            elif ch == "\n" or ch == "\r":
                breaks.append(i)
                i += 1
                starts.append(i)
            else:
                i += 1

        editor_starts = [0]
        for line_no, start in enumerate(starts):
            end = breaks[line_no] if line_no < len(breaks) else n
            editor_starts.append(editor_starts[-1] + (end - start) + 1)

        self._breaks = breaks
        self._line_starts = starts
        self._editor_starts = editor_starts

    @classmethod
    def from_graphql(cls, source: Source) -> SourceDocument:
        """Wrap a graphql-core Source. The default (1, 1) offset means top-level."""
        loc = source.location_offset
        offset = None
        if loc is not None and (loc.line, loc.column) != (1, 1):
            offset = LocationOffset(loc.line, loc.column, source.name)
        return cls(source.body, source.name, offset)

    def to_graphql(self) -> Source:
        if self.location_offset is None:
            return Source(self.body, self.name)
        return Source(
            self.body,
            self.name,
            SourceLocation(self.location_offset.line, self.location_offset.column),
        )

    @property
    def is_fragment(self) -> bool:
        return self.location_offset is not None

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_index(self, offset: int) -> int:
        """0-based line holding ``offset``.

        An offset inside a terminator belongs to the line that terminator ends.
        """
        return max(0, bisect_right(self._line_starts, offset) - 1)

    def line_start(self, index: int) -> int:
        """Real offset at which the 0-based line ``index`` begins."""
        return self._line_starts[index]

    def editor_line_start(self, line: int) -> int:
        """Offset of a 0-based line, counting each terminator as one character.

        Lines past the end clamp to the total over all lines.
        """
        return self._editor_starts[max(0, min(line, self.line_count))]

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line without its terminator, or "" if out of range."""
        if not 1 <= n <= self.line_count:
            return ""
        start = self._line_starts[n - 1]
        end = self._breaks[n - 1] if n - 1 < len(self._breaks) else len(self.body)
        return self.body[start:end]

    def span_text(self, span: Span) -> str:
        """Extract the text covered by a span."""
        return self.body[span.start : span.end]

    def __repr__(self) -> str:
        return f"SourceDocument({self.name!r}, location_offset={self.location_offset!r})"


def as_document(source: SourceDocument | Source) -> SourceDocument:
    """Accept either a SourceDocument or a graphql-core Source.

    Converted Sources are cached by content, so repeated lookups against the
    same text reuse one line table. Callers holding a SourceDocument skip the
    cache entirely.
    """
    if isinstance(source, SourceDocument):
        return source
    loc = source.location_offset
    return _converted(source.body, source.name, loc.line, loc.column)


@lru_cache(maxsize=64)
def _converted(body: str, name: str, line: int, column: int) -> SourceDocument:
    return SourceDocument.from_graphql(Source(body, name, SourceLocation(line, column)))
