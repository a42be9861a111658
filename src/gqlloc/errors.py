"""Diagnostics for documents and schemas that fail to load, with Rust-style rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from graphql import GraphQLError

from gqlloc.offsets import offset_to_location
from gqlloc.source import SourceDocument, Span


class Severity(Enum):
    ERROR = "error"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",  # bold red
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"

SYNTAX_ERROR = "G100"
INVALID_SCHEMA = "G200"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a span of the diagnostic's source."""

    span: Span
    message: str = ""


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and notes."""

    severity: Severity
    code: str
    message: str
    source: SourceDocument | None = None
    labels: list[DiagnosticLabel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


def diagnostic_from_graphql_error(
    error: GraphQLError, source: SourceDocument | None, code: str = SYNTAX_ERROR,
) -> Diagnostic:
    """Convert a graphql-core error into a Diagnostic labelled at its positions."""
    labels = [DiagnosticLabel(Span(pos, pos)) for pos in (error.positions or [])]
    return Diagnostic(
        severity=Severity.ERROR,
        code=code,
        message=error.message,
        source=source,
        labels=labels,
    )


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic) -> str:
        lines: list[str] = []
        sev = diag.severity
        color = _COLORS[sev]

        # Header: error[G100]: message
        lines.append(
            f"{self._c(color)}{sev.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        source = diag.source
        for label in diag.labels:
            if source is None:
                break
            start = offset_to_location(source, label.span.start)
            end = offset_to_location(source, label.span.end)
            shift = source.location_offset.line - 1 if source.location_offset else 0
            shown_line = start.line + shift

            lines.append(
                f"  {self._c(_BLUE)}-->{self._c(_RESET)} "
                f"{source.name}:{shown_line}:{start.column}"
            )
            gutter = f"{shown_line:>4}"
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")

            source_line = source.line_at(start.line)
            lines.append(
                f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} {source_line}"
            )

            # Carets run to the span end, or to the end of a multi-line span's first line
            if start.line == end.line:
                caret_len = max(1, end.column - start.column)
            else:
                caret_len = max(1, len(source_line) - start.column + 1)
            padding = " " * (start.column - 1)
            lines.append(
                f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                f"{padding}{self._c(color)}{'^' * caret_len}{self._c(_RESET)}"
            )

            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)}   "
                    f"{self._c(color)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        return "\n".join(lines)


class LoadError(Exception):
    """A document or schema failed to load; carries the diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [d.message for d in diagnostics]
        super().__init__(f"{len(diagnostics)} error(s): {'; '.join(messages)}")
