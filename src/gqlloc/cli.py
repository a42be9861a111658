"""gqlloc command line interface."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from graphql import GraphQLSchema
from graphql.language import NameNode, Node
from lsprotocol import types as lsp

from gqlloc import __version__
from gqlloc.config import find_config, load_config
from gqlloc.documents import load_document, load_schema
from gqlloc.errors import DiagnosticRenderer, LoadError
from gqlloc.locator import locate
from gqlloc.mapping import to_container, to_fragment
from gqlloc.offsets import offset_to_position, position_to_offset, range_for_node, span_of
from gqlloc.source import SourceDocument

logger = logging.getLogger(__name__)

_fragment_option = click.option(
    "--fragment-line",
    type=click.IntRange(min=1),
    default=None,
    help="1-based line of the containing document on which FILE begins.",
)


def _color_enabled(path: Path) -> bool:
    try:
        return load_config(find_config(path)).output.color
    except FileNotFoundError:
        return True


def _load(file: str, fragment_line: int | None) -> tuple[SourceDocument, Node]:
    """Load a document, reporting diagnostics and exiting on failure."""
    path = Path(file)
    try:
        return load_document(path, fragment_line=fragment_line)
    except LoadError as e:
        _report(e, path)
        raise SystemExit(1)


def _report(error: LoadError, path: Path) -> None:
    renderer = DiagnosticRenderer(color=_color_enabled(path))
    for diag in error.diagnostics:
        click.echo(renderer.render(diag), err=True)


def _resolve_schema(file: str, schema: str | None) -> GraphQLSchema:
    if schema is not None:
        schema_path = Path(schema)
    else:
        try:
            config = load_config(find_config(Path(file)))
        except FileNotFoundError:
            click.echo("error: no gqlloc.toml found", err=True)
            raise SystemExit(1)
        if config.schema.path is None:
            click.echo("error: no schema path configured in gqlloc.toml", err=True)
            raise SystemExit(1)
        schema_path = config.schema.path

    logger.debug("using schema %s", schema_path)
    try:
        return load_schema(schema_path)
    except FileNotFoundError:
        click.echo(f"error: schema file {schema_path} not found", err=True)
        raise SystemExit(1)
    except LoadError as e:
        _report(e, schema_path)
        raise SystemExit(1)


def _to_local(source: SourceDocument, line: int, character: int) -> lsp.Position:
    """Map a command-line position into the fragment, exiting if it falls before it."""
    if source.location_offset is not None and line < source.location_offset.line - 1:
        click.echo(
            f"error: line {line} is before the fragment start "
            f"(line {source.location_offset.line - 1})",
            err=True,
        )
        raise SystemExit(1)
    return to_fragment(source, lsp.Position(line=line, character=character))


def _format_range(r: lsp.Range) -> str:
    return f"{r.start.line}:{r.start.character}-{r.end.line}:{r.end.character}"


@click.group()
@click.version_option(__version__, prog_name="gqlloc")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Map editor positions to GraphQL syntax nodes and their schema types."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("line", type=click.IntRange(min=0))
@click.argument("character", type=click.IntRange(min=0))
@_fragment_option
def offset(file: str, line: int, character: int, fragment_line: int | None) -> None:
    """Print the flat offset of a 0-based LINE and CHARACTER."""
    source, _ = _load(file, fragment_line)
    click.echo(str(position_to_offset(source, _to_local(source, line, character))))


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("offset", type=click.IntRange(min=0))
@_fragment_option
def position(file: str, offset: int, fragment_line: int | None) -> None:
    """Print the 0-based line:character of a flat OFFSET."""
    source, _ = _load(file, fragment_line)
    pos = to_container(source, offset_to_position(source, offset))
    click.echo(f"{pos.line}:{pos.character}")


@main.command(name="locate")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("line", type=click.IntRange(min=0))
@click.argument("character", type=click.IntRange(min=0))
@click.option("--schema", type=click.Path(dir_okay=False), default=None,
              help="SDL schema file. Defaults to schema.path in gqlloc.toml.")
@_fragment_option
def locate_cmd(
    file: str, line: int, character: int, schema: str | None, fragment_line: int | None,
) -> None:
    """Show the syntax node and type context at a 0-based LINE and CHARACTER."""
    source, document = _load(file, fragment_line)
    graphql_schema = _resolve_schema(file, schema)

    match = locate(source, _to_local(source, line, character), document, graphql_schema)
    if match is None:
        click.echo(f"no node at {line}:{character}", err=True)
        raise SystemExit(1)

    node_range = range_for_node(source, match.node)
    where = _format_range(node_range) if node_range is not None else "?"
    click.echo(f"{match.node.kind} at {where}")
    for label, value in match.type_context.describe().items():
        click.echo(f"  {label}: {value}")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def view(file: str) -> None:
    """View the syntax tree of a GraphQL document with node spans."""
    _, document = _load(file, None)
    _dump_ast(document, 0)


def _dump_ast(node: Node, depth: int) -> None:
    """Print a readable AST dump."""
    indent = "  " * depth
    span = span_of(node)
    click.echo(f"{indent}{node.kind} [{span if span is not None else '?'}]")
    for key in node.keys:
        if key == "loc":
            continue
        value = getattr(node, key, None)
        if isinstance(value, NameNode):
            click.echo(f"{indent}  {key}: {value.value!r}")
        elif isinstance(value, Node):
            click.echo(f"{indent}  {key}:")
            _dump_ast(value, depth + 2)
        elif isinstance(value, (list, tuple)):
            if value:
                click.echo(f"{indent}  {key}:")
                for item in value:
                    _dump_ast(item, depth + 2)
        elif value is not None:
            click.echo(f"{indent}  {key}: {value!r}")
