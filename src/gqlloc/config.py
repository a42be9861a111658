"""TOML config loading for gqlloc.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "gqlloc.toml"


@dataclass
class SchemaConfig:
    path: Path | None = None


@dataclass
class OutputConfig:
    color: bool = True


@dataclass
class GqllocConfig:
    schema: SchemaConfig = field(default_factory=SchemaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find gqlloc.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> GqllocConfig:
    """Parse a gqlloc.toml file. Relative paths resolve against its directory."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = GqllocConfig()

    if "schema" in data:
        sch = data["schema"]
        schema_path = sch.get("path")
        config.schema = SchemaConfig(
            path=(path.parent / schema_path).resolve() if schema_path else None,
        )

    if "output" in data:
        out = data["output"]
        config.output = OutputConfig(color=out.get("color", True))

    return config
