"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from struct_jsonschema.schema_synthesis import SynthesisOptions


@dataclass(frozen=True)
class SourceSettings:
    """Go source files and package directories to read."""

    paths: tuple[Path, ...]
    include_test_files: bool


@dataclass(frozen=True)
class OutputSettings:
    """Destination of the generated schema documents."""

    directory: Path
    file_name: str
    indent: int


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    source: SourceSettings
    type_names: tuple[str, ...]
    output: OutputSettings
    synthesis: SynthesisOptions
