"""Source file discovery and source model assembly."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .declaration_models import PackageSourceModel, SourceParseError, TypeDeclaration
from .go_source_reader import read_go_file

_LOGGER = logging.getLogger(__name__)

GO_SOURCE_SUFFIX = ".go"
GO_TEST_SUFFIX = "_test.go"


def discover_package_files(
    directory: Path | str, *, include_tests: bool = False
) -> tuple[Path, ...]:
    """Return the Go source files of one package directory in name order.

    Args:
      directory: Package directory to scan (not recursive).
      include_tests: Whether ``*_test.go`` files belong to the package.

    Raises:
      SourceParseError: If the directory is missing or holds no Go files.
    """
    root = Path(directory)
    if not root.is_dir():
        raise SourceParseError(f"Source directory not found: {root}")
    files = sorted(
        path
        for path in root.iterdir()
        if path.is_file()
        and path.name.endswith(GO_SOURCE_SUFFIX)
        and (include_tests or not path.name.endswith(GO_TEST_SUFFIX))
    )
    if not files:
        raise SourceParseError(f"{root}: no buildable Go source files")
    return tuple(files)


def load_source_model(
    paths: Iterable[Path | str], *, include_tests: bool = False
) -> PackageSourceModel:
    """Read files and package directories into one source model."""
    source_files: list[Path] = []
    for raw_path in paths:
        path = Path(raw_path)
        if path.is_dir():
            source_files.extend(discover_package_files(path, include_tests=include_tests))
        elif path.is_file():
            if not path.name.endswith(GO_SOURCE_SUFFIX):
                _LOGGER.debug("Skipping non-Go source path %s", path)
                continue
            source_files.append(path)
        else:
            raise SourceParseError(f"Source path not found: {path}")
    if not source_files:
        raise SourceParseError("No buildable Go source files were provided.")

    declarations: list[TypeDeclaration] = []
    for source_file in source_files:
        file_declarations = read_go_file(source_file)
        _LOGGER.debug("Read %d declarations from %s", len(file_declarations), source_file)
        declarations.extend(file_declarations)
    return PackageSourceModel(declarations)
