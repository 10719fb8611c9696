"""JSON serialization and file output for rendered schema documents."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

DEFAULT_FILE_NAME_TEMPLATE = "{type_name}.schema.json"
DEFAULT_INDENT = 2


def serialize_document(document: Mapping[str, Any], *, indent: int | None = DEFAULT_INDENT) -> str:
    """Serialize a rendered document to JSON text, preserving key order."""
    separators = (",", ":") if indent is None else (",", ": ")
    return json.dumps(document, indent=indent, ensure_ascii=False, separators=separators) + "\n"


def schema_file_name(type_name: str, template: str = DEFAULT_FILE_NAME_TEMPLATE) -> str:
    """Build the output file name for one type.

    Raises:
      ValueError: If the template has no ``{type_name}`` placeholder or escapes its directory.
    """
    if "{type_name}" not in template:
        raise ValueError("File name template must contain '{type_name}'.")
    file_name = template.replace("{type_name}", type_name)
    if Path(file_name).name != file_name:
        raise ValueError(f"File name must not contain directories: {file_name}")
    return file_name


def write_schema_document(
    document: Mapping[str, Any], output_path: Path | str, *, indent: int | None = DEFAULT_INDENT
) -> Path:
    """Write one rendered document and return its resolved path.

    Raises:
      OSError: If the destination cannot be written.
    """
    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(serialize_document(document, indent=indent), encoding="utf-8")
    return destination.resolve()
