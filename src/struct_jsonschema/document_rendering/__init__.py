"""Document rendering exports."""

from .document_renderer import render_node, render_schema
from .json_writer import (
    DEFAULT_FILE_NAME_TEMPLATE,
    DEFAULT_INDENT,
    schema_file_name,
    serialize_document,
    write_schema_document,
)

__all__ = [
    "DEFAULT_FILE_NAME_TEMPLATE",
    "DEFAULT_INDENT",
    "render_node",
    "render_schema",
    "schema_file_name",
    "serialize_document",
    "write_schema_document",
]
