"""Source model exports."""

from .declaration_models import (
    DeclarationKind,
    FieldDeclaration,
    PackageSourceModel,
    SourceModel,
    SourceParseError,
    TypeDeclaration,
    TypeReference,
    is_exported_name,
)
from .go_source_reader import parse_go_source, read_go_file
from .package_discovery import discover_package_files, load_source_model

__all__ = [
    "DeclarationKind",
    "FieldDeclaration",
    "PackageSourceModel",
    "SourceModel",
    "SourceParseError",
    "TypeDeclaration",
    "TypeReference",
    "is_exported_name",
    "parse_go_source",
    "read_go_file",
    "discover_package_files",
    "load_source_model",
]
