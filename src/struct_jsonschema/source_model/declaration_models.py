"""Source declaration entities consumed by schema synthesis."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class SourceParseError(Exception):
    """Raised when source files cannot be read into declarations."""


class DeclarationKind(str, Enum):
    """Shape of a named type declaration."""

    STRUCT = "struct"
    INTERFACE = "interface"
    OTHER = "other"


def is_exported_name(name: str) -> bool:
    """Return True when the identifier is visible outside its package."""
    return name[:1].isupper()


@dataclass(frozen=True)
class TypeReference:
    """Resolved type of one field.

    ``name`` is the leaf type name for named types and pointers to named types
    (``*time.Time`` resolves to ``Time`` in package ``time``). Composite types
    such as slices or maps keep only their ``expression``.
    """

    expression: str
    name: str | None = None
    package: str | None = None
    is_pointer: bool = False

    @property
    def is_exported(self) -> bool:
        """Return True when the referenced named type is exported."""
        return self.name is not None and is_exported_name(self.name)

    @property
    def leaf_name(self) -> str:
        """Return the name used for classification."""
        return self.name if self.name is not None else self.expression


@dataclass(frozen=True)
class FieldDeclaration:
    """Named, typed member of a struct declaration."""

    name: str
    type_ref: TypeReference
    doc: str = ""
    exported: bool = True


@dataclass(frozen=True)
class TypeDeclaration:
    """Named type declaration with its ordered field list."""

    name: str
    kind: DeclarationKind
    doc: str = ""
    fields: tuple[FieldDeclaration, ...] = ()
    source_path: str | None = None

    @property
    def is_struct(self) -> bool:
        """Return True for record-like declarations."""
        return self.kind is DeclarationKind.STRUCT


class SourceModel(Protocol):
    """Read-only access to the declarations of one compilation unit."""

    def lookup(self, name: str) -> TypeDeclaration | None:
        """Return the declaration with the given name, if any."""

    def declarations(self) -> tuple[TypeDeclaration, ...]:
        """Return all declarations in source order."""


class PackageSourceModel:
    """In-memory source model over declarations collected from one package."""

    def __init__(self, declarations: Iterable[TypeDeclaration]) -> None:
        self._declarations = tuple(declarations)
        self._by_name: dict[str, TypeDeclaration] = {}
        for declaration in self._declarations:
            self._by_name.setdefault(declaration.name, declaration)

    def lookup(self, name: str) -> TypeDeclaration | None:
        return self._by_name.get(name)

    def declarations(self) -> tuple[TypeDeclaration, ...]:
        return self._declarations

    def struct_names(self) -> tuple[str, ...]:
        """Return the names of all struct declarations in source order."""
        return tuple(
            declaration.name for declaration in self._declarations if declaration.is_struct
        )
