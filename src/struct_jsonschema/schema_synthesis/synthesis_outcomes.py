"""Schema synthesis entities, options and errors."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from struct_jsonschema.schema_nodes import Schema


class RequiredFieldPolicy(str, Enum):
    """Rule deciding which classified fields are listed as required."""

    INDIRECTION_ONLY = "indirection_only"
    NON_POINTER = "non_pointer"


class DiagnosticCode(str, Enum):
    """Kinds of non-fatal, field-level synthesis problems."""

    UNCLASSIFIED_FIELD_TYPE = "unclassified_field_type"
    RECURSIVE_REFERENCE = "recursive_reference"


@dataclass(frozen=True)
class SynthesisOptions:
    """Tunable behavior of one synthesis call."""

    required_policy: RequiredFieldPolicy = RequiredFieldPolicy.INDIRECTION_ONLY
    expand_nested_structs: bool = False


@dataclass(frozen=True)
class SynthesisDiagnostic:
    """Field dropped from a schema, with the reason."""

    code: DiagnosticCode
    declaration: str
    field: str
    type_expression: str
    message: str


class SynthesisError(Exception):
    """Raised when no schema can be produced for a requested type name."""

    def __init__(
        self,
        type_name: str,
        message: str,
        diagnostics: tuple[SynthesisDiagnostic, ...] = (),
    ) -> None:
        super().__init__(message)
        self.type_name = type_name
        self.diagnostics = diagnostics


class DeclarationNotFound(SynthesisError):
    """Raised when the source model has no declaration with the requested name."""


class NotAStructuredType(SynthesisError):
    """Raised when the requested declaration is not a struct."""


class EmptySchema(SynthesisError):
    """Raised when a struct has no field that could be classified."""


@dataclass(frozen=True)
class SynthesisResult:
    """Schema for one declaration plus the diagnostics collected while building it."""

    schema: Schema
    diagnostics: tuple[SynthesisDiagnostic, ...] = ()


@dataclass(frozen=True)
class SynthesisFailure:
    """Declaration-level failure for one requested type name."""

    type_name: str
    error: SynthesisError


@dataclass(frozen=True)
class BatchOutcome:
    """Independent synthesis results for several requested type names."""

    results: Mapping[str, SynthesisResult] = field(default_factory=dict)
    failures: tuple[SynthesisFailure, ...] = ()

    @property
    def is_ok(self) -> bool:
        """Return True when every requested type produced a schema."""
        return not self.failures

    @property
    def diagnostics(self) -> tuple[SynthesisDiagnostic, ...]:
        """Return diagnostics of successful and failed types in request order."""
        collected: list[SynthesisDiagnostic] = []
        for result in self.results.values():
            collected.extend(result.diagnostics)
        for failure in self.failures:
            collected.extend(failure.error.diagnostics)
        return tuple(collected)
