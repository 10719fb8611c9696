"""Schema synthesis exports."""

from .schema_synthesizer import synthesize, synthesize_all
from .struct_walker import WalkOutcome, walk_struct
from .synthesis_outcomes import (
    BatchOutcome,
    DeclarationNotFound,
    DiagnosticCode,
    EmptySchema,
    NotAStructuredType,
    RequiredFieldPolicy,
    SynthesisDiagnostic,
    SynthesisError,
    SynthesisFailure,
    SynthesisOptions,
    SynthesisResult,
)

__all__ = [
    "BatchOutcome",
    "DeclarationNotFound",
    "DiagnosticCode",
    "EmptySchema",
    "NotAStructuredType",
    "RequiredFieldPolicy",
    "SynthesisDiagnostic",
    "SynthesisError",
    "SynthesisFailure",
    "SynthesisOptions",
    "SynthesisResult",
    "WalkOutcome",
    "synthesize",
    "synthesize_all",
    "walk_struct",
]
