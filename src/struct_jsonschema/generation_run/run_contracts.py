"""Generation run entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from struct_jsonschema.schema_synthesis import SynthesisDiagnostic, SynthesisFailure


@dataclass(frozen=True)
class GenerationRequest:
    """Input contract for executing one generation run."""

    config_path: str
    output_dir: str | None = None


@dataclass(frozen=True)
class GeneratedSchema:
    """Schema document written for one type."""

    type_name: str
    output_path: Path


@dataclass(frozen=True)
class GenerationOutcome:
    """Output contract for one completed generation run."""

    written: tuple[GeneratedSchema, ...]
    failures: tuple[SynthesisFailure, ...]
    diagnostics: tuple[SynthesisDiagnostic, ...]

    @property
    def is_ok(self) -> bool:
        """Return True when every configured type was written."""
        return not self.failures
