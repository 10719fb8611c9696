"""Generation run domain exports."""

from .run_contracts import GeneratedSchema, GenerationOutcome, GenerationRequest
from .schema_generation_use_case import GenerationRunError, execute_schema_generation_run

__all__ = [
    "GenerationRequest",
    "GenerationOutcome",
    "GeneratedSchema",
    "GenerationRunError",
    "execute_schema_generation_run",
]
