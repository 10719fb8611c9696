"""Schema synthesis service."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from struct_jsonschema.schema_nodes import Schema
from struct_jsonschema.source_model import SourceModel

from .struct_walker import walk_struct
from .synthesis_outcomes import (
    BatchOutcome,
    DeclarationNotFound,
    EmptySchema,
    NotAStructuredType,
    SynthesisError,
    SynthesisFailure,
    SynthesisOptions,
    SynthesisResult,
)

_LOGGER = logging.getLogger(__name__)


def synthesize(
    source_model: SourceModel,
    type_name: str,
    *,
    options: SynthesisOptions | None = None,
) -> SynthesisResult:
    """Synthesize the schema of one struct declaration.

    Raises:
      DeclarationNotFound: If the source model has no declaration named ``type_name``.
      NotAStructuredType: If the declaration is not a struct.
      EmptySchema: If no field of the struct could be classified.
    """
    declaration = source_model.lookup(type_name)
    if declaration is None:
        raise DeclarationNotFound(type_name, f"No type declaration named '{type_name}'.")
    if not declaration.is_struct:
        raise NotAStructuredType(
            type_name,
            f"Type '{type_name}' is not a struct ({declaration.kind.value} declaration).",
        )

    outcome = walk_struct(declaration, options=options, resolve=source_model.lookup)
    if outcome.node is None:
        raise EmptySchema(
            type_name,
            f"Struct '{type_name}' has no fields that map to a schema type.",
            diagnostics=outcome.diagnostics,
        )

    schema = Schema(title=declaration.name, description=declaration.doc, root=outcome.node)
    return SynthesisResult(schema=schema, diagnostics=outcome.diagnostics)


def synthesize_all(
    source_model: SourceModel,
    type_names: Iterable[str],
    *,
    options: SynthesisOptions | None = None,
) -> BatchOutcome:
    """Synthesize each requested type independently, collecting per-type failures."""
    results: dict[str, SynthesisResult] = {}
    failures: list[SynthesisFailure] = []
    for type_name in type_names:
        if type_name in results:
            continue
        try:
            results[type_name] = synthesize(source_model, type_name, options=options)
        except SynthesisError as exc:
            _LOGGER.info("Schema synthesis failed for %s: %s", type_name, exc)
            failures.append(SynthesisFailure(type_name=type_name, error=exc))
    return BatchOutcome(results=results, failures=tuple(failures))
