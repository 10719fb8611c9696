"""Schema generation use-case service."""

from __future__ import annotations

import logging
from pathlib import Path

from struct_jsonschema.configuration import Configuration, ConfigurationError, load_configuration
from struct_jsonschema.document_rendering import (
    render_schema,
    schema_file_name,
    write_schema_document,
)
from struct_jsonschema.schema_synthesis import BatchOutcome, synthesize_all
from struct_jsonschema.source_model import PackageSourceModel, SourceParseError, load_source_model

from .run_contracts import GeneratedSchema, GenerationOutcome, GenerationRequest

_LOGGER = logging.getLogger(__name__)


class GenerationRunError(Exception):
    """Raised when a generation run cannot be completed."""


def execute_schema_generation_run(request: GenerationRequest) -> GenerationOutcome:
    """Generate one schema document per configured type and return the run outcome.

    Types that fail synthesis are reported in the outcome; the remaining types
    are still written.

    Raises:
      GenerationRunError: If the configuration or sources cannot be read, or a
        document cannot be written.
    """
    configuration = _load_configuration(request.config_path)
    source_model = _load_source_model(configuration)
    batch = synthesize_all(
        source_model, configuration.type_names, options=configuration.synthesis
    )

    output_dir = (
        Path(request.output_dir) if request.output_dir else configuration.output.directory
    )
    written = _write_documents(batch, configuration, output_dir)
    _LOGGER.info(
        "Wrote %d schema documents to %s (%d failed)",
        len(written),
        output_dir,
        len(batch.failures),
    )
    return GenerationOutcome(
        written=written,
        failures=batch.failures,
        diagnostics=batch.diagnostics,
    )


def _load_configuration(config_path: str) -> Configuration:
    try:
        return load_configuration(config_path)
    except ConfigurationError as exc:
        raise GenerationRunError(str(exc)) from exc


def _load_source_model(configuration: Configuration) -> PackageSourceModel:
    try:
        return load_source_model(
            configuration.source.paths,
            include_tests=configuration.source.include_test_files,
        )
    except SourceParseError as exc:
        raise GenerationRunError(str(exc)) from exc


def _write_documents(
    batch: BatchOutcome, configuration: Configuration, output_dir: Path
) -> tuple[GeneratedSchema, ...]:
    written: list[GeneratedSchema] = []
    for type_name, result in batch.results.items():
        destination = output_dir / schema_file_name(type_name, configuration.output.file_name)
        try:
            output_path = write_schema_document(
                render_schema(result.schema),
                destination,
                indent=configuration.output.indent,
            )
        except OSError as exc:
            raise GenerationRunError(
                f"Cannot write schema for {type_name} to {destination}: {exc}"
            ) from exc
        written.append(GeneratedSchema(type_name=type_name, output_path=output_path))
    return tuple(written)
