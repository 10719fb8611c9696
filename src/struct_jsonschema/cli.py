"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from struct_jsonschema.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from struct_jsonschema.document_rendering import DEFAULT_INDENT, render_schema, serialize_document
from struct_jsonschema.generation_run import (
    GenerationRequest,
    GenerationRunError,
    execute_schema_generation_run,
)
from struct_jsonschema.schema_synthesis import (
    RequiredFieldPolicy,
    SynthesisDiagnostic,
    SynthesisError,
    SynthesisOptions,
    synthesize,
)
from struct_jsonschema.source_model import SourceParseError, load_source_model

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
_HANDLER_NAME = "struct_jsonschema.cli"


class CliError(Exception):
    """Custom CLI error."""


_source_option = click.option(
    "--source",
    "source_paths",
    required=True,
    multiple=True,
    type=click.Path(path_type=str),
    help="Go source file or package directory (repeatable)",
)
_include_tests_option = click.option(
    "--include-tests",
    is_flag=True,
    default=False,
    help="Read *_test.go files from package directories.",
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="struct-jsonschema")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Generate JSON Schema documents from Go struct declarations."""
    if verbose:
        _configure_logging(logging.DEBUG)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration file",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Directory for the schema documents, overriding output.directory",
)
def generate(config_path: str, output_dir: str | None) -> None:
    """Write one schema document per configured type."""
    try:
        outcome = execute_schema_generation_run(
            GenerationRequest(config_path=config_path, output_dir=output_dir)
        )
    except GenerationRunError as exc:
        raise CliError(str(exc)) from exc
    _echo_diagnostics(outcome.diagnostics)
    for generated in outcome.written:
        click.echo(str(generated.output_path))
    if not outcome.is_ok:
        failed = "\n".join(f"{failure.error}" for failure in outcome.failures)
        raise CliError(failed)


@cli.command(name="print-schema")
@_source_option
@click.option("--type", "type_name", required=True, help="Struct type name to synthesize")
@click.option(
    "--required-policy",
    type=click.Choice([policy.value for policy in RequiredFieldPolicy]),
    default=RequiredFieldPolicy.INDIRECTION_ONLY.value,
    show_default=True,
    help="Rule deciding which fields are listed as required",
)
@click.option(
    "--expand-nested",
    is_flag=True,
    default=False,
    help="Walk fields of other struct types into nested objects.",
)
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    default=DEFAULT_INDENT,
    show_default=True,
    help="JSON indentation; 0 prints compact output",
)
@_include_tests_option
def print_schema(
    source_paths: tuple[str, ...],
    type_name: str,
    required_policy: str,
    expand_nested: bool,
    indent: int,
    include_tests: bool,
) -> None:
    """Print the schema document of one struct type."""
    options = SynthesisOptions(
        required_policy=RequiredFieldPolicy(required_policy),
        expand_nested_structs=expand_nested,
    )
    try:
        source_model = load_source_model(source_paths, include_tests=include_tests)
        result = synthesize(source_model, type_name, options=options)
    except SynthesisError as exc:
        _echo_diagnostics(exc.diagnostics)
        raise CliError(str(exc)) from exc
    except SourceParseError as exc:
        raise CliError(str(exc)) from exc
    _echo_diagnostics(result.diagnostics)
    document = render_schema(result.schema)
    click.echo(serialize_document(document, indent=indent or None), nl=False)


@cli.command(name="list-types")
@_source_option
@_include_tests_option
def list_types(source_paths: tuple[str, ...], include_tests: bool) -> None:
    """List the struct types declared in the given sources."""
    try:
        source_model = load_source_model(source_paths, include_tests=include_tests)
    except SourceParseError as exc:
        raise CliError(str(exc)) from exc
    for name in source_model.struct_names():
        click.echo(name)


def _echo_diagnostics(diagnostics: tuple[SynthesisDiagnostic, ...]) -> None:
    for diagnostic in diagnostics:
        click.echo(f"warning: {diagnostic.message}", err=True)


def _configure_logging(level: int) -> None:
    package_logger = logging.getLogger("struct_jsonschema")
    package_logger.setLevel(level)
    if any(handler.name == _HANDLER_NAME for handler in package_logger.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(handler)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
