"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from struct_jsonschema.document_rendering import (
    DEFAULT_FILE_NAME_TEMPLATE,
    DEFAULT_INDENT,
    schema_file_name,
)
from struct_jsonschema.schema_synthesis import RequiredFieldPolicy, SynthesisOptions

from .runtime_settings import Configuration, OutputSettings, SourceSettings

DEFAULT_OUTPUT_DIRECTORY = "schemas"
PLACEHOLDER = "<REQUIRED>"


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file.

    Relative source and output paths are resolved against the directory holding
    the configuration file.
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.parent
    source = _parse_source_section(parsed.get("source"), base_path)
    type_names = _parse_type_names(parsed.get("types"))
    output = _parse_output_section(parsed.get("output"), base_path)
    synthesis = _parse_synthesis_section(parsed.get("synthesis"))

    return Configuration(
        path=path,
        source=source,
        type_names=type_names,
        output=output,
        synthesis=synthesis,
    )


def _parse_source_section(value: Any, base_path: Path) -> SourceSettings:
    section = _require_mapping(value, "source")
    raw_paths = section.get("paths")
    if isinstance(raw_paths, str):
        raw_paths = [raw_paths]
    entries = _normalize_string_sequence(raw_paths, "source.paths")
    _reject_placeholders(entries, "source.paths")
    if not entries:
        raise ConfigurationError("source.paths must contain at least one path.")
    include_test_files = _optional_bool(
        section.get("include_test_files"), "source.include_test_files", default=False
    )
    return SourceSettings(
        paths=tuple(_resolve_path(base_path, entry) for entry in entries),
        include_test_files=include_test_files,
    )


def _parse_type_names(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    names = _normalize_string_sequence(value, "types")
    _reject_placeholders(names, "types")
    if not names:
        raise ConfigurationError("types must list at least one type name.")
    if len(set(names)) != len(names):
        raise ConfigurationError("types must not contain duplicates.")
    return names


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = {} if value is None else _require_mapping(value, "output")
    directory = _require_non_empty_string(
        section.get("directory", DEFAULT_OUTPUT_DIRECTORY), "output.directory"
    )
    file_name = _require_non_empty_string(
        section.get("file_name", DEFAULT_FILE_NAME_TEMPLATE), "output.file_name"
    )
    try:
        schema_file_name("Probe", file_name)
    except ValueError as exc:
        raise ConfigurationError(f"output.file_name is invalid: {exc}") from exc
    indent = _require_positive_int(section.get("indent", DEFAULT_INDENT), "output.indent")
    return OutputSettings(
        directory=_resolve_path(base_path, directory),
        file_name=file_name,
        indent=indent,
    )


def _parse_synthesis_section(value: Any) -> SynthesisOptions:
    section = {} if value is None else _require_mapping(value, "synthesis")
    policy_raw = _require_non_empty_string(
        section.get("required_policy", RequiredFieldPolicy.INDIRECTION_ONLY.value),
        "synthesis.required_policy",
    ).lower()
    try:
        required_policy = RequiredFieldPolicy(policy_raw)
    except ValueError as exc:
        allowed = ", ".join(policy.value for policy in RequiredFieldPolicy)
        raise ConfigurationError(
            f"synthesis.required_policy must be one of: {allowed}."
        ) from exc
    expand_nested_structs = _optional_bool(
        section.get("expand_nested_structs"), "synthesis.expand_nested_structs", default=False
    )
    return SynthesisOptions(
        required_policy=required_policy,
        expand_nested_structs=expand_nested_structs,
    )


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, Sequence) and not isinstance(value, str):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _reject_placeholders(entries: tuple[str, ...], field_name: str) -> None:
    if PLACEHOLDER in entries:
        raise ConfigurationError(f"{field_name} still contains the {PLACEHOLDER} placeholder.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_bool(value: Any, field_name: str, *, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
