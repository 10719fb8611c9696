"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from struct_jsonschema.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from struct_jsonschema.configuration.loader import ConfigurationError, load_configuration


def test_build_placeholder_configuration_contains_all_supported_sections() -> None:
    scaffold = build_placeholder_configuration()

    assert "Schema generation configuration" in scaffold
    assert "source:" in scaffold
    assert "types:" in scaffold
    assert "output:" in scaffold
    assert "synthesis:" in scaffold
    assert "required_policy" in scaffold
    assert "expand_nested_structs" in scaffold
    assert "<REQUIRED>" in scaffold


def test_placeholder_configuration_is_valid_yaml() -> None:
    parsed = yaml.safe_load(build_placeholder_configuration())

    assert parsed["source"]["paths"] == ["<REQUIRED>"]
    assert parsed["types"] == ["<REQUIRED>"]


def test_unedited_placeholder_configuration_is_rejected(tmp_path: Path) -> None:
    output_path = write_placeholder_configuration(tmp_path / "config.yaml")

    with pytest.raises(ConfigurationError, match="placeholder"):
        load_configuration(output_path)


def test_write_placeholder_configuration_writes_file(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    assert output_path.exists()
    assert "<REQUIRED>" in output_path.read_text(encoding="utf-8")


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(output_path)
