"""Schema generation use-case tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from struct_jsonschema.generation_run import (
    GenerationRequest,
    GenerationRunError,
    execute_schema_generation_run,
)
from struct_jsonschema.schema_synthesis import DeclarationNotFound, EmptySchema

_MODELS_SOURCE = """package models

type Person struct {
	Name string // full name
	Age  int    // age in years
}

type Order struct {
	ID       string
	Customer Customer
}

type Marker struct{}
"""


def _write_project(tmp_path: Path, types: str, extra_config: str = "") -> Path:
    models_dir = tmp_path / "models"
    models_dir.mkdir()
    (models_dir / "models.go").write_text(_MODELS_SOURCE, encoding="utf-8")
    config_path = tmp_path / "struct-jsonschema.yaml"
    config_path.write_text(
        f"source:\n  paths: [models]\ntypes: {types}\n{extra_config}", encoding="utf-8"
    )
    return config_path


def test_writes_one_document_per_type(tmp_path: Path) -> None:
    config_path = _write_project(tmp_path, "[Person, Order]")

    outcome = execute_schema_generation_run(GenerationRequest(config_path=str(config_path)))

    assert outcome.is_ok is True
    assert [item.type_name for item in outcome.written] == ["Person", "Order"]
    person_path = tmp_path / "schemas" / "Person.schema.json"
    assert outcome.written[0].output_path == person_path.resolve()
    document = json.loads(person_path.read_text(encoding="utf-8"))
    assert document["$schema"] == "http://json-schema.org/draft-04/schema#"
    assert document["properties"]["Age"] == {
        "type": "number",
        "description": "age in years",
        "minimum": 0,
    }
    assert [item.field for item in outcome.diagnostics] == ["Customer"]


def test_failed_types_do_not_block_other_types(tmp_path: Path) -> None:
    config_path = _write_project(tmp_path, "[Marker, Person, Missing]")

    outcome = execute_schema_generation_run(GenerationRequest(config_path=str(config_path)))

    assert outcome.is_ok is False
    assert [item.type_name for item in outcome.written] == ["Person"]
    assert [type(failure.error) for failure in outcome.failures] == [
        EmptySchema,
        DeclarationNotFound,
    ]
    assert not (tmp_path / "schemas" / "Marker.schema.json").exists()


def test_output_dir_override_and_file_settings(tmp_path: Path) -> None:
    config_path = _write_project(
        tmp_path,
        "[Person]",
        'output:\n  file_name: "{type_name}.json"\n  indent: 4\n',
    )
    override = tmp_path / "override"

    outcome = execute_schema_generation_run(
        GenerationRequest(config_path=str(config_path), output_dir=str(override))
    )

    written = override / "Person.json"
    assert outcome.written[0].output_path == written.resolve()
    assert written.read_text(encoding="utf-8").startswith('{\n    "$schema"')


def test_configuration_errors_become_run_errors(tmp_path: Path) -> None:
    with pytest.raises(GenerationRunError, match="not found"):
        execute_schema_generation_run(GenerationRequest(config_path=str(tmp_path / "nope.yaml")))


def test_source_errors_become_run_errors(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("source:\n  paths: [missing]\ntypes: [Person]\n", encoding="utf-8")

    with pytest.raises(GenerationRunError, match="Source path not found"):
        execute_schema_generation_run(GenerationRequest(config_path=str(config_path)))
