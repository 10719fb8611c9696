"""Schema synthesizer tests."""

from __future__ import annotations

import pytest
from struct_jsonschema.schema_synthesis import (
    DeclarationNotFound,
    DiagnosticCode,
    EmptySchema,
    NotAStructuredType,
    SynthesisError,
    synthesize,
    synthesize_all,
)
from struct_jsonschema.source_model import PackageSourceModel, parse_go_source

_SOURCE = """package models

import "time"

// Person is a registered user.
type Person struct {
	Name      string // full name
	Age       int    // age in years
	CreatedAt time.Time
	UpdatedAt *time.Time
	Manager   *Person
	Labels    []string
}

type Empty struct{}

type Opaque struct {
	Inner Handle
}

type Status int
"""


def _source_model() -> PackageSourceModel:
    return PackageSourceModel(parse_go_source(_SOURCE, filename="models.go"))


def test_synthesizes_schema_for_struct() -> None:
    result = synthesize(_source_model(), "Person")

    assert result.schema.title == "Person"
    assert result.schema.description == "Person is a registered user."
    assert result.schema.root.title == "Person"
    assert list(result.schema.root.properties) == ["Name", "Age", "CreatedAt", "UpdatedAt"]
    assert result.schema.root.required == ("UpdatedAt",)
    assert set(result.schema.root.required) <= set(result.schema.root.properties)
    assert [(item.field, item.code) for item in result.diagnostics] == [
        ("Manager", DiagnosticCode.UNCLASSIFIED_FIELD_TYPE),
        ("Labels", DiagnosticCode.UNCLASSIFIED_FIELD_TYPE),
    ]


def test_missing_declaration_fails() -> None:
    with pytest.raises(DeclarationNotFound, match="Unknown") as exc_info:
        synthesize(_source_model(), "Unknown")

    assert exc_info.value.type_name == "Unknown"


def test_non_struct_declaration_fails() -> None:
    with pytest.raises(NotAStructuredType, match="not a struct"):
        synthesize(_source_model(), "Status")


def test_struct_without_fields_fails_with_empty_schema() -> None:
    with pytest.raises(EmptySchema):
        synthesize(_source_model(), "Empty")


def test_struct_with_only_unknown_types_fails_with_diagnostics() -> None:
    with pytest.raises(EmptySchema) as exc_info:
        synthesize(_source_model(), "Opaque")

    assert [item.field for item in exc_info.value.diagnostics] == ["Inner"]


def test_repeated_synthesis_yields_equal_schemas() -> None:
    source_model = _source_model()

    first = synthesize(source_model, "Person")
    second = synthesize(source_model, "Person")

    assert first == second
    assert first.schema.root is not second.schema.root


def test_batch_isolates_declaration_failures() -> None:
    outcome = synthesize_all(_source_model(), ["Person", "Unknown", "Empty", "Person"])

    assert list(outcome.results) == ["Person"]
    assert [failure.type_name for failure in outcome.failures] == ["Unknown", "Empty"]
    assert all(isinstance(failure.error, SynthesisError) for failure in outcome.failures)
    assert outcome.is_ok is False
    assert len(outcome.diagnostics) == 2


def test_batch_without_failures_is_ok() -> None:
    outcome = synthesize_all(_source_model(), ["Person"])

    assert outcome.is_ok is True
    assert outcome.failures == ()
