"""Go source reader tests."""

from __future__ import annotations

import pytest
from struct_jsonschema.source_model import (
    DeclarationKind,
    SourceParseError,
    TypeReference,
    parse_go_source,
)
from struct_jsonschema.source_model.go_source_reader import comment_text

_MODELS_SOURCE = """package models

import "time"

// Person describes a registered user.
type Person struct {
	Name      string // full name
	Age       int    `json:"age"` // age in years
	// CreatedAt is set on insert.
	CreatedAt *time.Time
	Tags      []string
	Lookup    map[string]int
	internal  bool
}

type (
	// Status is an enum-like value.
	Status int

	Address struct {
		Street, City string
	}
)

type Reader interface {
	Read(p []byte) (n int, err error)
}

func (p *Person) Describe() string {
	type local struct{ Hidden string }
	return p.Name
}
"""


def test_reads_package_level_declarations_in_source_order() -> None:
    declarations = parse_go_source(_MODELS_SOURCE, filename="models.go")

    assert [(item.name, item.kind) for item in declarations] == [
        ("Person", DeclarationKind.STRUCT),
        ("Status", DeclarationKind.OTHER),
        ("Address", DeclarationKind.STRUCT),
        ("Reader", DeclarationKind.INTERFACE),
    ]
    assert all(item.source_path == "models.go" for item in declarations)


def test_struct_fields_carry_types_and_comments() -> None:
    person = parse_go_source(_MODELS_SOURCE)[0]
    fields = {field.name: field for field in person.fields}

    assert person.doc == "Person describes a registered user."
    assert [field.name for field in person.fields] == [
        "Name",
        "Age",
        "CreatedAt",
        "Tags",
        "Lookup",
        "internal",
    ]
    assert fields["Name"].type_ref == TypeReference(expression="string", name="string")
    assert fields["Name"].doc == "full name"
    assert fields["Age"].doc == "age in years"
    assert fields["CreatedAt"].type_ref == TypeReference(
        expression="*time.Time", name="Time", package="time", is_pointer=True
    )
    assert fields["CreatedAt"].doc == "CreatedAt is set on insert."
    assert fields["Tags"].type_ref == TypeReference(expression="[]string")
    assert fields["Lookup"].type_ref.name is None
    assert fields["Lookup"].type_ref.expression == "map[string]int"
    assert fields["internal"].exported is False
    assert fields["Name"].exported is True


def test_grouped_declarations_and_multi_name_fields() -> None:
    declarations = {item.name: item for item in parse_go_source(_MODELS_SOURCE)}

    assert declarations["Status"].doc == "Status is an enum-like value."
    assert [field.name for field in declarations["Address"].fields] == ["Street", "City"]
    assert all(field.type_ref.name == "string" for field in declarations["Address"].fields)


def test_declarations_inside_function_bodies_are_ignored() -> None:
    names = [item.name for item in parse_go_source(_MODELS_SOURCE)]

    assert "local" not in names


def test_embedded_fields_are_named_after_their_type() -> None:
    source = """package models

type Audited struct {
	Base
	*Owner
	sql.NullString `db:"note"`
	Name string
}
"""

    audited = parse_go_source(source)[0]

    assert [field.name for field in audited.fields] == ["Base", "Owner", "NullString", "Name"]
    assert audited.fields[1].type_ref.is_pointer is True
    assert audited.fields[2].type_ref.package == "sql"


def test_trailing_type_comment_wins_over_leading_doc() -> None:
    source = """package models

// Leading doc.
type Empty struct{} // trailing doc
"""

    empty = parse_go_source(source)[0]

    assert empty.doc == "trailing doc"
    assert empty.fields == ()


def test_comment_separated_by_blank_line_is_not_attached() -> None:
    source = """package models

// Detached comment.

type Person struct {
	Name string
}
"""

    assert parse_go_source(source)[0].doc == ""


def test_composite_field_types_are_read_whole() -> None:
    source = """package models

type Handlers struct {
	OnEvent  func(name string) error
	Events   chan<- string
	Matrix   [3][3]float64
	Settings struct {
		Debug bool
	}
	Any      interface{}
	Ptr      **int
	Page     Page[string]
}
"""

    fields = {field.name: field.type_ref for field in parse_go_source(source)[0].fields}

    assert fields["OnEvent"].expression == "func(name string) error"
    assert fields["OnEvent"].name is None
    assert fields["Events"].name is None
    assert fields["Matrix"].expression == "[3][3]float64"
    assert fields["Settings"].name is None
    assert fields["Any"].expression == "interface{}"
    assert fields["Ptr"].is_pointer is True
    assert fields["Ptr"].name is None
    assert fields["Page"].name == "Page"


def test_embedded_generic_instantiations_are_named_after_their_type() -> None:
    source = """package models

type Page struct {
	List[int]
	*Cursor[string] `json:"cursor"`
	Pair[string, int] // pair doc
	Window [2]int
	Name string
}
"""

    page = parse_go_source(source)[0]

    assert [field.name for field in page.fields] == ["List", "Cursor", "Pair", "Window", "Name"]
    assert page.fields[0].type_ref.expression == "List[int]"
    assert page.fields[1].type_ref.is_pointer is True
    assert page.fields[2].doc == "pair doc"
    assert page.fields[3].type_ref.expression == "[2]int"
    assert page.fields[3].type_ref.name is None

def test_generic_type_parameters_are_skipped() -> None:
    source = """package models

type Page[T any] struct {
	Total int
}

type Grid [4]int
"""

    declarations = parse_go_source(source)

    assert [item.name for item in declarations] == ["Page", "Grid"]
    assert declarations[0].kind is DeclarationKind.STRUCT
    assert declarations[1].kind is DeclarationKind.OTHER


def test_unterminated_struct_raises_parse_error() -> None:
    source = "package models\n\ntype Broken struct {\n\tName string\n"

    with pytest.raises(SourceParseError, match="models.go"):
        parse_go_source(source, filename="models.go")


def test_unterminated_string_raises_parse_error() -> None:
    source = 'package models\n\nconst name = "open\n'

    with pytest.raises(SourceParseError, match="not terminated"):
        parse_go_source(source)


def test_comment_text_strips_markers_and_directives() -> None:
    assert comment_text(["// first line", "//second", "//go:generate stringer"]) == (
        "first line\nsecond"
    )
    assert comment_text(["/* block\n   comment */"]) == "block\ncomment"
