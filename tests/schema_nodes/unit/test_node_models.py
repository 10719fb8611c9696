"""Schema node model tests."""

from __future__ import annotations

import pytest
from struct_jsonschema.schema_nodes import (
    ArrayNode,
    NumberNode,
    ObjectNode,
    Schema,
    StringNode,
)


def test_object_node_keeps_property_insertion_order() -> None:
    node = ObjectNode(
        title="Person",
        properties={"Name": StringNode(), "Age": NumberNode(), "Email": StringNode()},
    )

    assert list(node.properties) == ["Name", "Age", "Email"]


def test_object_node_rejects_required_name_without_property() -> None:
    with pytest.raises(ValueError, match="Missing"):
        ObjectNode(required=("Missing",), properties={"Name": StringNode()})


def test_object_node_rejects_duplicate_required_names() -> None:
    with pytest.raises(ValueError, match="unique"):
        ObjectNode(required=("Name", "Name"), properties={"Name": StringNode()})


def test_object_node_properties_cannot_be_mutated() -> None:
    source = {"Name": StringNode()}
    node = ObjectNode(properties=source)
    source["Other"] = StringNode()

    assert list(node.properties) == ["Name"]
    with pytest.raises(TypeError):
        node.properties["Age"] = NumberNode()  # type: ignore[index]


def test_string_node_accepts_recognized_format_only() -> None:
    assert StringNode(format="date-time").format == "date-time"

    with pytest.raises(ValueError, match="Unrecognized string format"):
        StringNode(format="currency")


def test_array_node_rejects_negative_min_items() -> None:
    with pytest.raises(ValueError, match="min_items"):
        ArrayNode(items=StringNode(), min_items=-1)


def test_schema_requires_root_object() -> None:
    with pytest.raises(ValueError, match="root"):
        Schema(title="Person", description="", root=None)  # type: ignore[arg-type]
