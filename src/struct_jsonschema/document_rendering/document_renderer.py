"""Rendering of schema node trees into JSON Schema documents."""

from __future__ import annotations

from typing import Any, assert_never

from struct_jsonschema.schema_nodes import (
    DRAFT_04_DIALECT,
    ArrayNode,
    BooleanNode,
    NumberNode,
    ObjectNode,
    Schema,
    SchemaNode,
    StringNode,
)


def render_schema(schema: Schema) -> dict[str, Any]:
    """Render a root schema with the draft-04 dialect marker as its first key."""
    return {"$schema": DRAFT_04_DIALECT, **render_node(schema.root)}


def render_node(node: SchemaNode) -> dict[str, Any]:
    """Render one schema fragment and its children."""
    if isinstance(node, ObjectNode):
        return _render_object(node)
    if isinstance(node, StringNode):
        return _render_string(node)
    if isinstance(node, NumberNode):
        return _render_number(node)
    if isinstance(node, BooleanNode):
        return {"type": "boolean", "description": node.description}
    if isinstance(node, ArrayNode):
        return _render_array(node)
    assert_never(node)


def _render_object(node: ObjectNode) -> dict[str, Any]:
    # An empty required list renders as null.
    return {
        "type": "object",
        "title": node.title,
        "description": node.description,
        "required": list(node.required) if node.required else None,
        "properties": {name: render_node(child) for name, child in node.properties.items()},
    }


def _render_string(node: StringNode) -> dict[str, Any]:
    document: dict[str, Any] = {"type": "string", "description": node.description}
    if node.format is not None:
        document["format"] = node.format
    return document


def _render_number(node: NumberNode) -> dict[str, Any]:
    document: dict[str, Any] = {
        "type": "number",
        "description": node.description,
        "minimum": node.minimum,
    }
    if node.exclusive_minimum:
        document["exclusiveMinimum"] = True
    return document


def _render_array(node: ArrayNode) -> dict[str, Any]:
    return {
        "type": "array",
        "description": node.description,
        "items": render_node(node.items),
        "minItems": node.min_items,
        "uniqueItems": node.unique_items,
    }
