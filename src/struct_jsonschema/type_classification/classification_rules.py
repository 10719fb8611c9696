"""Scalar type name classification rules."""

from __future__ import annotations

from dataclasses import dataclass

from struct_jsonschema.schema_nodes import BooleanNode, NodeKind, NumberNode, SchemaNode, StringNode

_STRING_TYPE_NAMES = frozenset({"string"})
_DATE_TIME_TYPE_NAMES = frozenset({"Time"})
_NUMBER_TYPE_NAMES = frozenset(
    {
        "int",
        "uint",
        "int8",
        "uint8",
        "int16",
        "uint16",
        "int32",
        "uint32",
        "int64",
        "uint64",
        "byte",
        "rune",
        "float32",
        "float64",
    }
)
_BOOLEAN_TYPE_NAMES = frozenset({"bool"})


@dataclass(frozen=True)
class TypeClassification:
    """Schema variant and format hint for one scalar type name."""

    kind: NodeKind
    format: str | None = None


def classify_type_name(type_name: str) -> TypeClassification | None:
    """Return the classification for a leaf type name, or None when it has no rule."""
    if type_name in _STRING_TYPE_NAMES:
        return TypeClassification(kind=NodeKind.STRING)
    if type_name in _DATE_TIME_TYPE_NAMES:
        return TypeClassification(kind=NodeKind.STRING, format="date-time")
    if type_name in _NUMBER_TYPE_NAMES:
        return TypeClassification(kind=NodeKind.NUMBER)
    if type_name in _BOOLEAN_TYPE_NAMES:
        return TypeClassification(kind=NodeKind.BOOLEAN)
    return None


def build_leaf_node(classification: TypeClassification, description: str) -> SchemaNode:
    """Build the schema node for a classified scalar field."""
    if classification.kind is NodeKind.STRING:
        return StringNode(description=description, format=classification.format)
    if classification.kind is NodeKind.NUMBER:
        return NumberNode(description=description)
    if classification.kind is NodeKind.BOOLEAN:
        return BooleanNode(description=description)
    raise ValueError(f"Classification kind is not a scalar: {classification.kind.value}")
