"""Schema node model exports."""

from .node_models import (
    DRAFT_04_DIALECT,
    RECOGNIZED_STRING_FORMATS,
    ArrayNode,
    BooleanNode,
    NodeKind,
    NumberNode,
    ObjectNode,
    Schema,
    SchemaNode,
    StringNode,
)

__all__ = [
    "DRAFT_04_DIALECT",
    "RECOGNIZED_STRING_FORMATS",
    "ArrayNode",
    "BooleanNode",
    "NodeKind",
    "NumberNode",
    "ObjectNode",
    "Schema",
    "SchemaNode",
    "StringNode",
]
