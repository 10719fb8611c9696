"""Schema node entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

DRAFT_04_DIALECT = "http://json-schema.org/draft-04/schema#"

RECOGNIZED_STRING_FORMATS = frozenset(
    {"date-time", "date", "time", "email", "hostname", "ipv4", "ipv6", "uri"}
)


class NodeKind(str, Enum):
    """Closed set of schema node variants."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class StringNode:
    """String fragment with an optional format hint."""

    description: str = ""
    format: str | None = None

    def __post_init__(self) -> None:
        if self.format is not None and self.format not in RECOGNIZED_STRING_FORMATS:
            raise ValueError(f"Unrecognized string format: {self.format}")


@dataclass(frozen=True)
class NumberNode:
    """Number fragment bounded from below."""

    description: str = ""
    minimum: int = 0
    exclusive_minimum: bool = False


@dataclass(frozen=True)
class BooleanNode:
    """Boolean fragment."""

    description: str = ""


@dataclass(frozen=True)
class ArrayNode:
    """Array fragment describing its item schema."""

    items: SchemaNode
    description: str = ""
    min_items: int = 0
    unique_items: bool = False

    def __post_init__(self) -> None:
        if self.min_items < 0:
            raise ValueError("min_items must not be negative.")


@dataclass(frozen=True)
class ObjectNode:
    """Object fragment with named child fragments.

    ``properties`` keeps insertion order, which is the declaration order of the
    source fields. Every name listed in ``required`` must be a property key.
    """

    title: str = ""
    description: str = ""
    required: tuple[str, ...] = ()
    properties: Mapping[str, SchemaNode] = field(default_factory=dict)

    def __post_init__(self) -> None:
        missing = [name for name in self.required if name not in self.properties]
        if missing:
            raise ValueError(f"Required fields without a property: {', '.join(missing)}")
        if len(set(self.required)) != len(self.required):
            raise ValueError("Required field names must be unique.")
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))


SchemaNode = ObjectNode | ArrayNode | StringNode | NumberNode | BooleanNode


@dataclass(frozen=True)
class Schema:
    """Root schema for one synthesized declaration."""

    title: str
    description: str
    root: ObjectNode

    def __post_init__(self) -> None:
        if self.root is None:
            raise ValueError("Schema root must be an object node.")
