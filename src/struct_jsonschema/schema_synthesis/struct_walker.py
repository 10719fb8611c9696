"""Struct declaration walker building object schema nodes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from struct_jsonschema.schema_nodes import ObjectNode, SchemaNode
from struct_jsonschema.source_model import FieldDeclaration, TypeDeclaration
from struct_jsonschema.type_classification import build_leaf_node, classify_type_name

from .synthesis_outcomes import (
    DiagnosticCode,
    RequiredFieldPolicy,
    SynthesisDiagnostic,
    SynthesisOptions,
)

_LOGGER = logging.getLogger(__name__)

DeclarationResolver = Callable[[str], TypeDeclaration | None]


@dataclass(frozen=True)
class WalkOutcome:
    """Object node for a struct, or None when nothing could be classified."""

    node: ObjectNode | None
    diagnostics: tuple[SynthesisDiagnostic, ...] = ()


@dataclass(frozen=True)
class _WalkContext:
    """Read-only settings shared by every level of one walk."""

    options: SynthesisOptions
    resolve: DeclarationResolver | None


@dataclass
class _WalkState:
    """Mutable collector for one walk."""

    diagnostics: list[SynthesisDiagnostic]


def walk_struct(
    declaration: TypeDeclaration,
    *,
    options: SynthesisOptions | None = None,
    resolve: DeclarationResolver | None = None,
) -> WalkOutcome:
    """Walk the fields of a struct declaration into an object schema node.

    Fields are visited in declaration order. A pointer to an unexported named
    type is skipped without a diagnostic. Fields whose type cannot be classified
    are dropped and reported as diagnostics. ``resolve`` is only consulted when
    ``options.expand_nested_structs`` is set.

    Args:
      declaration: Struct declaration to walk.
      options: Required-field policy and nested struct handling.
      resolve: Lookup of other declarations in the same source model.

    Returns:
      The object node and collected diagnostics. The node is None when the
      struct has no fields or none of them could be classified.
    """
    context = _WalkContext(options=options or SynthesisOptions(), resolve=resolve)
    state = _WalkState(diagnostics=[])
    node = _walk(declaration, frozenset(), context, state)
    return WalkOutcome(node=node, diagnostics=tuple(state.diagnostics))


def _walk(
    declaration: TypeDeclaration,
    visited: frozenset[str],
    context: _WalkContext,
    state: _WalkState,
) -> ObjectNode | None:
    if not declaration.fields:
        return None

    visited = visited | {declaration.name}
    properties: dict[str, SchemaNode] = {}
    required: list[str] = []
    for field in declaration.fields:
        type_ref = field.type_ref
        through_indirection = type_ref.is_pointer and type_ref.name is not None
        if through_indirection and not type_ref.is_exported:
            _LOGGER.debug(
                "Skipping %s.%s: pointer to unexported type %s",
                declaration.name,
                field.name,
                type_ref.expression,
            )
            continue
        if field.name in properties:
            continue

        node = _field_node(declaration, field, visited, context, state)
        if node is None:
            continue
        properties[field.name] = node
        if _is_required(through_indirection, type_ref.is_pointer, context.options):
            required.append(field.name)

    if not properties:
        return None
    return ObjectNode(
        title=declaration.name,
        description=declaration.doc,
        required=tuple(required),
        properties=properties,
    )


def _field_node(
    declaration: TypeDeclaration,
    field: FieldDeclaration,
    visited: frozenset[str],
    context: _WalkContext,
    state: _WalkState,
) -> SchemaNode | None:
    type_ref = field.type_ref
    classification = classify_type_name(type_ref.leaf_name)
    if classification is not None:
        return build_leaf_node(classification, field.doc)

    nested = _nested_declaration(field, context)
    if nested is None:
        _report(
            state,
            DiagnosticCode.UNCLASSIFIED_FIELD_TYPE,
            declaration,
            field,
            f"{declaration.name}.{field.name}: no schema type for {type_ref.expression}; "
            "field omitted",
        )
        return None
    if nested.name in visited:
        _report(
            state,
            DiagnosticCode.RECURSIVE_REFERENCE,
            declaration,
            field,
            f"{declaration.name}.{field.name}: {nested.name} refers back to itself; "
            "field omitted",
        )
        return None

    node = _walk(nested, visited, context, state)
    if node is None:
        _report(
            state,
            DiagnosticCode.UNCLASSIFIED_FIELD_TYPE,
            declaration,
            field,
            f"{declaration.name}.{field.name}: nested struct {nested.name} has no "
            "classifiable fields; field omitted",
        )
        return None
    return replace(node, description=field.doc or node.description)


def _nested_declaration(
    field: FieldDeclaration, context: _WalkContext
) -> TypeDeclaration | None:
    type_ref = field.type_ref
    if (
        not context.options.expand_nested_structs
        or context.resolve is None
        or type_ref.name is None
        or type_ref.package is not None
    ):
        return None
    nested = context.resolve(type_ref.name)
    if nested is None or not nested.is_struct:
        return None
    return nested


def _is_required(
    through_indirection: bool, is_pointer: bool, options: SynthesisOptions
) -> bool:
    if options.required_policy is RequiredFieldPolicy.NON_POINTER:
        return not is_pointer
    return through_indirection


def _report(
    state: _WalkState,
    code: DiagnosticCode,
    declaration: TypeDeclaration,
    field: FieldDeclaration,
    message: str,
) -> None:
    _LOGGER.debug(message)
    state.diagnostics.append(
        SynthesisDiagnostic(
            code=code,
            declaration=declaration.name,
            field=field.name,
            type_expression=field.type_ref.expression,
            message=message,
        )
    )
