"""Type classification exports."""

from .classification_rules import TypeClassification, build_leaf_node, classify_type_name

__all__ = ["TypeClassification", "build_leaf_node", "classify_type_name"]
