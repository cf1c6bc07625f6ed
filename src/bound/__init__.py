"""Bound syntax tree model consumed by the editor providers."""

from bound.nodes import BoundNode, BoundTree, CompilationUnitNode, NodeKind
from bound.ranges import TextRange
from bound.serde import load_bound_tree, read_bound_tree
from bound.validation import validate_position, validate_tree

__all__ = [
    "BoundNode",
    "BoundTree",
    "CompilationUnitNode",
    "NodeKind",
    "TextRange",
    "load_bound_tree",
    "read_bound_tree",
    "validate_position",
    "validate_tree",
]
