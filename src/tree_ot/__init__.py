"""Apply JSON1 operational-transform operations to immutable JSON trees."""

from __future__ import annotations

from tree_ot.core.components import (
    Descend,
    Drop,
    Edit,
    Insert,
    Operation,
    Pick,
    Remove,
    ShapeChange,
)
from tree_ot.core.errors import (
    DuplicateSlot,
    MissingNode,
    NodeExists,
    StructuralError,
    TreeOtError,
    UnknownType,
    UnmatchedDrop,
    UnmatchedPick,
    ValidationError,
)
from tree_ot.core.ops_models import parse_operation
from tree_ot.core.subtypes import (
    EditableType,
    SubtypeRegistry,
    lookup_subtype,
    register_subtype,
    unregister_subtype,
)
from tree_ot.ops.apply_ops import apply
from tree_ot.subtypes import register_default_subtypes

register_default_subtypes()

__version__ = "0.1.0"
__all__ = [
    "Descend",
    "Drop",
    "DuplicateSlot",
    "Edit",
    "EditableType",
    "Insert",
    "MissingNode",
    "NodeExists",
    "Operation",
    "Pick",
    "Remove",
    "ShapeChange",
    "StructuralError",
    "SubtypeRegistry",
    "TreeOtError",
    "UnknownType",
    "UnmatchedDrop",
    "UnmatchedPick",
    "ValidationError",
    "apply",
    "lookup_subtype",
    "parse_operation",
    "register_default_subtypes",
    "register_subtype",
    "unregister_subtype",
]
