"""Apply one JSON1 operation to a document."""

from __future__ import annotations

from tree_ot.core.components import Operation
from tree_ot.core.doc_types import MISSING, DocNode
from tree_ot.core.ops_models import parse_operation
from tree_ot.core.resolver import validate_operation
from tree_ot.core.subtypes import SubtypeRegistry, default_registry
from tree_ot.ops.applier import TreeApplier


def apply(
    document: DocNode,
    operation: Operation | list[object] | None,
    *,
    registry: SubtypeRegistry | None = None,
) -> DocNode:
    """Return the new document; `document` itself is never modified.

    `document=None` means "no document yet" (only an insert at the root
    applies) and removing the root returns None. Empty operations return
    `document` itself. Raises a StructuralError subclass when the operation
    does not fit the document and ValidationError when it is malformed.
    """

    op = parse_operation(operation)
    if op.is_noop:
        return document
    validate_operation(op)

    applier = TreeApplier(registry=registry if registry is not None else default_registry)
    result = applier.run(MISSING if document is None else document, op)
    return None if result is MISSING else result
