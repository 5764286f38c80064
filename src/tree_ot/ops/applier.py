"""Recursive two-pass application of an operation tree.

The pick pass runs post-order and removes every picked/removed node,
stashing picked values in the move buffer. List children are visited in
reverse so indices keep addressing the original document. The drop pass
runs pre-order: it inserts/drops values, applies leaf edits, and then visits
children in order, so list indices address the document as it looks after
the picks and the earlier drops.

Containers are never mutated in place: a container is shallow-copied once,
the first time one of its children changes, and untouched children are
shared with the input document.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tree_ot.core.components import Drop, Edit, Insert, Operation, Pick
from tree_ot.core.containers import (
    clone,
    get_child,
    insert_child,
    is_container,
    remove_child,
    set_child,
)
from tree_ot.core.doc_types import MISSING, DocNode, PathKey
from tree_ot.core.errors import MissingNode, NodeExists, UnknownType
from tree_ot.core.move_buffer import MoveBuffer
from tree_ot.core.resolver import DropAction, resolve_step
from tree_ot.core.subtypes import SubtypeRegistry


@dataclass(slots=True)
class TreeApplier:
    """Applies one operation; owns the move buffer for that call."""

    registry: SubtypeRegistry
    buffer: MoveBuffer = field(default_factory=MoveBuffer)

    def run(self, document: DocNode, op: Operation) -> DocNode:
        picked = self.pick_pass(document, op, path=())
        result, _ = self.drop_pass(picked, op, path=(), in_sequence=False)
        self.buffer.ensure_empty()
        return result

    def pick_pass(self, node: DocNode, op: Operation, *, path: tuple[PathKey, ...]) -> DocNode:
        """Return `node` with picked/removed descendants (and maybe itself) gone."""

        plan = resolve_step(op, path=path)
        rebuilt = None
        for descent in reversed(plan.descents):
            key = descent.key
            current = node if rebuilt is None else rebuilt
            child = get_child(current, key)
            new_child = self.pick_pass(child, descent.op, path=(*path, key))
            if new_child is child:
                continue
            if rebuilt is None:
                rebuilt = clone(node)
            if new_child is MISSING:
                remove_child(rebuilt, key)
            else:
                set_child(rebuilt, key, new_child)

        if rebuilt is not None:
            node = rebuilt
        if plan.pick is None:
            return node
        if node is MISSING:
            verb = "pick" if isinstance(plan.pick, Pick) else "remove"
            raise MissingNode(path, reason=f"cannot {verb} absent node")
        if isinstance(plan.pick, Pick):
            self.buffer.stash(plan.pick.slot, node, path=path)
        return MISSING

    def drop_pass(
        self,
        node: DocNode,
        op: Operation,
        *,
        path: tuple[PathKey, ...],
        in_sequence: bool,
    ) -> tuple[DocNode, bool]:
        """Return (new node, placed) where placed means a value was inserted here."""

        plan = resolve_step(op, path=path)
        placed = False
        if plan.drop is not None:
            # List inserts shift the current occupant right.
            if node is not MISSING and not in_sequence:
                raise NodeExists(path)
            node = self._materialize(plan.drop, path=path)
            placed = True
        if plan.edit is not None:
            node = self._edit(node, plan.edit, path=path)

        rebuilt = None
        for descent in plan.descents:
            key = descent.key
            child_path = (*path, key)
            current = node if rebuilt is None else rebuilt
            child = get_child(current, key)
            new_child, child_placed = self.drop_pass(
                child,
                descent.op,
                path=child_path,
                in_sequence=isinstance(current, list),
            )
            if not child_placed and new_child is child:
                continue
            if rebuilt is None and is_container(node):
                rebuilt = clone(node)
            if child_placed:
                target = rebuilt if rebuilt is not None else node
                insert_child(target, key, new_child, path=child_path)
            else:
                set_child(rebuilt, key, new_child)

        if rebuilt is not None:
            node = rebuilt
        return node, placed

    def _materialize(self, action: DropAction, *, path: tuple[PathKey, ...]) -> DocNode:
        if isinstance(action, Drop):
            return self.buffer.take(action.slot, path=path)
        if isinstance(action, Insert):
            return action.value
        return action.inserted

    def _edit(self, node: DocNode, edit: Edit, *, path: tuple[PathKey, ...]) -> DocNode:
        if node is MISSING:
            raise MissingNode(path, reason="cannot edit absent node")
        if edit.type_name is None:
            return edit.payload
        try:
            subtype = self.registry.lookup(edit.type_name)
        except UnknownType as exc:
            raise UnknownType(exc.type_name, path=path) from None
        return subtype.apply(node, edit.payload)

