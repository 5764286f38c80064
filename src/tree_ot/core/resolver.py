"""Decide what an operation node does at its document location."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NoReturn

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
from tree_ot.core.doc_types import PathKey
from tree_ot.core.errors import ValidationError, format_path

type PickAction = Pick | Remove | ShapeChange
type DropAction = Drop | Insert | ShapeChange


@dataclass(slots=True)
class StepPlan:
    """Per-node plan shared by the pick and drop passes."""

    pick: PickAction | None = None
    drop: DropAction | None = None
    edit: Edit | None = None
    descents: list[Descend] = field(default_factory=list)


def resolve_step(op: Operation, *, path: tuple[PathKey, ...] = ()) -> StepPlan:
    """Split components into pick action, drop action, edit and children."""

    plan = StepPlan()
    seen_keys: set[PathKey] = set()
    last_index: int | None = None
    for component in op.components:
        if isinstance(component, Descend):
            if component.key in seen_keys:
                _conflict(path, f"duplicate descent into {component.key!r}")
            seen_keys.add(component.key)
            if isinstance(component.key, int):
                # Both passes rely on ascending list indices.
                if last_index is not None and component.key < last_index:
                    _conflict(
                        path,
                        f"list index descents out of order ({component.key} after {last_index})",
                    )
                last_index = component.key
            plan.descents.append(component)
            continue
        if isinstance(component, ShapeChange):
            if plan.pick is not None or plan.drop is not None:
                _conflict(path, "shape change combined with another pick/drop")
            plan.pick = component
            plan.drop = component
            continue
        if isinstance(component, (Pick, Remove)):
            if plan.pick is not None:
                _conflict(path, "node is picked or removed twice")
            plan.pick = component
            continue
        if isinstance(component, (Drop, Insert)):
            if plan.drop is not None:
                _conflict(path, "more than one value dropped or inserted")
            plan.drop = component
            continue
        if isinstance(component, Edit):
            if plan.edit is not None:
                _conflict(path, "more than one edit")
            plan.edit = component
            continue
        raise ValidationError(
            f"invalid operation at {format_path(path)}: "
            f"unknown component {type(component).__name__}"
        )
    return plan


def validate_operation(op: Operation, *, path: tuple[PathKey, ...] = ()) -> None:
    """Resolve every node once so malformed trees fail before applying."""

    plan = resolve_step(op, path=path)
    for child in plan.descents:
        validate_operation(child.op, path=(*path, child.key))


def _conflict(path: tuple[PathKey, ...], message: str) -> NoReturn:
    raise ValidationError(f"invalid operation at {format_path(path)}: {message}")
