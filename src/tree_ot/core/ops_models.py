"""Pydantic schema and decoder for the JSON1 compact operation encoding.

A JSON1 operation is a nested list::

    ["a", 0, {"p": 0}]                        # pick a[0] into slot 0
    [["a", 1, {"p": 0}], ["b", 0, {"d": 0}]]  # move a[1] -> b[0]
    [{"r": {}, "i": []}, ["x", {"p": 0}], [0, {"d": 0}]]

Leading scalars descend, dicts are component objects at the current
location, trailing lists are child descents.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Annotated, Any, cast

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from tree_ot.core.components import (
    Component,
    Descend,
    Drop,
    Edit,
    Insert,
    Operation,
    Pick,
    Remove,
    ShapeChange,
)
from tree_ot.core.constants import NUMBER_TYPE_NAME, TEXT_TYPE_NAME
from tree_ot.core.doc_types import PathKey
from tree_ot.core.errors import ValidationError, format_path

Slot = Annotated[StrictInt, Field(ge=0)]

_EDIT_KEYS: tuple[str, ...] = ("e", "es", "ena", "er")


class ComponentObject(BaseModel):
    """Single `{p, d, i, r, e, et, es, ena, er}` component object."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    p: Slot | None = None
    d: Slot | None = None
    i: Any = None
    r: Any = None
    e: Any = None
    et: StrictStr | None = None
    es: list[Any] | None = None
    ena: StrictInt | StrictFloat | None = None
    er: Any = None

    @model_validator(mode="after")
    def _validate(self) -> ComponentObject:
        present = self.model_fields_set
        if not present:
            raise ValueError("component object must not be empty")
        if "p" in present and "r" in present:
            raise ValueError("cannot pick and remove at one location")
        if "d" in present and "i" in present:
            raise ValueError("cannot drop and insert at one location")
        edits = [key for key in _EDIT_KEYS if key in present]
        if len(edits) > 1:
            raise ValueError(f"conflicting edits at one location: {', '.join(edits)}")
        if ("e" in present) != ("et" in present):
            raise ValueError("`e` and `et` must be given together")
        if self.et is not None and not self.et.strip():
            raise ValueError("et must not be empty")
        return self

    def to_components(self) -> list[Component]:
        """Components in pick-phase, drop-phase, edit order."""

        present = self.model_fields_set
        components: list[Component] = []
        if "r" in present and "i" in present:
            components.append(ShapeChange(removed=self.r, inserted=self.i))
        elif "r" in present:
            components.append(Remove(expected=self.r))
        elif "i" in present:
            components.append(Insert(value=self.i))
        if self.p is not None:
            components.insert(0, Pick(slot=self.p))
        if self.d is not None:
            components.append(Drop(slot=self.d))

        if "e" in present:
            type_name = cast(str, self.et).strip()
            components.append(Edit(type_name=type_name, payload=self.e))
        elif "es" in present:
            components.append(Edit(type_name=TEXT_TYPE_NAME, payload=self.es))
        elif "ena" in present:
            components.append(Edit(type_name=NUMBER_TYPE_NAME, payload=self.ena))
        elif "er" in present:
            components.append(Edit(type_name=None, payload=self.er))
        return components


def parse_operation(payload: object) -> Operation:
    """Decode compact JSON1 payload (None/[] = no-op)."""

    if isinstance(payload, Operation):
        return payload
    if payload is None:
        return Operation()
    if not _is_list(payload):
        raise ValidationError(
            f"invalid operation: expected list or null, got {type(payload).__name__}"
        )
    return _parse_descent(payload, path=())


def _parse_descent(items: Sequence[object], *, path: tuple[PathKey, ...]) -> Operation:
    components: list[Component] = []
    children: dict[PathKey, Operation] = {}

    for index, item in enumerate(items):
        if _is_list(item):
            for child in items[index:]:
                _merge_child(child, components, children, path=path)
            break
        if isinstance(item, Mapping):
            components.extend(_parse_component_object(item, path=path))
            continue
        if _is_key(item):
            key: PathKey = item  # type: ignore[assignment]
            rest = _parse_descent(items[index + 1 :], path=(*path, key))
            _add_child(children, key, rest, path=path)
            break
        raise ValidationError(
            f"invalid operation at {format_path(path)}: "
            f"unexpected {type(item).__name__} element {item!r}"
        )

    components.extend(Descend(key, child) for key, child in children.items())
    return Operation(tuple(components))


def _merge_child(
    child: object,
    components: list[Component],
    children: dict[PathKey, Operation],
    *,
    path: tuple[PathKey, ...],
) -> None:
    if not _is_list(child):
        raise ValidationError(
            f"invalid operation at {format_path(path)}: "
            "child descents must be the trailing elements"
        )
    if not child:
        raise ValidationError(f"invalid operation at {format_path(path)}: empty child descent")

    head = child[0]
    if _is_key(head):
        key: PathKey = head  # type: ignore[assignment]
        parsed = _parse_descent(child[1:], path=(*path, key))
        _add_child(children, key, parsed, path=path)
        return

    # Child without a leading key applies at the current location.
    parsed = _parse_descent(child, path=path)
    for component in parsed.components:
        if isinstance(component, Descend):
            _add_child(children, component.key, component.op, path=path)
        else:
            components.append(component)


def _add_child(
    children: dict[PathKey, Operation],
    key: PathKey,
    op: Operation,
    *,
    path: tuple[PathKey, ...],
) -> None:
    if key in children:
        raise ValidationError(
            f"invalid operation at {format_path(path)}: duplicate descent into {key!r}"
        )
    children[key] = op


def _parse_component_object(
    raw: Mapping[object, object],
    *,
    path: tuple[PathKey, ...],
) -> list[Component]:
    try:
        parsed = ComponentObject.model_validate(dict(raw))
    except PydanticValidationError as exc:
        raise ValidationError(_format_component_error(exc, path=path)) from exc
    return parsed.to_components()


def _format_component_error(exc: PydanticValidationError, *, path: tuple[PathKey, ...]) -> str:
    issues = exc.errors()
    header = f"invalid component at {format_path(path)}"
    if not issues:
        return header

    preview_limit = 8
    lines = [f"{header}:"]
    for issue in issues[:preview_limit]:
        field = ".".join(str(part) for part in issue.get("loc", ()))
        message = _normalize_issue_message(str(issue.get("msg", "invalid value")))
        lines.append(f"- {field}: {message}" if field else f"- {message}")
    if len(issues) > preview_limit:
        lines.append(f"- ... and {len(issues) - preview_limit} more")
    return "\n".join(lines)


def _normalize_issue_message(message: str) -> str:
    normalized = message.strip()
    prefix = "Value error, "
    if normalized.startswith(prefix):
        return normalized[len(prefix) :]
    return normalized


def _is_list(value: object) -> bool:
    return isinstance(value, (list, tuple))


def _is_key(value: object) -> bool:
    if isinstance(value, str):
        return True
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
