"""Edit subtype registry.

Leaf edits name a subtype (``number``, ``text-unicode``, ``rich-text``...).
The registry maps that name to an object with an ``apply(snapshot, op)``
method. Types are registered by callers; the core ships none of its own.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from tree_ot.core.errors import UnknownType, ValidationError

type EditFn = Callable[[Any, Any], Any]


@runtime_checkable
class EditableType(Protocol):
    """Leaf type that knows how to apply its own edit payloads."""

    name: str

    def apply(self, snapshot: Any, op: Any) -> Any: ...


@dataclass(frozen=True, slots=True)
class FunctionSubtype:
    """Adapter registering a bare edit function under a name."""

    name: str
    fn: EditFn

    def apply(self, snapshot: Any, op: Any) -> Any:
        return self.fn(snapshot, op)


class SubtypeRegistry:
    """Mutable name -> EditableType mapping.

    Not thread-safe; callers registering from several threads must serialize.
    """

    def __init__(self) -> None:
        self._types: dict[str, EditableType] = {}

    def register(
        self,
        subtype: str | EditableType,
        edit_fn: EditFn | None = None,
    ) -> EditableType:
        """Store or overwrite a subtype, return the registered object."""

        if isinstance(subtype, str):
            if edit_fn is None:
                raise ValidationError(f"subtype {subtype!r} registered without edit function")
            resolved: EditableType = FunctionSubtype(name=subtype, fn=edit_fn)
        else:
            if edit_fn is not None:
                raise ValidationError("edit function is only accepted with a type name")
            if not isinstance(subtype, EditableType):
                raise ValidationError(
                    f"subtype must define `name` and `apply`: {type(subtype).__name__}"
                )
            resolved = subtype

        name = resolved.name.strip() if isinstance(resolved.name, str) else ""
        if not name:
            raise ValidationError("subtype name must not be empty")
        self._types[name] = resolved
        uri = getattr(resolved, "uri", None)
        if isinstance(uri, str) and uri:
            self._types[uri] = resolved
        return resolved

    def unregister(self, name: str) -> bool:
        """Drop a name (and the uri alias of the same type); True when found."""

        subtype = self._types.pop(name, None)
        if subtype is None:
            return False
        for alias in [key for key, value in self._types.items() if value is subtype]:
            del self._types[alias]
        return True

    def lookup(self, name: str) -> EditableType:
        try:
            return self._types[name]
        except KeyError:
            raise UnknownType(name) from None

    def names(self) -> list[str]:
        return sorted(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


default_registry = SubtypeRegistry()


def register_subtype(subtype: str | EditableType, edit_fn: EditFn | None = None) -> EditableType:
    """Register into the process-wide registry."""

    return default_registry.register(subtype, edit_fn)


def unregister_subtype(name: str) -> bool:
    return default_registry.unregister(name)


def lookup_subtype(name: str) -> EditableType:
    return default_registry.lookup(name)
