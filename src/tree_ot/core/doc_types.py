"""Core document node typing helpers."""

from __future__ import annotations

from typing import Any, Final

type DocScalar = str | int | float | bool | None
# Leaves of registered subtypes (rich text deltas etc.) are arbitrary objects.
type DocNode = dict[str, Any] | list[Any] | DocScalar | Any
type PathKey = str | int


class _Missing:
    """Marker for a location that holds no node."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()
