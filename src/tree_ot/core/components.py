"""Operation tree: an ordered tuple of tagged components per node."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from tree_ot.core.doc_types import PathKey


@dataclass(frozen=True, slots=True)
class Descend:
    """Apply `op` to child `key` (str for maps, int index for lists)."""

    key: PathKey
    op: Operation


@dataclass(frozen=True, slots=True)
class ShapeChange:
    """Replace the node by `inserted`, typically a container of another kind."""

    removed: Any
    inserted: Any


@dataclass(frozen=True, slots=True)
class Insert:
    value: Any


@dataclass(frozen=True, slots=True)
class Remove:
    # Hint only; not compared with the removed node.
    expected: Any = None


@dataclass(frozen=True, slots=True)
class Edit:
    """Leaf edit; `type_name=None` means `payload` is the new leaf."""

    type_name: str | None
    payload: Any


@dataclass(frozen=True, slots=True)
class Pick:
    slot: int


@dataclass(frozen=True, slots=True)
class Drop:
    slot: int
    expected: Any = None


type Component = Descend | ShapeChange | Insert | Remove | Edit | Pick | Drop


@dataclass(frozen=True, slots=True)
class Operation:
    """One operation node."""

    components: tuple[Component, ...] = field(default_factory=tuple)

    @property
    def is_noop(self) -> bool:
        return all(
            isinstance(component, Descend) and component.op.is_noop
            for component in self.components
        )

    def descents(self) -> list[Descend]:
        return [item for item in self.components if isinstance(item, Descend)]

    def walk(self, path: tuple[PathKey, ...] = ()) -> Iterator[tuple[tuple[PathKey, ...], Component]]:
        """Yield (document path, component) pairs in pre-order."""

        for component in self.components:
            if isinstance(component, Descend):
                child_path = (*path, component.key)
                yield child_path, component
                yield from component.op.walk(child_path)
                continue
            yield path, component


def descend(path: list[PathKey] | tuple[PathKey, ...], *components: Component) -> Operation:
    """Wrap `components` in Descend nodes following `path`."""

    op = Operation(tuple(components))
    for key in reversed(path):
        op = Operation((Descend(key, op),))
    return op
