"""Per-call storage for values picked up by a move."""

from __future__ import annotations

from dataclasses import dataclass, field

from tree_ot.core.doc_types import DocNode, PathKey
from tree_ot.core.errors import DuplicateSlot, UnmatchedDrop, UnmatchedPick


@dataclass(slots=True)
class MoveBuffer:
    """Pick slot -> held value, emptied by the matching drops."""

    held: dict[int, DocNode] = field(default_factory=dict)
    origins: dict[int, tuple[PathKey, ...]] = field(default_factory=dict)

    def stash(self, slot: int, value: DocNode, *, path: tuple[PathKey, ...]) -> None:
        if slot in self.held:
            raise DuplicateSlot(slot, path=path)
        self.held[slot] = value
        self.origins[slot] = path

    def take(self, slot: int, *, path: tuple[PathKey, ...]) -> DocNode:
        if slot not in self.held:
            raise UnmatchedDrop(slot, path=path)
        del self.origins[slot]
        return self.held.pop(slot)

    def ensure_empty(self) -> None:
        """Raise UnmatchedPick when any picked value was never dropped."""

        if self.held:
            raise UnmatchedPick(dict(sorted(self.origins.items())))

    def __len__(self) -> int:
        return len(self.held)
