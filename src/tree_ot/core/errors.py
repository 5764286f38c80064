"""Domain errors."""

from __future__ import annotations

from collections.abc import Sequence

from tree_ot.core.doc_types import PathKey


def format_path(path: Sequence[PathKey]) -> str:
    """Render document path as `[a, 0, b]`."""

    return "[" + ", ".join(str(part) for part in path) + "]"


class TreeOtError(Exception):
    """Base tree-ot error."""


class ValidationError(TreeOtError):
    """Malformed input (operation encoding, files, CLI arguments)."""


class StructuralError(TreeOtError):
    """Operation does not fit the document it is applied to."""

    kind = "structural"

    def __init__(self, message: str, *, path: Sequence[PathKey] = ()) -> None:
        super().__init__(message)
        self.path: tuple[PathKey, ...] = tuple(path)


class NodeExists(StructuralError):
    kind = "node-exists"

    def __init__(self, path: Sequence[PathKey]) -> None:
        super().__init__(f"Node already exists at path: {format_path(path)}", path=path)


class MissingNode(StructuralError):
    kind = "missing-node"

    def __init__(self, path: Sequence[PathKey], *, reason: str = "no node") -> None:
        super().__init__(f"Missing node at path: {format_path(path)} ({reason})", path=path)


class UnknownType(StructuralError):
    kind = "unknown-type"

    def __init__(self, type_name: str, *, path: Sequence[PathKey] = ()) -> None:
        super().__init__(f"Missing type: {type_name}", path=path)
        self.type_name = type_name


class UnmatchedPick(StructuralError):
    kind = "unmatched-pick"

    def __init__(self, slots: dict[int, tuple[PathKey, ...]]) -> None:
        first_path = next(iter(slots.values()), ())
        rendered = ", ".join(
            f"{slot} from {format_path(path)}" for slot, path in slots.items()
        )
        super().__init__(f"Picked value(s) never dropped: slot {rendered}", path=first_path)
        self.slots = dict(slots)


class UnmatchedDrop(StructuralError):
    kind = "unmatched-drop"

    def __init__(self, slot: int, *, path: Sequence[PathKey]) -> None:
        super().__init__(
            f"Nothing picked for slot {slot} dropped at path: {format_path(path)}",
            path=path,
        )
        self.slot = slot


class DuplicateSlot(StructuralError):
    kind = "duplicate-slot"

    def __init__(self, slot: int, *, path: Sequence[PathKey]) -> None:
        super().__init__(
            f"Slot {slot} picked twice (second pick at path: {format_path(path)})",
            path=path,
        )
        self.slot = slot
