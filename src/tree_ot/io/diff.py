"""Text diff and touched-key summaries for `tree-ot apply`."""

from __future__ import annotations

from dataclasses import dataclass, field
from difflib import unified_diff

from rich.console import Console
from rich.text import Text

from tree_ot.core.containers import get_child
from tree_ot.core.doc_types import MISSING, DocNode, PathKey

_LINE_STYLES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("+++", "---"), "bold"),
    (("@@",), "cyan"),
    (("+",), "green"),
    (("-",), "red"),
)


@dataclass(slots=True)
class DocumentDiff:
    """Unified diff of a serialized document plus line counts."""

    lines: list[str] = field(default_factory=list)
    added: int = 0
    deleted: int = 0
    hunks: int = 0

    @property
    def stats(self) -> str:
        return f"+{self.added} -{self.deleted} ({self.hunks} hunks)"


def diff_documents(before: str, after: str, *, label: str) -> DocumentDiff:
    """Diff two serialized documents; `label` names both sides."""

    label = label.replace("\\", "/").lstrip("/") or label
    diff = DocumentDiff(
        lines=list(
            unified_diff(
                before.splitlines(),
                after.splitlines(),
                fromfile=f"a/{label}",
                tofile=f"b/{label}",
                lineterm="",
            )
        )
    )
    for line in diff.lines:
        if line.startswith(("+++", "---")):
            continue
        if line.startswith("@@"):
            diff.hunks += 1
        elif line.startswith("+"):
            diff.added += 1
        elif line.startswith("-"):
            diff.deleted += 1
    return diff


def touched_keys(before: DocNode, after: DocNode) -> list[PathKey] | None:
    """Top-level keys/indices whose subtree is no longer shared.

    Returns None when the root itself was replaced (different container kind
    or a scalar root).
    """

    if before is after:
        return []
    if not isinstance(after, (dict, list)) or type(before) is not type(after):
        return None

    keys: list[PathKey] = (
        list(after.keys()) if isinstance(after, dict) else list(range(len(after)))
    )
    touched = [key for key in keys if get_child(before, key) is not get_child(after, key)]
    if isinstance(before, dict):
        touched.extend(key for key in before if get_child(after, key) is MISSING)
    elif isinstance(before, list):
        touched.extend(range(len(after), len(before)))
    return touched


def print_diff_lines(console: Console, lines: list[str]) -> None:
    for line in lines:
        style = next(
            (style for prefixes, style in _LINE_STYLES if line.startswith(prefixes)),
            "white",
        )
        console.print(Text(line, style=style))
