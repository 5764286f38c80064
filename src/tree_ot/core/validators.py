"""Static operation checks for the `check` command."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass

from tree_ot.core.components import Drop, Operation, Pick
from tree_ot.core.doc_types import PathKey
from tree_ot.core.errors import format_path


@dataclass(slots=True)
class ValidationIssue:
    """Single validation issue."""

    code: str
    path: str
    message: str


class CheckResult:
    """Validation result payload."""

    def __init__(self, issues: list[ValidationIssue], *, components: int) -> None:
        self.issues = issues
        self.components = components

    @property
    def ok(self) -> bool:
        return not self.issues


def check_operation(op: Operation) -> CheckResult:
    """Verify every pick slot has exactly one drop and vice versa."""

    picks: dict[int, list[tuple[PathKey, ...]]] = defaultdict(list)
    drops: dict[int, list[tuple[PathKey, ...]]] = defaultdict(list)
    count = 0
    for path, component in op.walk():
        count += 1
        if isinstance(component, Pick):
            picks[component.slot].append(path)
        elif isinstance(component, Drop):
            drops[component.slot].append(path)

    issues: list[ValidationIssue] = []
    for slot, paths in sorted(picks.items()):
        if len(paths) > 1:
            issues.extend(
                ValidationIssue(
                    code="duplicate-slot",
                    path=format_path(path),
                    message=f"slot {slot} picked {len(paths)} times",
                )
                for path in paths[1:]
            )
        if slot not in drops:
            issues.append(
                ValidationIssue(
                    code="unmatched-pick",
                    path=format_path(paths[0]),
                    message=f"slot {slot} is picked but never dropped",
                )
            )
    for slot, paths in sorted(drops.items()):
        if len(paths) > 1:
            issues.extend(
                ValidationIssue(
                    code="duplicate-drop",
                    path=format_path(path),
                    message=f"slot {slot} dropped {len(paths)} times",
                )
                for path in paths[1:]
            )
        if slot not in picks:
            issues.append(
                ValidationIssue(
                    code="unmatched-drop",
                    path=format_path(paths[0]),
                    message=f"slot {slot} is dropped but never picked",
                )
            )
    return CheckResult(issues, components=count)
