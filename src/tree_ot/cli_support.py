"""Error rendering and the read/apply/write flow shared by commands."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import Literal, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from tree_ot.core.constants import DIFF_MODES, DIFF_PREVIEW_LIMIT
from tree_ot.core.doc_types import DocNode, PathKey
from tree_ot.core.errors import StructuralError, ValidationError
from tree_ot.io.diff import DocumentDiff, diff_documents, print_diff_lines, touched_keys
from tree_ot.io.doc_io import dump_document, parse_text, read_text, write_text

type DiffMode = Literal["full", "summary", "none"]
type Mutator = Callable[[DocNode], DocNode]


def handle_error(console: Console, exc: Exception) -> NoReturn:
    """Print `error: ...` (with the structural error kind) and exit 1."""

    message = escape(str(exc))
    if isinstance(exc, StructuralError):
        message += f" [dim]({exc.kind})[/dim]"
    console.print(f"[red]error:[/red] {message}")
    console.print("[dim]hint:[/dim] run with `--help` for command usage.")
    raise typer.Exit(code=1)


class CliGuard(AbstractContextManager[None]):
    """Turns any exception raised inside a command into `handle_error` output."""

    def __init__(self, *, console: Console) -> None:
        self.console = console

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        del exc_type
        del traceback
        if isinstance(exc, Exception) and not isinstance(exc, typer.Exit):
            handle_error(self.console, exc)
        return False


@dataclass(slots=True)
class MutationRunner:
    """Load a document file, transform it, report the diff, write it back."""

    console: Console
    diff_preview_limit: int = DIFF_PREVIEW_LIMIT

    def run(
        self,
        *,
        file_path: Path,
        dry_run: bool,
        diff_mode: str,
        mutator: Mutator,
    ) -> None:
        mode = _parse_diff_mode(diff_mode)
        before_text = read_text(file_path)
        document = parse_text(before_text, path=file_path)
        updated = mutator(document)
        if updated is document:
            self.console.print("no changes (operation left the document untouched)")
            return

        after_text = dump_document(updated, path=file_path)
        if after_text == before_text:
            self.console.print("no changes (serialized document is unchanged)")
            return

        diff = diff_documents(before_text, after_text, label=str(file_path))
        self._report(diff, mode=mode, touched=_describe_touched(touched_keys(document, updated)))
        if dry_run:
            self.console.print("dry-run: changes were not written")
            return
        write_text(file_path, after_text)
        self.console.print(f"updated: {file_path}")

    def _report(self, diff: DocumentDiff, *, mode: DiffMode, touched: str) -> None:
        if mode == "none":
            self.console.print(
                f"changes: {diff.stats}; {touched}; diff hidden (--diff full to show)"
            )
            return

        truncated = mode == "summary" and len(diff.lines) > self.diff_preview_limit
        header = f"diff summary: {diff.stats}; {touched}"
        if truncated:
            header += f"; showing first {self.diff_preview_limit} lines"
        self.console.print(header)
        print_diff_lines(
            self.console,
            diff.lines[: self.diff_preview_limit] if truncated else diff.lines,
        )
        if truncated:
            self.console.print("... diff truncated (use --diff full to print all)")


def _parse_diff_mode(raw: str) -> DiffMode:
    mode = raw.strip().lower()
    if mode == "full" or mode == "summary" or mode == "none":
        return mode
    raise ValidationError(
        f"unknown diff mode: {raw} (expected: {'|'.join(DIFF_MODES)})"
    )


def _describe_touched(keys: list[PathKey] | None) -> str:
    if keys is None:
        return "touched keys: root replaced"
    return "touched keys: " + (", ".join(str(key) for key in keys) or "none")
