"""Shared Typer option definitions."""

from __future__ import annotations

import typer

from tree_ot.core.constants import DIFF_MODES

file_option = typer.Option(
    ...,
    "--file",
    "-f",
    help="Document to change (.json is read/written as JSON, anything else as YAML).",
    exists=True,
    readable=True,
    dir_okay=False,
)

op_file_option = typer.Option(
    ...,
    "--op",
    help="JSON1 operation in compact form: a JSON or YAML list (empty = no-op).",
    exists=True,
    readable=True,
    dir_okay=False,
)

diff_mode_option = typer.Option(
    "summary",
    "--diff",
    help=f"Diff output: {' | '.join(DIFF_MODES)} (summary truncates long diffs).",
)

dry_run_option = typer.Option(
    False,
    "--dry-run",
    help="Apply and show the diff, but leave the document file untouched.",
)

json_output_option = typer.Option(
    False,
    "--json",
    help="Print the check result as JSON (ok flag, summary, issue list).",
)
