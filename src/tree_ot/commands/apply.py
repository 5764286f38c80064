"""`apply` command registration."""

from __future__ import annotations

from pathlib import Path

import typer

from tree_ot.cli_options import diff_mode_option, dry_run_option, file_option, op_file_option
from tree_ot.cli_support import CliGuard, MutationRunner
from tree_ot.core.doc_types import DocNode
from tree_ot.core.ops_models import parse_operation
from tree_ot.io.doc_io import load_operation_payload
from tree_ot.ops.apply_ops import apply


def register(app: typer.Typer, *, guard: CliGuard, runner: MutationRunner) -> None:
    """Register `apply` command."""

    @app.command("apply")
    def apply_cmd(
        file_path: Path = file_option,
        op_file: Path = op_file_option,
        dry_run: bool = dry_run_option,
        diff_mode: str = diff_mode_option,
    ) -> None:
        """Apply one JSON1 operation to the document."""

        with guard:
            operation = parse_operation(load_operation_payload(op_file))

            def mutate(document: DocNode) -> DocNode:
                return apply(document, operation)

            runner.run(
                file_path=file_path,
                dry_run=dry_run,
                diff_mode=diff_mode,
                mutator=mutate,
            )
