"""`check` command registration."""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tree_ot.cli_options import json_output_option, op_file_option
from tree_ot.cli_support import CliGuard
from tree_ot.core.ops_models import parse_operation
from tree_ot.core.resolver import validate_operation
from tree_ot.core.validators import CheckResult, check_operation
from tree_ot.io.doc_io import load_operation_payload


def register(app: typer.Typer, *, console: Console, guard: CliGuard) -> None:
    """Register `check` command."""

    @app.command("check")
    def check(
        op_file: Path = op_file_option,
        json_output: bool = json_output_option,
    ) -> None:
        """Validate operation encoding and pick/drop pairing without a document."""

        with guard:
            operation = parse_operation(load_operation_payload(op_file))
            validate_operation(operation)
            result = check_operation(operation)

        if json_output:
            typer.echo(json.dumps(_as_json(result), ensure_ascii=False, indent=2))
        elif result.ok:
            console.print(f"check ok: {result.components} component(s), 0 issues found")
        else:
            console.print(_issues_table(result))
        if not result.ok:
            raise typer.Exit(code=1)


def _as_json(result: CheckResult) -> dict[str, Any]:
    by_code = Counter(issue.code for issue in result.issues)
    return {
        "ok": result.ok,
        "summary": {
            "components": result.components,
            "total": len(result.issues),
            "by_code": dict(sorted(by_code.items())),
        },
        "issues": [
            {"code": issue.code, "path": issue.path, "message": issue.message}
            for issue in result.issues
        ],
    }


def _issues_table(result: CheckResult) -> Table:
    table = Table(title=f"Operation issues ({len(result.issues)})")
    for column in ("Code", "Path", "Message"):
        table.add_column(column, overflow="fold")
    for issue in result.issues:
        table.add_row(issue.code, escape(issue.path), escape(issue.message))
    return table
