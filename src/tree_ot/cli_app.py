"""CLI app wiring and registration."""

from __future__ import annotations

import typer
from rich.console import Console

from tree_ot import __version__
from tree_ot.cli_support import CliGuard, MutationRunner, handle_error
from tree_ot.commands import apply as apply_commands
from tree_ot.commands import check as check_commands
from tree_ot.commands import subtypes as subtypes_commands
from tree_ot.core.errors import TreeOtError


def build_app(*, console: Console | None = None) -> typer.Typer:
    """Build the `tree-ot` app; commands print through `console`."""

    resolved_console = console or Console()
    guard = CliGuard(console=resolved_console)

    app = typer.Typer(
        help="Apply JSON1 operations to YAML/JSON documents.",
        no_args_is_help=True,
    )
    apply_commands.register(app, guard=guard, runner=MutationRunner(console=resolved_console))
    check_commands.register(app, console=resolved_console, guard=guard)
    subtypes_commands.register(app, console=resolved_console)

    def show_version(value: bool) -> None:
        if value:
            resolved_console.print(f"tree-ot {__version__}")
            raise typer.Exit()

    @app.callback()
    def main_callback(
        version: bool = typer.Option(
            False,
            "--version",
            help="Print version and exit.",
            callback=show_version,
            is_eager=True,
        ),
    ) -> None:
        del version

    return app


_default_console = Console()
app = build_app(console=_default_console)


def main() -> None:
    """Console entrypoint."""

    try:
        app()
    except TreeOtError as exc:
        handle_error(_default_console, exc)
