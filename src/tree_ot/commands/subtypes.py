"""`subtypes` command registration."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from tree_ot.core.subtypes import default_registry


def register(app: typer.Typer, *, console: Console) -> None:
    """Register `subtypes` command."""

    @app.command("subtypes")
    def list_subtypes() -> None:
        """List registered edit subtypes."""

        table = Table(title="Edit subtypes")
        table.add_column("Name")
        table.add_column("Implementation")
        for name in default_registry.names():
            subtype = default_registry.lookup(name)
            table.add_row(name, type(subtype).__name__)
        console.print(table)
