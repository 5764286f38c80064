"""Console script exports."""

from __future__ import annotations

from tree_ot.cli_app import app, main

__all__ = ["app", "main"]


if __name__ == "__main__":
    main()
