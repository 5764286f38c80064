from __future__ import annotations

import shlex
from pathlib import Path

from typer.testing import CliRunner

from tree_ot import apply
from tree_ot.cli import app

runner = CliRunner()
_README = Path(__file__).resolve().parent.parent / "README.md"


def _readme_command_paths(readme: str) -> list[tuple[str, ...]]:
    paths: dict[tuple[str, ...], None] = {}
    for raw_line in readme.splitlines():
        tokens = shlex.split(raw_line.strip()) if raw_line.strip().startswith("tree-ot ") else []
        command = tuple(_until_first_option(tokens[1:]))
        if command:
            paths[command] = None
    return list(paths)


def _until_first_option(tokens: list[str]) -> list[str]:
    command: list[str] = []
    for token in tokens:
        if token.startswith("-"):
            break
        command.append(token)
    return command


def test_readme_commands_exist_in_cli_help() -> None:
    command_paths = _readme_command_paths(_README.read_text(encoding="utf-8"))

    assert command_paths, "README has no tree-ot command examples"

    errors: list[str] = []
    for command_path in command_paths:
        result = runner.invoke(app, [*command_path, "--help"])
        if result.exit_code != 0:
            errors.append(
                f"`{' '.join(command_path)}` -> exit={result.exit_code}; output={result.output!r}"
            )

    assert not errors, "README command drift:\n" + "\n".join(errors)


def test_readme_python_example() -> None:
    document = {"a": [1, 2], "title": "Foo"}
    op = [["a", [0, {"p": 0}], [1, {"d": 0}]], ["title", {"es": [3, " Bar"]}]]

    assert apply(document, op) == {"a": [2, 1], "title": "Foo Bar"}
