"""Document and operation file I/O (YAML round-trip, JSON by suffix)."""

from __future__ import annotations

import json
from io import StringIO
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from tree_ot.core.constants import JSON_SUFFIXES
from tree_ot.core.doc_types import DocNode
from tree_ot.core.errors import ValidationError


def build_yaml() -> YAML:
    """Round-trip YAML parser/emitter."""

    yaml = YAML(typ="rt")
    yaml.preserve_quotes = True
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.width = 4096
    return yaml


def is_json_path(path: Path) -> bool:
    return path.suffix.lower() in JSON_SUFFIXES


def read_text(path: Path) -> str:
    """Read UTF-8 text file."""

    return path.read_text(encoding="utf-8")


def parse_text(raw: str, *, path: Path) -> DocNode:
    """Parse JSON or YAML text; empty input means no document (None)."""

    if not raw.strip():
        return None
    if is_json_path(path):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValidationError(
                f"json parse error in {path}: {exc.msg} (line {exc.lineno}, column {exc.colno})"
            ) from exc

    try:
        return build_yaml().load(raw)
    except YAMLError as exc:
        raise ValidationError(f"yaml parse error in {path}: {exc}") from exc


def load_document(path: Path) -> DocNode:
    """Load document file (any root type)."""

    return parse_text(read_text(path), path=path)


def load_operation_payload(path: Path) -> Any:
    """Load compact operation file; must be a list or null."""

    loaded = load_document(path)
    if loaded is None or isinstance(loaded, list):
        return loaded
    raise ValidationError(
        f"operation file root must be a list or empty (file: {path}, "
        f"got {type(loaded).__name__})"
    )


def dump_document(document: DocNode, *, path: Path) -> str:
    """Serialize in the file's own format; None dumps to an empty file."""

    if document is None:
        return ""
    if is_json_path(path):
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"

    stream = StringIO()
    build_yaml().dump(document, stream)
    return stream.getvalue()


def write_text(path: Path, text: str) -> None:
    """Write UTF-8 text file."""

    path.write_text(text, encoding="utf-8")
