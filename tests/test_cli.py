from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from tree_ot.cli import app
from tree_ot.io.doc_io import build_yaml

runner = CliRunner()


def _write(dst_dir: Path, name: str, content: str) -> Path:
    dst = dst_dir / name
    dst.write_text(content, encoding="utf-8")
    return dst


def _write_json(dst_dir: Path, payload: object, name: str = "doc.json") -> Path:
    return _write(dst_dir, name, json.dumps(payload, indent=2) + "\n")


def _write_op(dst_dir: Path, payload: object, name: str = "op.json") -> Path:
    return _write(dst_dir, name, json.dumps(payload))


def test_apply_move_in_json_document(tmp_path: Path) -> None:
    document = _write_json(tmp_path, {"a": [1, 2], "b": "keep"})
    op = _write_op(tmp_path, ["a", [0, {"p": 0}], [1, {"d": 0}]])

    result = runner.invoke(app, ["apply", "--file", str(document), "--op", str(op)])

    assert result.exit_code == 0, result.output
    assert json.loads(document.read_text(encoding="utf-8")) == {"a": [2, 1], "b": "keep"}
    assert "touched keys: a" in result.output
    assert "updated:" in result.output


def test_apply_yaml_document_keeps_comments(tmp_path: Path) -> None:
    document = _write(tmp_path, "doc.yaml", "name: demo  # keep me\nitems:\n  - one\n")
    op = _write(tmp_path, "op.yaml", "- [items, 1, {i: two}]\n- [count, {i: 2}]\n")

    result = runner.invoke(app, ["apply", "-f", str(document), "--op", str(op)])

    assert result.exit_code == 0, result.output
    text = document.read_text(encoding="utf-8")
    assert "# keep me" in text
    assert build_yaml().load(text) == {"name": "demo", "items": ["one", "two"], "count": 2}


def test_apply_text_edit_with_full_diff(tmp_path: Path) -> None:
    document = _write_json(tmp_path, {"title": "Foo"})
    op = _write_op(tmp_path, ["title", {"es": [3, " Bar"]}])

    result = runner.invoke(
        app,
        ["apply", "--file", str(document), "--op", str(op), "--diff", "full"],
    )

    assert result.exit_code == 0, result.output
    assert '+  "title": "Foo Bar"' in result.output
    assert '-  "title": "Foo"' in result.output


def test_apply_dry_run_does_not_write(tmp_path: Path) -> None:
    original = json.dumps({"a": 1}, indent=2) + "\n"
    document = _write(tmp_path, "doc.json", original)
    op = _write_op(tmp_path, ["a", {"ena": 41}])

    result = runner.invoke(
        app,
        ["apply", "--file", str(document), "--op", str(op), "--dry-run"],
    )

    assert result.exit_code == 0, result.output
    assert "dry-run: changes were not written" in result.output
    assert "+  \"a\": 42" in result.output
    assert document.read_text(encoding="utf-8") == original


def test_apply_diff_none_hides_diff(tmp_path: Path) -> None:
    document = _write_json(tmp_path, {"a": 1})
    op = _write_op(tmp_path, ["b", {"i": 2}])

    result = runner.invoke(
        app,
        ["apply", "--file", str(document), "--op", str(op), "--diff", "none"],
    )

    assert result.exit_code == 0, result.output
    assert "diff hidden" in result.output
    assert "touched keys: b" in result.output
    assert json.loads(document.read_text(encoding="utf-8")) == {"a": 1, "b": 2}


def test_apply_noop_operation_leaves_file_alone(tmp_path: Path) -> None:
    original = "a: 1\n"
    document = _write(tmp_path, "doc.yaml", original)
    op = _write_op(tmp_path, [])

    result = runner.invoke(app, ["apply", "--file", str(document), "--op", str(op)])

    assert result.exit_code == 0, result.output
    assert "no changes (operation left the document untouched)" in result.output
    assert document.read_text(encoding="utf-8") == original


def test_apply_insert_into_empty_file(tmp_path: Path) -> None:
    document = _write(tmp_path, "doc.json", "")
    op = _write_op(tmp_path, [{"i": {"a": [1]}}])

    result = runner.invoke(app, ["apply", "--file", str(document), "--op", str(op)])

    assert result.exit_code == 0, result.output
    assert json.loads(document.read_text(encoding="utf-8")) == {"a": [1]}
    assert "root replaced" in result.output


def test_apply_remove_root_empties_file(tmp_path: Path) -> None:
    document = _write_json(tmp_path, {"a": 1})
    op = _write_op(tmp_path, [{"r": True}])

    result = runner.invoke(app, ["apply", "--file", str(document), "--op", str(op)])

    assert result.exit_code == 0, result.output
    assert document.read_text(encoding="utf-8") == ""


def test_apply_structural_error_exits_non_zero(tmp_path: Path) -> None:
    original = json.dumps({"a": 1}, indent=2) + "\n"
    document = _write(tmp_path, "doc.json", original)
    op = _write_op(tmp_path, ["a", {"i": 2}])

    result = runner.invoke(app, ["apply", "--file", str(document), "--op", str(op)])

    assert result.exit_code == 1
    assert "Node already exists at path: [a]" in result.output
    assert "(node-exists)" in result.output
    assert document.read_text(encoding="utf-8") == original


def test_apply_unknown_subtype_exits_non_zero(tmp_path: Path) -> None:
    document = _write_json(tmp_path, {"a": "x"})
    op = _write_op(tmp_path, ["a", {"et": "custom-type", "e": 1}])

    result = runner.invoke(app, ["apply", "--file", str(document), "--op", str(op)])

    assert result.exit_code == 1
    assert "Missing type: custom-type" in result.output


def test_apply_malformed_operation_exits_non_zero(tmp_path: Path) -> None:
    document = _write_json(tmp_path, {"a": 1})
    op = _write_op(tmp_path, ["a", {"p": 0, "r": True}])

    result = runner.invoke(app, ["apply", "--file", str(document), "--op", str(op)])

    assert result.exit_code == 1
    assert "invalid component at [a]" in result.output
    assert "cannot pick and remove" in result.output


def test_apply_rejects_unknown_diff_mode(tmp_path: Path) -> None:
    document = _write_json(tmp_path, {"a": 1})
    op = _write_op(tmp_path, ["a", {"ena": 1}])

    result = runner.invoke(
        app,
        ["apply", "--file", str(document), "--op", str(op), "--diff", "bogus"],
    )

    assert result.exit_code == 1
    assert "unknown diff mode: bogus" in result.output


def test_check_ok(tmp_path: Path) -> None:
    op = _write_op(tmp_path, [["a", {"p": 0}], ["b", {"d": 0}]])

    result = runner.invoke(app, ["check", "--op", str(op)])

    assert result.exit_code == 0, result.output
    assert "check ok: 4 component(s), 0 issues found" in result.output


def test_check_reports_unpaired_moves(tmp_path: Path) -> None:
    op = _write_op(tmp_path, [["a", {"p": 0}], ["b", {"d": 1}]])

    result = runner.invoke(app, ["check", "--op", str(op)])

    assert result.exit_code == 1
    assert "unmatched-pick" in result.output
    assert "unmatched-drop" in result.output
    assert "[b]" in result.output


def test_check_json_output(tmp_path: Path) -> None:
    op = _write_op(tmp_path, [["a", {"p": 0}], ["b", {"p": 0}], ["c", {"d": 0}]])

    result = runner.invoke(app, ["check", "--op", str(op), "--json"])

    assert result.exit_code == 1
    payload = json.loads(result.output)
    assert payload["ok"] is False
    assert payload["summary"] == {
        "components": 6,
        "total": 1,
        "by_code": {"duplicate-slot": 1},
    }
    assert payload["issues"] == [
        {"code": "duplicate-slot", "path": "[b]", "message": "slot 0 picked 2 times"}
    ]


def test_check_json_output_ok(tmp_path: Path) -> None:
    op = _write_op(tmp_path, ["a", {"ena": 1}])

    result = runner.invoke(app, ["check", "--op", str(op), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["ok"] is True
    assert payload["issues"] == []


def test_check_rejects_conflicting_components(tmp_path: Path) -> None:
    op = _write_op(tmp_path, ["x", {"d": 0}, [{"i": 1}]])

    result = runner.invoke(app, ["check", "--op", str(op)])

    assert result.exit_code == 1
    assert "more than one value dropped or inserted" in result.output


def test_check_rejects_non_list_operation_file(tmp_path: Path) -> None:
    op = _write(tmp_path, "op.yaml", "p: 0\n")

    result = runner.invoke(app, ["check", "--op", str(op)])

    assert result.exit_code == 1
    assert "operation file root must be a list" in result.output


def test_subtypes_lists_bundled_types() -> None:
    result = runner.invoke(app, ["subtypes"])

    assert result.exit_code == 0, result.output
    assert "Edit subtypes" in result.output
    assert "text-unicode" in result.output
    assert "NumberType" in result.output
    assert "TextUnicodeType" in result.output


def test_version_option() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0, result.output
    assert "tree-ot 0.1.0" in result.output
