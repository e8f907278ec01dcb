"""Tests for the json-conform command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from json_conform.cli import app

runner = CliRunner()


@pytest.fixture()
def docs(tmp_path: Path) -> tuple[Path, Path]:
    left = tmp_path / "left.json"
    right = tmp_path / "right.json"
    left.write_text(
        json.dumps({"cats": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}], "v": 1}),
        encoding="utf-8",
    )
    right.write_text(
        json.dumps({"cats": [{"id": 2, "name": "B!"}, {"id": 1, "name": "A"}], "v": "1"}),
        encoding="utf-8",
    )
    return left, right


def _invoke(*args: str):  # type: ignore[no-untyped-def]
    return runner.invoke(app, ["--no-progress", "--no-color", *args])


class TestCompareCommand:
    def test_identical_documents(self, tmp_path: Path) -> None:
        path = tmp_path / "same.json"
        path.write_text('{"a": [1, 2]}', encoding="utf-8")
        result = _invoke(str(path), str(path))
        assert result.exit_code == 0
        assert "TOTAL: 0 differences" in result.output

    def test_reports_findings(self, docs: tuple[Path, Path]) -> None:
        left, right = docs
        result = _invoke(str(left), str(right))
        assert result.exit_code == 0
        assert "right.json//v" in result.output
        assert "incorrect type: expected 1 <int>, got 1 <str> instead" in result.output
        assert "right.json//cats//<array>//0//name" in result.output

    def test_key_option(self, docs: tuple[Path, Path]) -> None:
        left, right = docs
        result = _invoke(str(left), str(right), "--key", "DATA.cats.<array>.id")
        assert "right.json//cats//<array>//1//name" in result.output
        assert "unequal values: expected B, got B! instead" in result.output
        assert "TOTAL: 2 differences" in result.output

    def test_coerce_and_ignore_options(self, docs: tuple[Path, Path]) -> None:
        left, right = docs
        result = _invoke(
            str(left),
            str(right),
            "-k",
            "DATA.cats.<array>.id",
            "--coerce-types",
            "-i",
            "DATA//cats//<array>//name",
        )
        assert "TOTAL: 0 differences" in result.output

    def test_left_direction(self, docs: tuple[Path, Path]) -> None:
        left, right = docs
        result = _invoke(str(left), str(right), "--direction", "left")
        assert "left.json//v" in result.output
        assert "right.json//" not in result.output

    def test_both_direction(self, docs: tuple[Path, Path]) -> None:
        left, right = docs
        result = _invoke(str(left), str(right), "-d", "both")
        assert "left.json//v" in result.output
        assert "right.json//v" in result.output

    def test_invalid_direction(self, docs: tuple[Path, Path]) -> None:
        left, right = docs
        result = _invoke(str(left), str(right), "--direction", "sideways")
        assert result.exit_code == 2
        assert "sideways" in result.output

    def test_missing_file(self, tmp_path: Path, docs: tuple[Path, Path]) -> None:
        left, _ = docs
        result = _invoke(str(left), str(tmp_path / "missing.json"))
        assert result.exit_code == 2

    def test_invalid_json(self, tmp_path: Path, docs: tuple[Path, Path]) -> None:
        left, _ = docs
        bad = tmp_path / "bad.json"
        bad.write_text("{", encoding="utf-8")
        result = _invoke(str(left), str(bad))
        assert result.exit_code == 2

    def test_fail_on_diff(self, docs: tuple[Path, Path]) -> None:
        left, right = docs
        assert _invoke(str(left), str(right), "--fail-on-diff").exit_code == 1
        assert _invoke(str(left), str(left), "--fail-on-diff").exit_code == 0

    def test_save_log(self, tmp_path: Path, docs: tuple[Path, Path]) -> None:
        left, right = docs
        out_dir = tmp_path / "logs"
        result = _invoke(str(left), str(right), "--save-log", "--log-dir", str(out_dir))
        assert result.exit_code == 0
        saved = list(out_dir.glob("json_comp_*"))
        assert len(saved) == 1
        assert "right.json//v" in saved[0].read_text(encoding="utf-8")
        assert "Saved log to" in result.output

    def test_with_progress(self, docs: tuple[Path, Path]) -> None:
        left, right = docs
        result = runner.invoke(app, ["--no-color", str(left), str(right)])
        assert result.exit_code == 0
        assert "TOTAL: 5 differences" in result.output
