"""Tests for the java-layout command line."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from java_layout.cli.app import app

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    for name in ("JAVA_LAYOUT_PRINT_WIDTH", "JAVA_LAYOUT_TAB_WIDTH", "JAVA_LAYOUT_COMMENT_TIE_BREAK"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.mark.parametrize(
    "args",
    [[], ["format"], ["check"], ["doc"], ["watch"]],
    ids=["root", "format", "check", "doc", "watch"],
)
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


class TestFormat:
    def test_prints_single_file(self, workdir: Path) -> None:
        (workdir / "A.java").write_text("class A{int x;}")
        result = runner.invoke(app, ["format", "A.java"])
        assert result.exit_code == 0
        assert result.output == "class A {\n  int x;\n}\n"
        assert (workdir / "A.java").read_text() == "class A{int x;}"

    def test_options_are_applied(self, workdir: Path) -> None:
        (workdir / "A.java").write_text("class A{int x;}")
        result = runner.invoke(app, ["format", "A.java", "--tab-width", "4"])
        assert result.output == "class A {\n    int x;\n}\n"

    def test_environment_options_are_applied(self, workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JAVA_LAYOUT_TAB_WIDTH", "3")
        (workdir / "A.java").write_text("class A{int x;}")
        result = runner.invoke(app, ["format", "A.java"])
        assert result.output == "class A {\n   int x;\n}\n"

    def test_invalid_option_value(self, workdir: Path) -> None:
        (workdir / "A.java").write_text("class A {}")
        result = runner.invoke(app, ["format", "A.java", "--print-width", "0"])
        assert result.exit_code == 2

    def test_several_files_need_write(self, workdir: Path) -> None:
        (workdir / "A.java").write_text("class A {}")
        (workdir / "B.java").write_text("class B {}")
        result = runner.invoke(app, ["format", "."])
        assert result.exit_code == 2
        assert "--write" in result.output

    def test_write_rewrites_files(self, workdir: Path) -> None:
        (workdir / "A.java").write_text("class A{}")
        (workdir / "B.java").write_text("class B {}\n")
        result = runner.invoke(app, ["format", "--write", "."])
        assert result.exit_code == 0
        assert (workdir / "A.java").read_text() == "class A {}\n"
        assert "2 file(s) checked, 1 reformatted, 0 failed" in result.output

    def test_write_reports_failures(self, workdir: Path) -> None:
        (workdir / "Bad.java").write_text("class {")
        result = runner.invoke(app, ["format", "-w", "Bad.java"])
        assert result.exit_code == 1
        assert "error" in result.output

    def test_syntax_error_on_single_file(self, workdir: Path) -> None:
        (workdir / "Bad.java").write_text("class {")
        result = runner.invoke(app, ["format", "Bad.java"])
        assert result.exit_code == 1

    def test_missing_path(self, workdir: Path) -> None:
        result = runner.invoke(app, ["format", "Missing.java"])
        assert result.exit_code == 2


class TestCheck:
    def test_formatted_files_pass(self, workdir: Path) -> None:
        (workdir / "A.java").write_text("class A {}\n")
        result = runner.invoke(app, ["check", "A.java"])
        assert result.exit_code == 0
        assert "1 file(s) already formatted" in result.output

    def test_unformatted_files_fail(self, workdir: Path) -> None:
        (workdir / "A.java").write_text("class A{}")
        result = runner.invoke(app, ["check", "A.java"])
        assert result.exit_code == 1
        assert "would reformat A.java" in result.output
        assert (workdir / "A.java").read_text() == "class A{}"


class TestDoc:
    def test_dumps_layout_document(self, workdir: Path) -> None:
        (workdir / "A.java").write_text("class A {}")
        result = runner.invoke(app, ["doc", "A.java"])
        assert result.exit_code == 0
        assert "'class'" in result.output

    def test_entry_point(self, workdir: Path) -> None:
        (workdir / "expr.java").write_text("a + b")
        result = runner.invoke(app, ["doc", "expr.java", "--entry-point", "expression"])
        assert result.exit_code == 0
        assert "group(" in result.output

    def test_syntax_error(self, workdir: Path) -> None:
        (workdir / "Bad.java").write_text("class {")
        result = runner.invoke(app, ["doc", "Bad.java"])
        assert result.exit_code == 1
