"""Formatted sources must still compile to the same class files as their inputs."""

import shutil
import subprocess
from pathlib import Path

import pytest

from java_layout.core.batch import format_paths

pytestmark = pytest.mark.skipif(shutil.which("javac") is None, reason="javac is not installed")

# A small self-contained project; the formatter fixtures reference undeclared types
_PROJECT = {
    "Counter.java": """\
package demo;
import java.util.ArrayList;
import java.util.List;
public class Counter{
private final List<Integer> seen=new ArrayList<>(); // every accepted value
public int count(int[] values){int total=0;for(int v:values){if(v<0)continue;seen.add(v);total+=v;}return total;}
public String label(int n){return switch(n){case 0->"none";case 1->"one";default->{yield "many";}};}
public List<Integer> large(){return seen.stream().filter(v->v>100).map(v->v*2).sorted().toList();}
}
""",
    "Main.java": """\
package demo;

/** Entry point. */
public final class Main {
    private Main() {}
    public static void main(String[] args) throws Exception {
        Counter counter = new Counter();
        int total = counter.count(new int[] {1, 2, -3, 400});
        Runnable report = () -> { System.out.println(counter.label(total) + " " + counter.large()); };
        try { report.run(); } catch (RuntimeException e) { throw new IllegalStateException(e); } finally { System.out.flush(); }
    }
}
""",
}


def _compile(source_dir: Path, out_dir: Path) -> dict[str, bytes]:
    sources = sorted(str(p) for p in source_dir.glob("*.java"))
    out_dir.mkdir()
    subprocess.run(["javac", "-g:none", "-d", str(out_dir), *sources], check=True, capture_output=True)
    return {str(p.relative_to(out_dir)): p.read_bytes() for p in sorted(out_dir.rglob("*.class"))}


def _write_project(directory: Path) -> None:
    directory.mkdir()
    for name, source in _PROJECT.items():
        (directory / name).write_text(source)


def test_formatting_preserves_bytecode(tmp_path: Path) -> None:
    original, formatted = tmp_path / "original", tmp_path / "formatted"
    _write_project(original)
    _write_project(formatted)

    results = format_paths([formatted], write=True)
    assert all(result.ok and result.changed for result in results)

    assert _compile(original, tmp_path / "out1") == _compile(formatted, tmp_path / "out2")


def test_formatted_project_is_stable(tmp_path: Path) -> None:
    project = tmp_path / "project"
    _write_project(project)
    format_paths([project], write=True)
    assert not any(result.changed for result in format_paths([project]))
