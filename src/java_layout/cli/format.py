from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from java_layout.cli.options import CommentTieBreak, PrintWidth, TabWidth, resolve_options
from java_layout.cli.output import console, err_console, report_failure, report_result
from java_layout.core.batch import format_paths
from java_layout.core.format import format_source
from java_layout.core.languages import iter_java_files
from java_layout.errors import JavaLayoutError

Paths = Annotated[list[Path], typer.Argument(help="Java files or directories (searched recursively).")]
Jobs = Annotated[int, typer.Option("--jobs", "-j", min=1, help="Number of worker processes.")]


def _collect(paths: list[Path]) -> list[Path]:
    try:
        return list(iter_java_files(paths))
    except FileNotFoundError as exc:
        err_console.print(f"[red]error[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def format_command(
    paths: Paths,
    write: Annotated[bool, typer.Option("--write", "-w", help="Rewrite files in place.")] = False,
    print_width: PrintWidth = None,
    tab_width: TabWidth = None,
    comment_tie_break: CommentTieBreak = None,
    jobs: Jobs = 1,
) -> None:
    """Format Java files: print a single file to stdout, or rewrite files with --write."""
    options = resolve_options(print_width, tab_width, comment_tie_break)
    files = _collect(paths)

    if not write:
        if len(files) != 1:
            err_console.print("[red]error[/red] pass --write to format more than one file")
            raise typer.Exit(code=2)
        try:
            text = format_source(files[0].read_bytes().decode("utf-8"), options)
        except JavaLayoutError as exc:
            err_console.print(f"[red]error[/red] {escape(str(files[0]))}: {escape(str(exc))}")
            raise typer.Exit(code=1) from exc
        typer.echo(text, nl=False)
        return

    results = format_paths(files, options, write=True, jobs=jobs)
    for result in results:
        report_result(result)
    failed = [result for result in results if not result.ok]
    changed = sum(1 for result in results if result.changed)
    console.print(f"{len(results)} file(s) checked, {changed} reformatted, {len(failed)} failed")
    if failed:
        raise typer.Exit(code=1)


def check_command(
    paths: Paths,
    print_width: PrintWidth = None,
    tab_width: TabWidth = None,
    comment_tie_break: CommentTieBreak = None,
    jobs: Jobs = 1,
) -> None:
    """List files that are not formatted; exit 1 if there are any."""
    options = resolve_options(print_width, tab_width, comment_tie_break)
    results = format_paths(_collect(paths), options, write=False, jobs=jobs)
    unformatted = [result for result in results if result.changed]
    for result in results:
        if not result.ok:
            report_failure(result)
    for result in unformatted:
        console.print(f"[yellow]would reformat[/yellow] {escape(result.path)}")
    if unformatted or any(not result.ok for result in results):
        raise typer.Exit(code=1)
    console.print(f"[green]{len(results)} file(s) already formatted[/green]")
