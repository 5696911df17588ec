from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from java_layout.cli.options import CommentTieBreak, PrintWidth, TabWidth, resolve_options
from java_layout.cli.output import err_console
from java_layout.core.format import build_doc
from java_layout.doc import dump_doc
from java_layout.errors import JavaLayoutError
from java_layout.models import EntryPoint


def doc_command(
    file: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Java file to inspect.")],
    entry_point: Annotated[
        EntryPoint, typer.Option("--entry-point", help="Grammar rule the file content is parsed as.")
    ] = EntryPoint.COMPILATION_UNIT,
    print_width: PrintWidth = None,
    tab_width: TabWidth = None,
    comment_tie_break: CommentTieBreak = None,
) -> None:
    """Print the layout document built for a file, in a readable debug form."""
    options = resolve_options(print_width, tab_width, comment_tie_break)
    try:
        _, doc = build_doc(file.read_bytes().decode("utf-8"), options, entry_point=entry_point)
    except JavaLayoutError as exc:
        err_console.print(f"[red]error[/red] {escape(str(file))}: {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    typer.echo(dump_doc(doc))
