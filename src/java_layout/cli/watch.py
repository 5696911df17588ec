import asyncio
import contextlib
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from java_layout.cli.options import CommentTieBreak, PrintWidth, TabWidth, resolve_options
from java_layout.cli.output import console, report_result
from java_layout.core.watch import watch_directory


def watch_command(
    directory: Annotated[Path, typer.Argument(exists=True, file_okay=False, help="Directory to watch.")],
    print_width: PrintWidth = None,
    tab_width: TabWidth = None,
    comment_tie_break: CommentTieBreak = None,
) -> None:
    """Reformat .java files in place whenever they change."""
    options = resolve_options(print_width, tab_width, comment_tie_break)
    console.print(f"[green]Watching[/green] {escape(str(directory))} (Ctrl+C to stop)")
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(watch_directory(directory, options, report=report_result))
