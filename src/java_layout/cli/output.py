from rich.console import Console
from rich.markup import escape

from java_layout.models import FileResult

console = Console()
err_console = Console(stderr=True)


def report_failure(result: FileResult) -> None:
    err_console.print(f"[red]error[/red] {escape(result.path)}: {escape(result.error or '')}")


def report_result(result: FileResult) -> None:
    """One line per file: failures on stderr, rewritten files on stdout."""
    if not result.ok:
        report_failure(result)
    elif result.changed:
        console.print(f"[green]formatted[/green] {escape(result.path)}")
