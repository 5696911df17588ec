import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from java_layout.cli.doc import doc_command
from java_layout.cli.format import check_command, format_command
from java_layout.cli.output import err_console
from java_layout.cli.watch import watch_command

app = typer.Typer(
    name="java-layout",
    help="java-layout: an opinionated Java source formatter.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("format")(format_command)
app.command("check")(check_command)
app.command("doc")(doc_command)
app.command("watch")(watch_command)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log every formatting phase.")] = False,
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
            force=True,
        )


def main() -> None:
    app()
