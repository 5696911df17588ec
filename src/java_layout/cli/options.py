from typing import Annotated

import typer
from pydantic import ValidationError

from java_layout.core.config import load_options
from java_layout.models import FormatOptions, TieBreak

PrintWidth = Annotated[int | None, typer.Option("--print-width", help="Maximum line width (default 80).")]
TabWidth = Annotated[int | None, typer.Option("--tab-width", help="Spaces per indentation level (default 2).")]
CommentTieBreak = Annotated[
    TieBreak | None,
    typer.Option("--comment-tie-break", help="Where a comment between two nodes on one line goes."),
]


def resolve_options(
    print_width: int | None = None,
    tab_width: int | None = None,
    comment_tie_break: TieBreak | None = None,
) -> FormatOptions:
    try:
        return load_options(print_width=print_width, tab_width=tab_width, comment_tie_break=comment_tie_break)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
