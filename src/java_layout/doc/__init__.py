from java_layout.doc.builders import (
    BREAK_PARENT,
    HARDLINE,
    LINE,
    LITERALLINE,
    SOFTLINE,
    BreakParent,
    Concat,
    ConditionalGroup,
    Doc,
    Fill,
    Group,
    Indent,
    Line,
    LineSuffix,
    concat,
    conditional_group,
    fill,
    group,
    indent,
    is_empty,
    join,
    line_suffix,
    lines,
)
from java_layout.doc.debug import dump_doc
from java_layout.doc.printer import DocPrinter, render

__all__ = [
    "BREAK_PARENT",
    "HARDLINE",
    "LINE",
    "LITERALLINE",
    "SOFTLINE",
    "BreakParent",
    "Concat",
    "ConditionalGroup",
    "Doc",
    "DocPrinter",
    "Fill",
    "Group",
    "Indent",
    "Line",
    "LineSuffix",
    "concat",
    "conditional_group",
    "dump_doc",
    "fill",
    "group",
    "indent",
    "is_empty",
    "join",
    "line_suffix",
    "lines",
    "render",
]
