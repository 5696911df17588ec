from java_layout.doc.builders import (
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
)

_NAMED_LINES = {LINE: "line", SOFTLINE: "softline"}


def dump_doc(doc: Doc, depth: int = 0) -> str:
    """Readable constructor-call form of ``doc``, one child per line."""
    pad = "  " * depth
    if isinstance(doc, str):
        return pad + repr(doc)
    if doc == HARDLINE:
        return pad + "hardline"
    if doc == LITERALLINE:
        return pad + "literalline"
    if isinstance(doc, Line):
        name = _NAMED_LINES.get(doc)
        if name is None:
            name = "literalline_without_break_parent" if doc.literal else "hardline_without_break_parent"
        return pad + name
    if isinstance(doc, BreakParent):
        return pad + "break_parent"
    if isinstance(doc, Concat):
        return _call(pad, "", doc.parts, depth)
    if isinstance(doc, Fill):
        return _call(pad, "fill", doc.parts, depth)
    if isinstance(doc, ConditionalGroup):
        return _call(pad, "conditional_group", doc.states, depth)
    if isinstance(doc, Group):
        return f"{pad}group(\n{dump_doc(doc.contents, depth + 1)}\n{pad})"
    if isinstance(doc, Indent):
        return f"{pad}indent(\n{dump_doc(doc.contents, depth + 1)}\n{pad})"
    if isinstance(doc, LineSuffix):
        return f"{pad}line_suffix(\n{dump_doc(doc.contents, depth + 1)}\n{pad})"
    raise TypeError(f"Not a document: {doc!r}")


def _call(pad: str, name: str, parts: tuple[Doc, ...], depth: int) -> str:
    inner = ",\n".join(dump_doc(part, depth + 1) for part in parts)
    return f"{pad}{name}[\n{inner}\n{pad}]"
