"""Primitives of the layout document algebra.

A document is a ``str`` or one of the frozen dataclasses below. Documents are
immutable trees; the printer decides how soft line breaks resolve for a given width.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class Concat:
    parts: tuple["Doc", ...]


@dataclass(frozen=True, slots=True)
class Group:
    """All soft lines directly inside resolve together: all flat or all broken."""

    contents: "Doc"


@dataclass(frozen=True, slots=True)
class ConditionalGroup:
    """The first of ``states`` whose first line fits, else the last state broken."""

    states: tuple["Doc", ...]


@dataclass(frozen=True, slots=True)
class Indent:
    contents: "Doc"


@dataclass(frozen=True, slots=True)
class Fill:
    """Alternating content/separator parts; each separator breaks only if the next content does not fit."""

    parts: tuple["Doc", ...]


@dataclass(frozen=True, slots=True)
class Line:
    hard: bool = False
    soft: bool = False
    literal: bool = False


@dataclass(frozen=True, slots=True)
class LineSuffix:
    """Contents deferred until just before the next emitted newline."""

    contents: "Doc"


@dataclass(frozen=True, slots=True)
class BreakParent:
    pass


Doc = Union[str, Concat, Group, ConditionalGroup, Indent, Fill, Line, LineSuffix, BreakParent]

BREAK_PARENT = BreakParent()
LINE = Line()
SOFTLINE = Line(soft=True)
HARDLINE_WITHOUT_BREAK_PARENT = Line(hard=True)
LITERALLINE_WITHOUT_BREAK_PARENT = Line(hard=True, literal=True)
HARDLINE = Concat((HARDLINE_WITHOUT_BREAK_PARENT, BREAK_PARENT))
LITERALLINE = Concat((LITERALLINE_WITHOUT_BREAK_PARENT, BREAK_PARENT))


def concat(*parts: Doc) -> Doc:
    flat: list[Doc] = []
    for part in parts:
        if isinstance(part, Concat):
            flat.extend(part.parts)
        elif part != "":
            flat.append(part)
    if len(flat) == 1:
        return flat[0]
    return Concat(tuple(flat))


def join(separator: Doc, docs: Iterable[Doc]) -> Doc:
    parts: list[Doc] = []
    for i, doc in enumerate(docs):
        if i:
            parts.append(separator)
        parts.append(doc)
    return concat(*parts)


def group(*parts: Doc) -> Doc:
    return Group(concat(*parts))


def conditional_group(*states: Doc) -> Doc:
    return ConditionalGroup(tuple(states))


def indent(*parts: Doc) -> Doc:
    return Indent(concat(*parts))


def fill(parts: Sequence[Doc]) -> Doc:
    return Fill(tuple(parts))


def line_suffix(*parts: Doc) -> Doc:
    return LineSuffix(concat(*parts))


def lines(text: str, *, literal: bool = True) -> Doc:
    """Split text containing newlines into parts joined by literal (or hard) lines."""
    if "\n" not in text:
        return text
    return join(LITERALLINE if literal else HARDLINE, text.split("\n"))


def is_empty(doc: Doc) -> bool:
    return doc == "" or (isinstance(doc, Concat) and not doc.parts)
