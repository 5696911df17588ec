"""Render layout documents to text for a given width.

This follows the classic Wadler/prettier algorithm: a stack of (indent, mode, doc)
commands, a look-ahead ``fits`` test for groups and fills, and a line-suffix buffer
flushed before each newline.
"""

import logging
from enum import Enum

from java_layout.doc.builders import (
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
from java_layout.models import FormatOptions

logger = logging.getLogger(__name__)


class _Mode(Enum):
    BREAK = 1
    FLAT = 2


_Command = tuple[int, _Mode, Doc]


def propagate_breaks(doc: Doc) -> frozenset[int]:
    """Ids of every group that must break because it (transitively) contains a hard break."""
    broken: set[int] = set()
    # (doc, exiting): groups are revisited on exit so children are decided first
    stack: list[tuple[Doc, bool]] = [(doc, False)]
    group_stack: list[Group] = []
    pending: list[bool] = [False]
    while stack:
        current, exiting = stack.pop()
        if exiting:
            group = group_stack.pop()
            child_breaks = pending.pop()
            if child_breaks:
                broken.add(id(group))
                pending[-1] = True
            continue
        if isinstance(current, BreakParent):
            pending[-1] = True
        elif isinstance(current, Group):
            group_stack.append(current)
            pending.append(False)
            stack.append((current, True))
            stack.append((current.contents, False))
        elif isinstance(current, Concat | Fill):
            stack.extend((part, False) for part in reversed(current.parts))
        elif isinstance(current, ConditionalGroup):
            # Every state is visited so the groups inside each one are decided
            stack.extend((state, False) for state in reversed(current.states))
        elif isinstance(current, Indent):
            stack.append((current.contents, False))
    return frozenset(broken)


class DocPrinter:
    """``DocumentRenderer`` implementation."""

    def render(self, doc: Doc, options: FormatOptions) -> str:
        return render(doc, options)


def render(doc: Doc, options: FormatOptions | None = None) -> str:
    options = options or FormatOptions()
    logger.debug("Rendering document at width %d, tab width %d", options.print_width, options.tab_width)
    return _Printer(doc, options.print_width, options.tab_width).run()


class _Printer:
    def __init__(self, doc: Doc, width: int, tab_width: int) -> None:
        self.doc = doc
        self.width = width
        self.tab_width = tab_width
        self.broken = propagate_breaks(doc)

    def run(self) -> str:
        out: list[str] = []
        pos = 0
        cmds: list[_Command] = [(0, _Mode.BREAK, self.doc)]
        line_suffixes: list[_Command] = []
        should_remeasure = False

        while cmds:
            ind, mode, doc = cmds.pop()
            if isinstance(doc, str):
                out.append(doc)
                pos += len(doc)
            elif isinstance(doc, Concat):
                cmds.extend((ind, mode, part) for part in reversed(doc.parts))
            elif isinstance(doc, Indent):
                cmds.append((ind + 1, mode, doc.contents))
            elif isinstance(doc, Group):
                if mode is _Mode.FLAT and not should_remeasure:
                    cmds.append((ind, _Mode.BREAK if id(doc) in self.broken else _Mode.FLAT, doc.contents))
                else:
                    should_remeasure = False
                    flat = (ind, _Mode.FLAT, doc.contents)
                    if id(doc) not in self.broken and self._fits(flat, cmds, self.width - pos):
                        cmds.append(flat)
                    else:
                        cmds.append((ind, _Mode.BREAK, doc.contents))
            elif isinstance(doc, ConditionalGroup):
                if mode is _Mode.FLAT and not should_remeasure:
                    cmds.append((ind, _Mode.FLAT, doc.states[0]))
                else:
                    should_remeasure = False
                    cmds.append(self._choose_state(ind, doc, cmds, self.width - pos))
            elif isinstance(doc, Fill):
                self._fill(ind, mode, doc, cmds, self.width - pos)
            elif isinstance(doc, LineSuffix):
                line_suffixes.append((ind, mode, doc.contents))
            elif isinstance(doc, Line):
                if mode is _Mode.FLAT and not doc.hard:
                    if not doc.soft:
                        out.append(" ")
                        pos += 1
                else:
                    if mode is _Mode.FLAT:
                        should_remeasure = True
                    if line_suffixes:
                        cmds.append((ind, mode, doc))
                        cmds.extend(reversed(line_suffixes))
                        line_suffixes = []
                    elif doc.literal:
                        out.append("\n")
                        pos = 0
                    else:
                        _trim(out)
                        padding = " " * (ind * self.tab_width)
                        out.append("\n" + padding)
                        pos = len(padding)

            if not cmds and line_suffixes:
                cmds.extend(reversed(line_suffixes))
                line_suffixes = []

        return "".join(out)

    def _fits(self, next_cmd: _Command, rest: list[_Command], width: int, must_be_flat: bool = False) -> bool:
        rest_index = len(rest)
        cmds: list[tuple[_Mode, Doc]] = [(next_cmd[1], next_cmd[2])]
        while width >= 0:
            if not cmds:
                if rest_index == 0:
                    return True
                rest_index -= 1
                cmds.append((rest[rest_index][1], rest[rest_index][2]))
                continue
            mode, doc = cmds.pop()
            if isinstance(doc, str):
                width -= len(doc)
            elif isinstance(doc, Concat | Fill):
                cmds.extend((mode, part) for part in reversed(doc.parts))
            elif isinstance(doc, Indent):
                cmds.append((mode, doc.contents))
            elif isinstance(doc, ConditionalGroup):
                cmds.append((mode, doc.states[-1] if mode is _Mode.BREAK else doc.states[0]))
            elif isinstance(doc, Group):
                if must_be_flat and id(doc) in self.broken:
                    return False
                cmds.append((_Mode.BREAK if id(doc) in self.broken else mode, doc.contents))
            elif isinstance(doc, Line):
                if mode is _Mode.BREAK or doc.hard:
                    return True
                if not doc.soft:
                    width -= 1
        return False

    def _choose_state(self, ind: int, doc: ConditionalGroup, rest: list[_Command], width: int) -> _Command:
        for state in doc.states[:-1]:
            candidate = (ind, _Mode.FLAT, state)
            if self._fits(candidate, rest, width):
                return candidate
        return (ind, _Mode.BREAK, doc.states[-1])

    def _fill(self, ind: int, mode: _Mode, doc: Fill, cmds: list[_Command], width: int) -> None:
        parts = doc.parts
        if not parts:
            return
        content = parts[0]
        content_flat = (ind, _Mode.FLAT, content)
        content_break = (ind, _Mode.BREAK, content)
        content_fits = self._fits(content_flat, [], width, must_be_flat=True)
        if len(parts) == 1:
            cmds.append(content_flat if content_fits else content_break)
            return

        separator = parts[1]
        separator_flat = (ind, _Mode.FLAT, separator)
        separator_break = (ind, _Mode.BREAK, separator)
        if len(parts) == 2:
            if content_fits:
                cmds.extend((separator_flat, content_flat))
            else:
                cmds.extend((separator_break, content_break))
            return

        remaining = (ind, mode, Fill(parts[2:]))
        pair_flat = (ind, _Mode.FLAT, Concat((content, separator, parts[2])))
        if self._fits(pair_flat, [], width, must_be_flat=True):
            cmds.extend((remaining, separator_flat, content_flat))
        elif content_fits:
            cmds.extend((remaining, separator_break, content_flat))
        else:
            cmds.extend((remaining, separator_break, content_break))


def _trim(out: list[str]) -> None:
    while out:
        trimmed = out[-1].rstrip(" \t")
        if trimmed:
            out[-1] = trimmed
            return
        out.pop()

