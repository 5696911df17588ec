"""Layout helpers shared by the builder modules."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from java_layout.doc import (
    HARDLINE,
    LINE,
    SOFTLINE,
    Doc,
    concat,
    fill,
    group,
    indent,
    join,
)
from java_layout.layout.context import BuildContext
from java_layout.syntax.tree import ANNOTATION_KINDS, NodeKind, SyntaxNode

BRACES = frozenset({"{", "}"})


def spacing_key(node: SyntaxNode) -> str:
    return node.text if node.is_token and node.text is not None else node.kind


@dataclass(frozen=True)
class Spacing:
    """Which neighbours are printed without a space between them.

    Keys are token texts or node kinds.
    """

    tight_before: frozenset[str]
    tight_after: frozenset[str]

    def with_tight_before(self, *keys: str) -> "Spacing":
        return Spacing(self.tight_before | set(keys), self.tight_after)

    def with_tight_after(self, *keys: str) -> "Spacing":
        return Spacing(self.tight_before, self.tight_after | set(keys))

    def is_tight(self, previous: SyntaxNode, following: SyntaxNode) -> bool:
        return spacing_key(previous) in self.tight_after or spacing_key(following) in self.tight_before


DEFAULT_SPACING = Spacing(
    tight_before=frozenset(
        {
            ";",
            ",",
            ")",
            "]",
            ".",
            "...",
            "::",
            NodeKind.ARGUMENT_LIST,
            NodeKind.FORMAL_PARAMETERS,
            NodeKind.DIMENSIONS,
            NodeKind.DIMENSIONS_EXPR,
            NodeKind.ANNOTATION_ARGUMENT_LIST,
        }
    ),
    tight_after=frozenset({"(", "[", ".", "@", "::"}),
)


def separator(ctx: BuildContext, previous: SyntaxNode, following: SyntaxNode, spacing: Spacing) -> Doc:
    """What goes between two adjacent children printed on one line."""
    if spacing_key(following) in spacing.tight_before:
        return ""
    if ctx.has_breaking_trailing(previous):
        return HARDLINE
    if previous.kind is NodeKind.MODIFIERS:
        return modifiers_separator(ctx, previous)
    if spacing_key(previous) in spacing.tight_after:
        return ""
    return " "


def sequence(ctx: BuildContext, nodes: Iterable[SyntaxNode], spacing: Spacing = DEFAULT_SPACING) -> Doc:
    """Children on one line, separated by single spaces except around tight punctuation."""
    parts: list[Doc] = []
    previous: SyntaxNode | None = None
    for node in nodes:
        if previous is not None:
            parts.append(separator(ctx, previous, node, spacing))
        parts.append(ctx.build(node))
        previous = node
    return concat(*parts)


def tight(ctx: BuildContext, nodes: Iterable[SyntaxNode]) -> Doc:
    """Children with no separation, except a space around type annotations."""
    parts: list[Doc] = []
    previous: SyntaxNode | None = None
    for node in nodes:
        if previous is not None and (
            previous.kind in ANNOTATION_KINDS or (node.kind in ANNOTATION_KINDS and not previous.is_text("."))
        ):
            parts.append(" ")
        parts.append(ctx.build(node))
        previous = node
    return concat(*parts)


def modifiers_separator(ctx: BuildContext, modifiers: SyntaxNode) -> Doc:
    """A modifier list ends its line after an own-line annotation or a closing line comment."""
    items = ctx.tree.children(modifiers)
    dangling = ctx.comments.get(modifiers).dangling
    if not items:
        return " "
    if dangling and dangling[-1].comment.is_line and dangling[-1].comment.span.start_byte >= items[-1].span.end_byte:
        return HARDLINE
    if annotation_on_own_line(ctx, items[-1], ctx.tree.next_sibling(modifiers)):
        return HARDLINE
    return " "


def annotation_on_own_line(ctx: BuildContext, item: SyntaxNode, following: SyntaxNode | None) -> bool:
    if item.kind not in ANNOTATION_KINDS or following is None:
        return False
    modifiers = ctx.tree.parent(item)
    owner = ctx.tree.parent(modifiers) if modifiers is not None else None
    if owner is not None and owner.kind in INLINE_ANNOTATION_OWNERS:
        return False
    return following.span.start_line > item.span.end_line


INLINE_ANNOTATION_OWNERS = frozenset(
    {
        NodeKind.FORMAL_PARAMETER,
        NodeKind.SPREAD_PARAMETER,
        NodeKind.CATCH_FORMAL_PARAMETER,
        NodeKind.RESOURCE,
        NodeKind.ENHANCED_FOR_STATEMENT,
        NodeKind.LOCAL_VARIABLE_DECLARATION,
        NodeKind.RECORD_PATTERN_COMPONENT,
        NodeKind.TYPE_PATTERN,
        NodeKind.LAMBDA_EXPRESSION,
    }
)


def members(
    ctx: BuildContext,
    nodes: Sequence[SyntaxNode],
    gap: Callable[[SyntaxNode, SyntaxNode], bool] | None = None,
) -> Doc:
    """One node per line, keeping at most one blank line from the source.

    ``gap`` forces a blank line between two neighbours regardless of the source.
    A stray ``;`` stays on the line of the member before it.
    """
    parts: list[Doc] = []
    previous: SyntaxNode | None = None
    for node in nodes:
        doc = ctx.build(node)
        if previous is None:
            parts.append(doc)
            previous = node
            continue
        if node.is_text(";"):
            parts.append(doc)
            continue
        parts.append(HARDLINE)
        if ctx.has_blank_line_before(node) or (gap is not None and gap(previous, node)):
            parts.append(HARDLINE)
        parts.append(doc)
        previous = node
    return concat(*parts)


def braces(ctx: BuildContext, node: SyntaxNode, inner: Doc | None) -> Doc:
    """``{}`` around ``inner`` indented on its own lines, with the node's dangling comments."""
    dangling = ctx.dangling_block(node)
    body = [doc for doc in (dangling, inner) if doc is not None]
    if not body:
        return "{}"
    return concat("{", indent(HARDLINE, join(HARDLINE, body)), HARDLINE, "}")


def delimited(
    ctx: BuildContext,
    node: SyntaxNode,
    open_: str,
    close: str,
    *,
    padded: bool = False,
    use_fill: bool = False,
    separator_text: str = ",",
) -> Doc:
    """A separated list between delimiters that breaks one item per line when too long.

    A trailing separator present in the source is kept. ``use_fill`` wraps item by item
    instead, unless an item carries comments.
    """
    items = ctx.tree.named_children(node)
    if not items:
        return concat(open_, ctx.dangling_inline(node), close)
    docs = [ctx.build(item) for item in items]
    if use_fill and not any(ctx.has_comments(item) for item in items):
        # Separators stay with their item so a filled line never ends past the width
        parts: list[Doc] = []
        for i, doc in enumerate(docs):
            if i:
                parts.append(LINE)
            parts.append(concat(doc, separator_text) if i + 1 < len(docs) else doc)
        body = fill(parts)
    else:
        body = join(concat(separator_text, LINE), docs)
    if has_trailing_separator(ctx, node, separator_text):
        body = concat(body, separator_text)
    edge = LINE if padded else SOFTLINE
    return group(open_, indent(edge, body), edge, close)


def has_trailing_separator(ctx: BuildContext, node: SyntaxNode, separator_text: str) -> bool:
    children = ctx.tree.children(node)
    return len(children) >= 2 and children[-2].is_text(separator_text)


def continuation(ctx: BuildContext, previous: SyntaxNode) -> Doc:
    """Space before ``else``/``catch``/``while`` after a block, or a new line after a line comment."""
    return HARDLINE if ctx.has_breaking_trailing(previous) else " "
