from collections.abc import Sequence
from dataclasses import dataclass

from java_layout.doc import (
    BREAK_PARENT,
    HARDLINE,
    Doc,
    concat,
    join,
    line_suffix,
    lines,
)
from java_layout.errors import UnhandledNodeError
from java_layout.layout.registry import BUILDERS
from java_layout.models import FormatOptions
from java_layout.syntax.comments import AttachedComment, CommentAttachments
from java_layout.syntax.tree import Comment, SyntaxNode, SyntaxTree


@dataclass(frozen=True)
class BuildContext:
    """Everything a layout builder can see: the tree, its comments and the options."""

    tree: SyntaxTree
    comments: CommentAttachments
    options: FormatOptions

    def build(self, node: SyntaxNode, *, skip_leading: bool = False) -> Doc:
        """Layout for ``node`` wrapped with its attached comments."""
        entry = BUILDERS.get(node.kind)
        if entry is None:
            raise UnhandledNodeError(node.kind)
        doc = entry.build(self, node)
        attached = self.comments.get(node)
        if not attached:
            return doc
        parts = []
        if attached.leading and not skip_leading:
            parts.append(self.leading_doc(node))
        parts.append(doc)
        if attached.dangling and not entry.dangling:
            parts.append(_trailing(attached.dangling))
        if attached.trailing:
            parts.append(self.trailing_doc(node))
        return concat(*parts)

    def leading_doc(self, node: SyntaxNode) -> Doc:
        parts: list[Doc] = []
        for attached in self.comments.get(node).leading:
            parts.append(comment_doc(attached.comment))
            if attached.breaks_after:
                parts.append(HARDLINE)
                if attached.blank_lines_after:
                    parts.append(HARDLINE)
            else:
                parts.append(" ")
        return concat(*parts)

    def trailing_doc(self, node: SyntaxNode) -> Doc:
        return _trailing(self.comments.get(node).trailing)

    def dangling_block(self, node: SyntaxNode) -> Doc | None:
        """Dangling comments one per line, keeping a single blank line where the source had one."""
        dangling = self.comments.get(node).dangling
        if not dangling:
            return None
        parts: list[Doc] = []
        for i, attached in enumerate(dangling):
            if i:
                parts.append(HARDLINE)
                if attached.blank_lines_before:
                    parts.append(HARDLINE)
            parts.append(comment_doc(attached.comment))
        return concat(*parts)

    def dangling_inline(self, node: SyntaxNode) -> Doc:
        """Dangling comments inside an empty delimiter pair such as ``()``."""
        parts: list[Doc] = []
        dangling = self.comments.get(node).dangling
        for i, attached in enumerate(dangling):
            parts.append(comment_doc(attached.comment))
            if attached.comment.is_line:
                parts.append(HARDLINE)
            elif i + 1 < len(dangling):
                parts.append(" ")
        return concat(*parts)

    def has_comments(self, node: SyntaxNode) -> bool:
        return bool(self.comments.get(node))

    def has_breaking_trailing(self, node: SyntaxNode) -> bool:
        """True when a trailing comment of ``node`` must end the output line."""
        return any(a.comment.is_line or a.own_line for a in self.comments.get(node).trailing)

    def has_blank_line_before(self, node: SyntaxNode) -> bool:
        leading = self.comments.get(node).leading
        span = leading[0].comment.span if leading else node.span
        source = self.tree.source
        return source.starts_line(span.start_line, span.start_column) and source.is_blank_line(span.start_line - 1)


def comment_doc(comment: Comment) -> Doc:
    text = comment.text
    if comment.is_line or "\n" not in text:
        return text
    first, *rest = text.split("\n")
    if all(line.lstrip().startswith("*") for line in rest):
        # Javadoc-style blocks are re-indented to the surrounding code
        return join(HARDLINE, [first.rstrip(), *(" " + line.strip() for line in rest)])
    return lines(text)


def _trailing(comments: Sequence[AttachedComment]) -> Doc:
    parts: list[Doc] = []
    for attached in comments:
        contents = comment_doc(attached.comment)
        if attached.own_line:
            blank = HARDLINE if attached.blank_lines_before else ""
            parts.extend((line_suffix(HARDLINE, blank, contents), BREAK_PARENT))
        elif attached.comment.is_line:
            parts.extend((line_suffix(" ", contents), BREAK_PARENT))
        else:
            parts.extend((" ", contents))
    return concat(*parts)
