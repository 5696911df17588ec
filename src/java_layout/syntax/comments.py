"""Attach comments to syntax nodes.

The grammar does not model comments, so after parsing each comment is assigned to
exactly one named node as *leading* (printed before it), *trailing* (printed after it)
or *dangling* (printed inside an otherwise empty construct such as ``{}`` or ``()``).
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

from java_layout.errors import UnattachedCommentError
from java_layout.models import TieBreak
from java_layout.syntax.tree import Comment, NodeKind, SyntaxNode, SyntaxTree

logger = logging.getLogger(__name__)


class CommentRole(StrEnum):
    LEADING = "leading"
    TRAILING = "trailing"
    DANGLING = "dangling"


@dataclass(frozen=True, slots=True)
class AttachedComment:
    comment: Comment
    role: CommentRole
    node: int
    blank_lines_before: int
    blank_lines_after: int
    own_line: bool
    breaks_after: bool


@dataclass(frozen=True, slots=True)
class NodeComments:
    leading: tuple[AttachedComment, ...] = ()
    trailing: tuple[AttachedComment, ...] = ()
    dangling: tuple[AttachedComment, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.leading or self.trailing or self.dangling)


_NO_COMMENTS = NodeComments()


class CommentAttachments:
    def __init__(self, by_node: dict[int, NodeComments]) -> None:
        self._by_node = by_node

    def get(self, node: SyntaxNode | int) -> NodeComments:
        index = node if isinstance(node, int) else node.index
        return self._by_node.get(index, _NO_COMMENTS)

    def __iter__(self) -> Iterator[AttachedComment]:
        for entry in self._by_node.values():
            yield from entry.leading
            yield from entry.trailing
            yield from entry.dangling

    def __len__(self) -> int:
        return sum(len(e.leading) + len(e.trailing) + len(e.dangling) for e in self._by_node.values())


def attach_comments(tree: SyntaxTree, policy: TieBreak = TieBreak.TRAILING) -> CommentAttachments:
    buckets: dict[int, dict[CommentRole, list[AttachedComment]]] = {}
    for comment in tree.comments:
        target, role = _place(tree, comment, policy)
        attached = _describe(tree, comment, target, role)
        buckets.setdefault(target.index, {r: [] for r in CommentRole})[role].append(attached)

    by_node = {
        index: NodeComments(
            leading=tuple(roles[CommentRole.LEADING]),
            trailing=tuple(roles[CommentRole.TRAILING]),
            dangling=tuple(roles[CommentRole.DANGLING]),
        )
        for index, roles in buckets.items()
    }
    logger.debug("Attached %d comments to %d nodes", len(tree.comments), len(by_node))
    return CommentAttachments(by_node)


_BODY_KINDS = frozenset(
    {
        NodeKind.BLOCK,
        NodeKind.CLASS_BODY,
        NodeKind.INTERFACE_BODY,
        NodeKind.ENUM_BODY,
        NodeKind.ANNOTATION_TYPE_BODY,
        NodeKind.CONSTRUCTOR_BODY,
        NodeKind.SWITCH_BLOCK,
        NodeKind.MODULE_BODY,
    }
)

# Containers whose children are members separated by line breaks
_LIST_CONTAINERS = _BODY_KINDS | {NodeKind.PROGRAM, NodeKind.SWITCH_BLOCK_STATEMENT_GROUP}


def _place(tree: SyntaxTree, comment: Comment, policy: TieBreak) -> tuple[SyntaxNode, CommentRole]:
    container, previous, following = _locate(tree, comment)
    target, role = _choose(comment, previous, following, container, policy)
    if (
        following is not None
        and following.kind in _BODY_KINDS
        and container is not None
        and container.kind not in _LIST_CONTAINERS
        and (target is following or (target is previous and role is CommentRole.TRAILING))
        and _breaks_after(tree, comment)
    ):
        # Header comments that end their line move into the body that follows:
        # the opening brace is printed on the header line.
        members = tree.named_children(following)
        if members:
            return members[0], CommentRole.LEADING
        return following, CommentRole.DANGLING
    return target, role


def _choose(
    comment: Comment,
    previous: SyntaxNode | None,
    following: SyntaxNode | None,
    container: SyntaxNode | None,
    policy: TieBreak,
) -> tuple[SyntaxNode, CommentRole]:
    span = comment.span
    if previous is not None and previous.span.end_line == span.start_line:
        if following is not None and following.span.start_line == span.end_line and policy is TieBreak.LEADING:
            return following, CommentRole.LEADING
        return previous, CommentRole.TRAILING
    if following is not None:
        return following, CommentRole.LEADING
    if previous is not None:
        return previous, CommentRole.TRAILING
    if container is not None:
        return container, CommentRole.DANGLING
    raise UnattachedCommentError(comment.text, span.start_line + 1)


def _breaks_after(tree: SyntaxTree, comment: Comment) -> bool:
    return comment.is_line or tree.source.ends_line(comment.span.end_line, comment.span.end_column)


def _locate(tree: SyntaxTree, comment: Comment) -> tuple[SyntaxNode | None, SyntaxNode | None, SyntaxNode | None]:
    """Return the deepest enclosing node and the named siblings around ``comment``."""
    start, end = comment.span.start_byte, comment.span.end_byte
    container: SyntaxNode | None = None
    candidates = [tree[i] for i in tree.roots]
    if len(candidates) == 1 and candidates[0].kind is NodeKind.PROGRAM:
        container = candidates[0]
        candidates = tree.named_children(container)

    while True:
        previous = following = enclosing = None
        for child in candidates:
            if child.span.end_byte <= start:
                previous = child
            elif child.span.start_byte >= end:
                following = child
                break
            else:
                enclosing = child
                break
        if enclosing is None:
            return container, previous, following
        container = enclosing
        candidates = tree.named_children(enclosing)


def _describe(tree: SyntaxTree, comment: Comment, target: SyntaxNode, role: CommentRole) -> AttachedComment:
    source = tree.source
    span = comment.span
    own_line = source.starts_line(span.start_line, span.start_column)
    breaks_after = _breaks_after(tree, comment)
    return AttachedComment(
        comment=comment,
        role=role,
        node=target.index,
        blank_lines_before=source.blank_lines_before(span.start_line) if own_line else 0,
        blank_lines_after=source.blank_lines_after(span.end_line) if breaks_after else 0,
        own_line=own_line,
        breaks_after=breaks_after,
    )
