import logging

from java_layout.doc import HARDLINE, Doc, concat
from java_layout.errors import InternalFormatError
from java_layout.layout import declarations, expressions, lexical, statements, types  # noqa: F401 (registers builders)
from java_layout.layout.common import members
from java_layout.layout.context import BuildContext
from java_layout.layout.declarations import TYPE_BODIES, member_gap
from java_layout.layout.registry import BUILDERS
from java_layout.models import FormatOptions
from java_layout.syntax.comments import CommentAttachments
from java_layout.syntax.tree import NodeKind, SyntaxTree

logger = logging.getLogger(__name__)


def missing_builders() -> list[NodeKind]:
    return [kind for kind in NodeKind if kind not in BUILDERS]


def ensure_exhaustive() -> None:
    """Fail fast when a node kind has no layout builder."""
    missing = missing_builders()
    if missing:
        raise InternalFormatError(f"No layout builder for node kinds: {', '.join(missing)}")


ensure_exhaustive()


def build_document(tree: SyntaxTree, comments: CommentAttachments, options: FormatOptions) -> Doc:
    """Layout document for the whole tree: a compilation unit or a list of fragment roots."""
    ctx = BuildContext(tree, comments, options)
    roots = [tree[i] for i in tree.roots]
    if len(roots) == 1 and roots[0].kind is NodeKind.PROGRAM:
        doc = ctx.build(roots[0])
    elif not roots:
        doc = ""
    else:
        # Members of a class body are spaced as in a type body, statements as in a block
        parent = ctx.tree.parent(roots[0])
        gap = member_gap(ctx) if parent is not None and parent.kind in TYPE_BODIES else None
        doc = concat(members(ctx, roots, gap), HARDLINE)
    logger.debug("Built layout document for %d root node(s)", len(roots))
    return doc
