from java_layout.doc import Doc, lines
from java_layout.layout.context import BuildContext
from java_layout.layout.registry import builds
from java_layout.syntax.tree import VERBATIM_KINDS, NodeKind, SyntaxNode


@builds(NodeKind.TOKEN)
def build_token(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return node.text or ""


@builds(*VERBATIM_KINDS)
def build_verbatim(ctx: BuildContext, node: SyntaxNode) -> Doc:
    # Text blocks keep every line exactly as written
    return lines(node.text or "")
