"""Layout of types, annotations, patterns and module declarations."""

from java_layout.doc import Doc, concat, join
from java_layout.layout.common import delimited, sequence, tight
from java_layout.layout.context import BuildContext
from java_layout.layout.registry import builds
from java_layout.syntax.tree import ANNOTATION_KINDS, NodeKind, SyntaxNode


@builds(
    NodeKind.GENERIC_TYPE,
    NodeKind.SCOPED_TYPE_IDENTIFIER,
    NodeKind.SCOPED_IDENTIFIER,
    NodeKind.ARRAY_TYPE,
    NodeKind.DIMENSIONS_EXPR,
    NodeKind.ANNOTATION,
    NodeKind.MARKER_ANNOTATION,
    NodeKind.RECORD_PATTERN,
)
def build_tight_type(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return tight(ctx, ctx.tree.children(node))


@builds(NodeKind.DIMENSIONS)
def build_dimensions(ctx: BuildContext, node: SyntaxNode) -> Doc:
    children = ctx.tree.children(node)
    doc = tight(ctx, children)
    if children and children[0].kind in ANNOTATION_KINDS:
        return concat(" ", doc)
    return doc


@builds(
    NodeKind.ANNOTATED_TYPE,
    NodeKind.WILDCARD,
    NodeKind.TYPE_PARAMETER,
    NodeKind.TYPE_BOUND,
    NodeKind.PATTERN,
    NodeKind.TYPE_PATTERN,
    NodeKind.RECORD_PATTERN_COMPONENT,
    NodeKind.MODULE_DECLARATION,
    NodeKind.MODULE_DIRECTIVE,
    NodeKind.REQUIRES_MODULE_DIRECTIVE,
    NodeKind.EXPORTS_MODULE_DIRECTIVE,
    NodeKind.OPENS_MODULE_DIRECTIVE,
    NodeKind.USES_MODULE_DIRECTIVE,
    NodeKind.PROVIDES_MODULE_DIRECTIVE,
)
def build_spaced_type(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return sequence(ctx, ctx.tree.children(node))


@builds(NodeKind.TYPE_ARGUMENTS, dangling=True)
def build_type_arguments(ctx: BuildContext, node: SyntaxNode) -> Doc:
    # Type argument lists never break
    items = [ctx.build(child) for child in ctx.tree.named_children(node)]
    if not items:
        return concat("<", ctx.dangling_inline(node), ">")
    return concat("<", join(", ", items), ">")


@builds(NodeKind.TYPE_PARAMETERS, dangling=True)
def build_type_parameters(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return delimited(ctx, node, "<", ">")


@builds(NodeKind.RECORD_PATTERN_BODY, dangling=True)
def build_record_pattern_body(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return delimited(ctx, node, "(", ")")
