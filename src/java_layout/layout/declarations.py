"""Layout of the compilation unit, type declarations, their bodies and members."""

from collections.abc import Callable

from java_layout.doc import HARDLINE, LINE, Doc, concat, group, indent, join
from java_layout.layout.common import (
    BRACES,
    DEFAULT_SPACING,
    annotation_on_own_line,
    braces,
    delimited,
    members,
    separator,
    sequence,
)
from java_layout.layout.context import BuildContext, comment_doc
from java_layout.layout.expressions import assignment
from java_layout.layout.registry import builds
from java_layout.syntax.tree import NodeKind, SyntaxNode

TYPE_DECLARATIONS = frozenset(
    {
        NodeKind.CLASS_DECLARATION,
        NodeKind.INTERFACE_DECLARATION,
        NodeKind.ENUM_DECLARATION,
        NodeKind.RECORD_DECLARATION,
        NodeKind.ANNOTATION_TYPE_DECLARATION,
    }
)

_HEADER_CLAUSES = frozenset(
    {NodeKind.SUPERCLASS, NodeKind.SUPER_INTERFACES, NodeKind.EXTENDS_INTERFACES, NodeKind.PERMITS}
)

TYPE_BODIES = frozenset(
    {NodeKind.CLASS_BODY, NodeKind.INTERFACE_BODY, NodeKind.ENUM_BODY, NodeKind.ANNOTATION_TYPE_BODY}
)

_METHOD_SPACING = DEFAULT_SPACING.with_tight_before("(")
_TYPE_HEAD_SPACING = DEFAULT_SPACING.with_tight_before(NodeKind.TYPE_PARAMETERS)


def is_spacious_member(ctx: BuildContext, node: SyntaxNode) -> bool:
    """Members that always get a blank line on both sides."""
    if node.kind is NodeKind.METHOD_DECLARATION:
        return ctx.tree.first_of(node, NodeKind.BLOCK) is not None
    return node.kind in TYPE_DECLARATIONS or node.kind in (
        NodeKind.CONSTRUCTOR_DECLARATION,
        NodeKind.COMPACT_CONSTRUCTOR_DECLARATION,
        NodeKind.STATIC_INITIALIZER,
        NodeKind.BLOCK,
    )


def member_gap(ctx: BuildContext) -> Callable[[SyntaxNode, SyntaxNode], bool]:
    def gap(previous: SyntaxNode, node: SyntaxNode) -> bool:
        return is_spacious_member(ctx, previous) or is_spacious_member(ctx, node)

    return gap


def _top_level_gap(previous: SyntaxNode, node: SyntaxNode) -> bool:
    if previous.kind is NodeKind.PACKAGE_DECLARATION:
        return True
    if previous.kind is NodeKind.IMPORT_DECLARATION:
        return node.kind is not NodeKind.IMPORT_DECLARATION
    return (
        previous.kind in TYPE_DECLARATIONS
        or node.kind in TYPE_DECLARATIONS
        or NodeKind.MODULE_DECLARATION in (previous.kind, node.kind)
    )


@builds(NodeKind.PROGRAM, dangling=True)
def build_program(ctx: BuildContext, node: SyntaxNode) -> Doc:
    items = ctx.tree.children(node)
    body = []
    dangling = ctx.dangling_block(node)
    if dangling is not None:
        body.append(dangling)
    if items:
        body.append(members(ctx, items, _top_level_gap))
    if not body:
        return ""
    return concat(join(HARDLINE, body), HARDLINE)


@builds(
    NodeKind.PACKAGE_DECLARATION,
    NodeKind.IMPORT_DECLARATION,
    NodeKind.FIELD_DECLARATION,
    NodeKind.CONSTANT_DECLARATION,
    NodeKind.LOCAL_VARIABLE_DECLARATION,
    NodeKind.SUPERCLASS,
    NodeKind.SUPER_INTERFACES,
    NodeKind.EXTENDS_INTERFACES,
    NodeKind.PERMITS,
    NodeKind.TYPE_LIST,
    NodeKind.THROWS,
    NodeKind.DEFAULT_VALUE,
    NodeKind.ENUM_CONSTANT,
    NodeKind.FORMAL_PARAMETER,
    NodeKind.SPREAD_PARAMETER,
    NodeKind.RECEIVER_PARAMETER,
    NodeKind.STATIC_INITIALIZER,
    NodeKind.ELEMENT_VALUE_PAIR,
)
def build_spaced(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return sequence(ctx, ctx.tree.children(node))


@builds(*TYPE_DECLARATIONS)
def build_type_declaration(ctx: BuildContext, node: SyntaxNode) -> Doc:
    parts: list[Doc] = []
    head: list[SyntaxNode] = []
    clauses: list[Doc] = []
    body: Doc = ""
    children = ctx.tree.children(node)
    for i, child in enumerate(children):
        if child.kind is NodeKind.MODIFIERS:
            parts.extend((ctx.build(child), separator(ctx, child, children[i + 1], DEFAULT_SPACING)))
        elif child.kind in _HEADER_CLAUSES:
            clauses.append(ctx.build(child))
        elif child.kind in TYPE_BODIES:
            body = ctx.build(child)
        else:
            head.append(child)
    header = sequence(ctx, head, _TYPE_HEAD_SPACING)
    if clauses:
        header = group(header, indent(*(concat(LINE, clause) for clause in clauses)))
    return concat(*parts, header, " ", body)


@builds(NodeKind.CLASS_BODY, NodeKind.INTERFACE_BODY, NodeKind.ANNOTATION_TYPE_BODY, dangling=True)
def build_type_body(ctx: BuildContext, node: SyntaxNode) -> Doc:
    items = [child for child in ctx.tree.children(node) if child.text not in BRACES]
    return braces(ctx, node, members(ctx, items, member_gap(ctx)) if items else None)


@builds(NodeKind.ENUM_BODY, dangling=True)
def build_enum_body(ctx: BuildContext, node: SyntaxNode) -> Doc:
    constants: list[Doc] = []
    declarations: SyntaxNode | None = None
    previous: SyntaxNode | None = None
    for child in ctx.tree.children(node):
        if child.text in BRACES:
            continue
        if child.kind is NodeKind.ENUM_BODY_DECLARATIONS:
            declarations = child
        elif child.is_text(",") and constants:
            constants[-1] = concat(constants[-1], ",")
        else:
            doc = ctx.build(child)
            if previous is not None and ctx.has_blank_line_before(child):
                doc = concat(HARDLINE, doc)
            constants.append(doc)
            previous = child
    inner = join(HARDLINE, constants)
    if declarations is not None:
        inner = concat(inner, ctx.build(declarations))
    return braces(ctx, node, inner if constants or declarations is not None else None)


@builds(NodeKind.ENUM_BODY_DECLARATIONS)
def build_enum_body_declarations(ctx: BuildContext, node: SyntaxNode) -> Doc:
    items = ctx.tree.children(node)[1:]
    if not items:
        return ";"
    return concat(";", HARDLINE, HARDLINE, members(ctx, items, member_gap(ctx)))


@builds(NodeKind.VARIABLE_DECLARATOR)
def build_variable_declarator(ctx: BuildContext, node: SyntaxNode) -> Doc:
    left: list[Doc] = []
    children = ctx.tree.children(node)
    for i, child in enumerate(children):
        if child.is_text("="):
            return assignment(ctx, concat(*left), "=", children[i + 1])
        left.append(ctx.build(child))
    return concat(*left)


@builds(
    NodeKind.METHOD_DECLARATION,
    NodeKind.CONSTRUCTOR_DECLARATION,
    NodeKind.COMPACT_CONSTRUCTOR_DECLARATION,
    NodeKind.ANNOTATION_TYPE_ELEMENT_DECLARATION,
)
def build_method(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return sequence(ctx, ctx.tree.children(node), _METHOD_SPACING)


@builds(NodeKind.FORMAL_PARAMETERS, dangling=True)
def build_formal_parameters(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return delimited(ctx, node, "(", ")")


@builds(NodeKind.MODIFIERS, dangling=True)
def build_modifiers(ctx: BuildContext, node: SyntaxNode) -> Doc:
    """Modifiers on one line; comments between keywords stay where they were."""
    items = ctx.tree.children(node)
    pending = list(ctx.comments.get(node).dangling)
    parts: list[Doc] = []
    for i, item in enumerate(items):
        parts.append(ctx.build(item))
        following = items[i + 1] if i + 1 < len(items) else None
        ends_line = False
        while pending and (following is None or pending[0].comment.span.end_byte <= following.span.start_byte):
            comment = pending.pop(0).comment
            parts.extend((" ", comment_doc(comment)))
            ends_line = comment.is_line
        if following is not None:
            own_line = (
                ends_line or annotation_on_own_line(ctx, item, following) or ctx.has_breaking_trailing(item)
            )
            parts.append(HARDLINE if own_line else " ")
    return concat(*parts)


@builds(NodeKind.ANNOTATION_ARGUMENT_LIST, dangling=True)
def build_annotation_arguments(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return delimited(ctx, node, "(", ")")


@builds(NodeKind.ELEMENT_VALUE_ARRAY_INITIALIZER, dangling=True)
def build_element_value_array(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return delimited(ctx, node, "{", "}", padded=True)
