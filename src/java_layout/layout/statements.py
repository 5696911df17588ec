"""Layout of blocks, control flow, switch and try statements."""

from collections.abc import Sequence

from java_layout.doc import HARDLINE, LINE, Doc, concat, group, indent, join
from java_layout.layout.common import (
    BRACES,
    DEFAULT_SPACING,
    braces,
    continuation,
    delimited,
    members,
    sequence,
)
from java_layout.layout.context import BuildContext
from java_layout.layout.registry import builds
from java_layout.syntax.tree import NodeKind, SyntaxNode

_LABEL_SPACING = DEFAULT_SPACING.with_tight_before(":")


@builds(NodeKind.BLOCK, NodeKind.CONSTRUCTOR_BODY, NodeKind.SWITCH_BLOCK, NodeKind.MODULE_BODY, dangling=True)
def build_block(ctx: BuildContext, node: SyntaxNode) -> Doc:
    items = [child for child in ctx.tree.children(node) if child.text not in BRACES]
    return braces(ctx, node, members(ctx, items) if items else None)


@builds(
    NodeKind.EXPRESSION_STATEMENT,
    NodeKind.RETURN_STATEMENT,
    NodeKind.THROW_STATEMENT,
    NodeKind.YIELD_STATEMENT,
    NodeKind.BREAK_STATEMENT,
    NodeKind.CONTINUE_STATEMENT,
    NodeKind.ASSERT_STATEMENT,
    NodeKind.SYNCHRONIZED_STATEMENT,
    NodeKind.TRY_STATEMENT,
    NodeKind.TRY_WITH_RESOURCES_STATEMENT,
    NodeKind.CATCH_CLAUSE,
    NodeKind.CATCH_FORMAL_PARAMETER,
    NodeKind.CATCH_TYPE,
    NodeKind.FINALLY_CLAUSE,
    NodeKind.RESOURCE,
    NodeKind.SWITCH_RULE,
    NodeKind.SWITCH_LABEL,
    NodeKind.GUARD,
)
def build_statement(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return sequence(ctx, ctx.tree.children(node))


@builds(NodeKind.LABELED_STATEMENT)
def build_labeled(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return sequence(ctx, ctx.tree.children(node), _LABEL_SPACING)


def _ends_with_line_comment(ctx: BuildContext, header: Sequence[SyntaxNode]) -> bool:
    for node in reversed(header):
        if node.is_named:
            return ctx.has_breaking_trailing(node)
    return False


def _body(ctx: BuildContext, header: Sequence[SyntaxNode], body: SyntaxNode) -> Doc:
    """The statement after a control-flow header: a block on the same line, anything else indented."""
    if body.kind is NodeKind.BLOCK:
        return concat(continuation(ctx, header[-1]), ctx.build(body))
    if body.is_text(";"):
        return ";"
    if _ends_with_line_comment(ctx, header):
        # The comment ends the header line, so the body cannot follow on it
        return indent(HARDLINE, ctx.build(body))
    return group(indent(LINE, ctx.build(body)))


@builds(NodeKind.IF_STATEMENT)
def build_if(ctx: BuildContext, node: SyntaxNode) -> Doc:
    children = ctx.tree.children(node)
    keyword, condition, consequence = children[:3]
    parts = [ctx.build(keyword), " ", ctx.build(condition), _body(ctx, children[:2], consequence)]
    if len(children) > 3:
        alternative = children[4]
        if consequence.kind is NodeKind.BLOCK:
            parts.append(continuation(ctx, consequence))
        else:
            parts.append(HARDLINE)
        parts.append(ctx.build(children[3]))
        if alternative.kind is NodeKind.IF_STATEMENT:
            parts.extend((" ", ctx.build(alternative)))
        else:
            parts.append(_body(ctx, children[3:4], alternative))
    return concat(*parts)


@builds(NodeKind.WHILE_STATEMENT, NodeKind.FOR_STATEMENT, NodeKind.ENHANCED_FOR_STATEMENT)
def build_loop(ctx: BuildContext, node: SyntaxNode) -> Doc:
    *header, body = ctx.tree.children(node)
    return concat(sequence(ctx, header), _body(ctx, header, body))


@builds(NodeKind.DO_STATEMENT)
def build_do(ctx: BuildContext, node: SyntaxNode) -> Doc:
    keyword, body, *tail = ctx.tree.children(node)
    between = continuation(ctx, body) if body.kind is NodeKind.BLOCK else HARDLINE
    return concat(ctx.build(keyword), _body(ctx, [keyword], body), between, sequence(ctx, tail))


@builds(NodeKind.SWITCH_BLOCK_STATEMENT_GROUP)
def build_switch_group(ctx: BuildContext, node: SyntaxNode) -> Doc:
    """``case`` labels one per line, then the statements indented below them.

    A group whose only statement is a block keeps the block on the label line.
    """
    labels: list[Doc] = []
    statements: list[SyntaxNode] = []
    last_label = node
    for child in ctx.tree.children(node):
        if child.is_text(":") and labels and not statements:
            labels[-1] = concat(labels[-1], ":")
        elif child.kind is NodeKind.SWITCH_LABEL and not statements:
            labels.append(ctx.build(child))
            last_label = child
        else:
            statements.append(child)
    head = join(HARDLINE, labels)
    if not statements:
        return head
    if len(statements) == 1 and statements[0].kind is NodeKind.BLOCK:
        return concat(head, continuation(ctx, last_label), ctx.build(statements[0]))
    return concat(head, indent(HARDLINE, members(ctx, statements)))


@builds(NodeKind.RESOURCE_SPECIFICATION, dangling=True)
def build_resources(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return delimited(ctx, node, "(", ")", separator_text=";")
