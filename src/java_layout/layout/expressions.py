"""Layout of expressions: operator chains, assignments, calls, lambdas and array initializers."""

from java_layout.doc import LINE, SOFTLINE, Doc, concat, conditional_group, group, indent, join
from java_layout.layout.common import delimited, sequence, tight
from java_layout.layout.context import BuildContext
from java_layout.layout.registry import builds
from java_layout.syntax.tree import LITERAL_KINDS, NodeKind, SyntaxNode

PRECEDENCE = {
    "||": 1,
    "&&": 2,
    "|": 3,
    "^": 4,
    "&": 5,
    "==": 6,
    "!=": 6,
    "<": 7,
    ">": 7,
    "<=": 7,
    ">=": 7,
    "<<": 8,
    ">>": 8,
    ">>>": 8,
    "+": 9,
    "-": 9,
    "*": 10,
    "/": 10,
    "%": 10,
}

# Right-hand sides that may move to the next line after the assignment operator
_BREAK_AFTER_OPERATOR = frozenset(
    {NodeKind.BINARY_EXPRESSION, NodeKind.TERNARY_EXPRESSION, NodeKind.INSTANCEOF_EXPRESSION}
)

# Parents that already indent or align a binary chain
_ALIGNED_PARENTS = frozenset(
    {
        NodeKind.PARENTHESIZED_EXPRESSION,
        NodeKind.VARIABLE_DECLARATOR,
        NodeKind.ASSIGNMENT_EXPRESSION,
        NodeKind.ELEMENT_VALUE_PAIR,
    }
)

# Chains with at least this many calls are laid out one call per line when too long
CHAIN_THRESHOLD = 3


def assignment(ctx: BuildContext, left: Doc, operator: str, right: SyntaxNode) -> Doc:
    right_doc = ctx.build(right)
    if right.kind in _BREAK_AFTER_OPERATOR and not ctx.comments.get(right).leading:
        return group(left, " ", operator, indent(LINE, right_doc))
    return concat(left, " ", operator, " ", right_doc)


@builds(NodeKind.ASSIGNMENT_EXPRESSION)
def build_assignment(ctx: BuildContext, node: SyntaxNode) -> Doc:
    left, operator, right = ctx.tree.children(node)
    return assignment(ctx, ctx.build(left), operator.text or "=", right)


def _operator(ctx: BuildContext, node: SyntaxNode) -> str:
    return ctx.tree.children(node)[1].text or ""


@builds(NodeKind.BINARY_EXPRESSION)
def build_binary(ctx: BuildContext, node: SyntaxNode) -> Doc:
    """A left-leaning chain of one precedence level, broken after each operator."""
    level = PRECEDENCE[_operator(ctx, node)]
    spine = [node]
    current = ctx.tree.children(node)[0]
    while current.kind is NodeKind.BINARY_EXPRESSION and PRECEDENCE[_operator(ctx, current)] == level:
        spine.append(current)
        current = ctx.tree.children(current)[0]
    spine.reverse()

    leading = [ctx.leading_doc(inner) for inner in reversed(spine[:-1])]
    first = ctx.build(current)
    rest: list[Doc] = []
    for link in spine:
        _, operator, right = ctx.tree.children(link)
        operand = ctx.build(right)
        if link is not node:
            operand = concat(operand, ctx.trailing_doc(link))
        rest.append(concat(" ", operator.text or "", LINE, operand))

    parent = ctx.tree.parent(node)
    if parent is not None and parent.kind in _ALIGNED_PARENTS and node.index not in ctx.tree.roots:
        return concat(*leading, group(first, *rest))
    return concat(*leading, group(first, indent(*rest)))


@builds(NodeKind.TERNARY_EXPRESSION)
def build_ternary(ctx: BuildContext, node: SyntaxNode) -> Doc:
    condition, _, consequence, _, alternative = ctx.tree.children(node)
    return group(
        ctx.build(condition),
        indent(LINE, "? ", ctx.build(consequence), LINE, ": ", ctx.build(alternative)),
    )


@builds(NodeKind.PARENTHESIZED_EXPRESSION)
def build_parenthesized(ctx: BuildContext, node: SyntaxNode) -> Doc:
    inner = [ctx.build(child) for child in ctx.tree.named_children(node)]
    return group("(", indent(SOFTLINE, *inner), SOFTLINE, ")")


@builds(NodeKind.UNARY_EXPRESSION)
def build_unary(ctx: BuildContext, node: SyntaxNode) -> Doc:
    operator, operand = ctx.tree.children(node)
    text = operator.text or ""
    first = ctx.tree.first_token(operand).text or ""
    # Keeps "- -x" and "+ +x" from fusing into a different operator
    space = " " if text in ("+", "-") and first.startswith(text) else ""
    return concat(text, space, ctx.build(operand))


@builds(
    NodeKind.UPDATE_EXPRESSION,
    NodeKind.FIELD_ACCESS,
    NodeKind.ARRAY_ACCESS,
    NodeKind.METHOD_REFERENCE,
    NodeKind.CLASS_LITERAL,
    NodeKind.EXPLICIT_CONSTRUCTOR_INVOCATION,
    NodeKind.TEMPLATE_EXPRESSION,
)
def build_tight(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return tight(ctx, ctx.tree.children(node))


@builds(
    NodeKind.CAST_EXPRESSION,
    NodeKind.INSTANCEOF_EXPRESSION,
    NodeKind.LAMBDA_EXPRESSION,
    NodeKind.INFERRED_PARAMETERS,
    NodeKind.OBJECT_CREATION_EXPRESSION,
    NodeKind.ARRAY_CREATION_EXPRESSION,
)
def build_expression_sequence(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return sequence(ctx, ctx.tree.children(node))


@builds(NodeKind.ARRAY_INITIALIZER, dangling=True)
def build_array_initializer(ctx: BuildContext, node: SyntaxNode) -> Doc:
    items = ctx.tree.named_children(node)
    literals_only = bool(items) and all(item.kind in LITERAL_KINDS for item in items)
    return delimited(ctx, node, "{", "}", padded=True, use_fill=literals_only)


def _is_huggable(ctx: BuildContext, node: SyntaxNode) -> bool:
    if node.kind is NodeKind.LAMBDA_EXPRESSION:
        return ctx.tree.children(node)[-1].kind is NodeKind.BLOCK
    if node.kind is NodeKind.OBJECT_CREATION_EXPRESSION:
        return ctx.tree.children(node)[-1].kind is NodeKind.CLASS_BODY
    return False


@builds(NodeKind.ARGUMENT_LIST, dangling=True)
def build_arguments(ctx: BuildContext, node: SyntaxNode) -> Doc:
    """Arguments break one per line when too long.

    A trailing block lambda or anonymous class hugs the parens while the arguments
    before it fit on the first line.
    """
    items = ctx.tree.named_children(node)
    if (
        items
        and _is_huggable(ctx, items[-1])
        and not any(_is_huggable(ctx, item) for item in items[:-1])
        and not any(ctx.has_comments(item) for item in items)
    ):
        *rest, last = [ctx.build(item) for item in items]
        hugged = concat("(", join(", ", [*rest, group(last)]), ")")
        return conditional_group(hugged, delimited(ctx, node, "(", ")"))
    return delimited(ctx, node, "(", ")")


def _call_object(ctx: BuildContext, node: SyntaxNode) -> SyntaxNode | None:
    children = ctx.tree.children(node)
    if len(children) > 1 and children[1].is_text("."):
        return children[0]
    return None


def _call_link(ctx: BuildContext, call: SyntaxNode) -> Doc:
    """``.name(args)`` of a call, with comments before the name hoisted in front of the dot."""
    parts: list[Doc] = []
    for child in ctx.tree.children(call)[1:]:
        if child.kind is NodeKind.IDENTIFIER and ctx.comments.get(child).leading:
            parts.insert(0, ctx.leading_doc(child))
            parts.append(ctx.build(child, skip_leading=True))
        else:
            parts.append(ctx.build(child))
    return concat(*parts)


@builds(NodeKind.METHOD_INVOCATION)
def build_method_invocation(ctx: BuildContext, node: SyntaxNode) -> Doc:
    calls = [node]
    head = _call_object(ctx, node)
    while head is not None and head.kind is NodeKind.METHOD_INVOCATION and _call_object(ctx, head) is not None:
        calls.append(head)
        head = _call_object(ctx, head)

    if head is None or len(calls) + (head.kind is NodeKind.METHOD_INVOCATION) < CHAIN_THRESHOLD:
        return tight(ctx, ctx.tree.children(node))

    calls.reverse()
    leading = [ctx.leading_doc(call) for call in reversed(calls[:-1])]
    links = []
    for call in calls:
        link = _call_link(ctx, call)
        if call is not node:
            link = concat(link, ctx.trailing_doc(call))
        links.append(link)

    head_doc = ctx.build(head)
    if head.kind in (NodeKind.IDENTIFIER, NodeKind.THIS, NodeKind.FIELD_ACCESS, NodeKind.SUPER):
        head_doc = concat(head_doc, links.pop(0))
    return concat(*leading, group(head_doc, indent(*(concat(SOFTLINE, link) for link in links))))


@builds(NodeKind.SWITCH_EXPRESSION)
def build_switch_expression(ctx: BuildContext, node: SyntaxNode) -> Doc:
    return sequence(ctx, ctx.tree.children(node))
