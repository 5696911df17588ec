import logging
from dataclasses import dataclass, field

from tree_sitter import Node
from tree_sitter_language_pack import get_parser

from java_layout.errors import JavaSyntaxError, UnhandledNodeError
from java_layout.models import EntryPoint
from java_layout.syntax.tree import (
    VERBATIM_KINDS,
    Comment,
    NodeKind,
    SourceSpan,
    SourceText,
    SyntaxNode,
    SyntaxTree,
)

logger = logging.getLogger(__name__)

_COMMENT_TYPES = frozenset({"line_comment", "block_comment"})

_FRAGMENT_CLASS = "__JavaLayoutFragment__"

# Fragments are parsed inside a scaffold; the prefix always ends with a newline so the
# fragment keeps its own columns.
_SCAFFOLDS: dict[EntryPoint, tuple[str, str]] = {
    EntryPoint.CLASS_BODY_DECLARATIONS: (f"class {_FRAGMENT_CLASS} {{\n", "\n}\n"),
    EntryPoint.BLOCK_STATEMENTS: (f"class {_FRAGMENT_CLASS} {{\nvoid __fragment__() {{\n", "\n}\n}\n"),
    EntryPoint.EXPRESSION: (f"class {_FRAGMENT_CLASS} {{\nObject __fragment__ =\n", "\n;\n}\n"),
}


def normalize_newlines(source: str) -> str:
    return source.replace("\r\n", "\n").replace("\r", "\n")


def parse(source: str, entry_point: EntryPoint | str | None = None) -> SyntaxTree:
    """Parse Java ``source`` into an immutable :class:`SyntaxTree`.

    With an ``entry_point`` other than ``compilationUnit`` the text is treated as a
    fragment (class body members, block statements or a single expression).
    """
    entry = EntryPoint(entry_point) if entry_point else EntryPoint.COMPILATION_UNIT
    text = normalize_newlines(source)
    prefix, suffix = _SCAFFOLDS.get(entry, ("", ""))
    data = (prefix + text + suffix).encode("utf-8")

    ts_tree = get_parser("java").parse(data)
    ts_root = ts_tree.root_node
    if ts_root.has_error:
        _raise_syntax_error(ts_root, prefix_lines=prefix.count("\n"))

    nodes, root_index, comments = _convert(ts_root, data)
    tree = SyntaxTree(nodes, (root_index,), tuple(comments), SourceText(data))
    if entry is not EntryPoint.COMPILATION_UNIT:
        tree = SyntaxTree(nodes, _fragment_roots(tree, entry), tuple(comments), tree.source)
    logger.debug("Parsed %d nodes and %d comments (%s)", len(nodes), len(comments), entry)
    return tree


class TreeSitterJavaParser:
    """``SourceParser`` backed by tree-sitter-java."""

    def parse(self, source: str, entry_point: EntryPoint | str | None = None) -> SyntaxTree:
        return parse(source, entry_point)


def _raise_syntax_error(ts_root: Node, prefix_lines: int) -> None:
    stack = [ts_root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            row, column = node.start_point
            line = max(row - prefix_lines, 0) + 1
            if node.is_missing:
                message = f"Missing '{node.type}'"
            else:
                snippet = (node.text or b"").decode("utf-8", errors="replace").split("\n")[0][:40]
                message = f"Unexpected input {snippet!r}"
            raise JavaSyntaxError(message, line, column + 1)
        stack.extend(child for child in reversed(node.children) if child.has_error or child.is_missing)
    raise JavaSyntaxError("Invalid Java source", 1, 1)


@dataclass
class _Frame:
    node: Node
    field: str | None
    pending: list[tuple[Node, str | None]]
    position: int = 0
    children: list[int] = field(default_factory=list)


def _children_with_fields(node: Node) -> list[tuple[Node, str | None]]:
    cursor = node.walk()
    if not cursor.goto_first_child():
        return []
    result = [(cursor.node, cursor.field_name)]
    while cursor.goto_next_sibling():
        result.append((cursor.node, cursor.field_name))
    return result


def _span(node: Node) -> SourceSpan:
    return SourceSpan(
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        start_line=node.start_point[0],
        start_column=node.start_point[1],
        end_line=node.end_point[0],
        end_column=node.end_point[1],
    )


def _kind(node: Node) -> NodeKind:
    try:
        return NodeKind(node.type)
    except ValueError:
        raise UnhandledNodeError(node.type) from None


def _convert(ts_root: Node, data: bytes) -> tuple[list[SyntaxNode], int, list[Comment]]:
    """Flatten the tree-sitter tree into a post-ordered node table, pulling comments out."""
    nodes: list[SyntaxNode] = []
    comments: list[Comment] = []

    def add_leaf(kind: NodeKind, ts_node: Node, field_name: str | None) -> int:
        index = len(nodes)
        text = data[ts_node.start_byte : ts_node.end_byte].decode("utf-8")
        nodes.append(SyntaxNode(index=index, kind=kind, span=_span(ts_node), field=field_name, text=text))
        return index

    stack = [_Frame(ts_root, None, _children_with_fields(ts_root))]
    root_index = -1
    while stack:
        frame = stack[-1]
        if frame.position < len(frame.pending):
            ts_child, field_name = frame.pending[frame.position]
            frame.position += 1
            if ts_child.type in _COMMENT_TYPES:
                text = data[ts_child.start_byte : ts_child.end_byte].decode("utf-8")
                is_line = ts_child.type == "line_comment"
                comments.append(Comment(text=text.rstrip() if is_line else text, is_line=is_line, span=_span(ts_child)))
            elif not ts_child.is_named:
                frame.children.append(add_leaf(NodeKind.TOKEN, ts_child, field_name))
            else:
                kind = _kind(ts_child)
                if kind in VERBATIM_KINDS:
                    frame.children.append(add_leaf(kind, ts_child, field_name))
                else:
                    stack.append(_Frame(ts_child, field_name, _children_with_fields(ts_child)))
            continue

        stack.pop()
        children = tuple(frame.children)
        if children:
            first, last = nodes[children[0]].span, nodes[children[-1]].span
            span = SourceSpan(
                start_byte=first.start_byte,
                end_byte=last.end_byte,
                start_line=first.start_line,
                start_column=first.start_column,
                end_line=last.end_line,
                end_column=last.end_column,
            )
        else:
            span = _span(frame.node)
        index = len(nodes)
        nodes.append(SyntaxNode(index=index, kind=_kind(frame.node), span=span, children=children, field=frame.field))
        if stack:
            stack[-1].children.append(index)
        else:
            root_index = index

    comments.sort(key=lambda c: c.span.start_byte)
    return nodes, root_index, comments


def _fragment_roots(tree: SyntaxTree, entry: EntryPoint) -> tuple[int, ...]:
    declaration = tree.first_of(tree.root, NodeKind.CLASS_DECLARATION)
    body = tree.first_of(declaration, NodeKind.CLASS_BODY) if declaration else None
    if body is None:
        raise JavaSyntaxError(f"Fragment is not a valid {entry}", 1, 1)

    if entry is EntryPoint.CLASS_BODY_DECLARATIONS:
        container = body
    elif entry is EntryPoint.BLOCK_STATEMENTS:
        method = tree.first_of(body, NodeKind.METHOD_DECLARATION)
        container = tree.first_of(method, NodeKind.BLOCK) if method else None
    else:
        field_node = tree.first_of(body, NodeKind.FIELD_DECLARATION)
        declarator = tree.first_of(field_node, NodeKind.VARIABLE_DECLARATOR) if field_node else None
        value = tree.field(declarator, "value") if declarator else None
        if value is None:
            raise JavaSyntaxError(f"Fragment is not a valid {entry}", 1, 1)
        return (value.index,)

    if container is None:
        raise JavaSyntaxError(f"Fragment is not a valid {entry}", 1, 1)
    return tuple(child.index for child in tree.children(container) if not (child.is_text("{") or child.is_text("}")))
