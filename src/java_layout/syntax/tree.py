from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum


class NodeKind(StrEnum):
    """Every named node type of the tree-sitter Java grammar, plus anonymous tokens."""

    TOKEN = "<token>"

    PROGRAM = "program"

    # Leaves printed from their source text
    IDENTIFIER = "identifier"
    TYPE_IDENTIFIER = "type_identifier"
    DECIMAL_INTEGER_LITERAL = "decimal_integer_literal"
    HEX_INTEGER_LITERAL = "hex_integer_literal"
    OCTAL_INTEGER_LITERAL = "octal_integer_literal"
    BINARY_INTEGER_LITERAL = "binary_integer_literal"
    DECIMAL_FLOATING_POINT_LITERAL = "decimal_floating_point_literal"
    HEX_FLOATING_POINT_LITERAL = "hex_floating_point_literal"
    CHARACTER_LITERAL = "character_literal"
    STRING_LITERAL = "string_literal"
    TEXT_BLOCK = "text_block"
    TRUE = "true"
    FALSE = "false"
    NULL_LITERAL = "null_literal"
    THIS = "this"
    SUPER = "super"
    INTEGRAL_TYPE = "integral_type"
    FLOATING_POINT_TYPE = "floating_point_type"
    BOOLEAN_TYPE = "boolean_type"
    VOID_TYPE = "void_type"
    ASTERISK = "asterisk"
    UNDERSCORE_PATTERN = "underscore_pattern"
    REQUIRES_MODIFIER = "requires_modifier"

    # Packages, imports and modules
    PACKAGE_DECLARATION = "package_declaration"
    IMPORT_DECLARATION = "import_declaration"
    SCOPED_IDENTIFIER = "scoped_identifier"
    MODULE_DECLARATION = "module_declaration"
    MODULE_BODY = "module_body"
    MODULE_DIRECTIVE = "module_directive"
    REQUIRES_MODULE_DIRECTIVE = "requires_module_directive"
    EXPORTS_MODULE_DIRECTIVE = "exports_module_directive"
    OPENS_MODULE_DIRECTIVE = "opens_module_directive"
    USES_MODULE_DIRECTIVE = "uses_module_directive"
    PROVIDES_MODULE_DIRECTIVE = "provides_module_directive"

    # Type declarations and bodies
    CLASS_DECLARATION = "class_declaration"
    INTERFACE_DECLARATION = "interface_declaration"
    ENUM_DECLARATION = "enum_declaration"
    RECORD_DECLARATION = "record_declaration"
    ANNOTATION_TYPE_DECLARATION = "annotation_type_declaration"
    CLASS_BODY = "class_body"
    INTERFACE_BODY = "interface_body"
    ENUM_BODY = "enum_body"
    ENUM_BODY_DECLARATIONS = "enum_body_declarations"
    ENUM_CONSTANT = "enum_constant"
    ANNOTATION_TYPE_BODY = "annotation_type_body"
    ANNOTATION_TYPE_ELEMENT_DECLARATION = "annotation_type_element_declaration"
    DEFAULT_VALUE = "default_value"
    SUPERCLASS = "superclass"
    SUPER_INTERFACES = "super_interfaces"
    EXTENDS_INTERFACES = "extends_interfaces"
    PERMITS = "permits"
    TYPE_LIST = "type_list"

    # Members
    MODIFIERS = "modifiers"
    FIELD_DECLARATION = "field_declaration"
    CONSTANT_DECLARATION = "constant_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    METHOD_DECLARATION = "method_declaration"
    CONSTRUCTOR_DECLARATION = "constructor_declaration"
    COMPACT_CONSTRUCTOR_DECLARATION = "compact_constructor_declaration"
    CONSTRUCTOR_BODY = "constructor_body"
    EXPLICIT_CONSTRUCTOR_INVOCATION = "explicit_constructor_invocation"
    STATIC_INITIALIZER = "static_initializer"
    FORMAL_PARAMETERS = "formal_parameters"
    FORMAL_PARAMETER = "formal_parameter"
    SPREAD_PARAMETER = "spread_parameter"
    RECEIVER_PARAMETER = "receiver_parameter"
    THROWS = "throws"

    # Annotations
    ANNOTATION = "annotation"
    MARKER_ANNOTATION = "marker_annotation"
    ANNOTATION_ARGUMENT_LIST = "annotation_argument_list"
    ELEMENT_VALUE_PAIR = "element_value_pair"
    ELEMENT_VALUE_ARRAY_INITIALIZER = "element_value_array_initializer"

    # Types
    GENERIC_TYPE = "generic_type"
    SCOPED_TYPE_IDENTIFIER = "scoped_type_identifier"
    ARRAY_TYPE = "array_type"
    ANNOTATED_TYPE = "annotated_type"
    DIMENSIONS = "dimensions"
    DIMENSIONS_EXPR = "dimensions_expr"
    TYPE_ARGUMENTS = "type_arguments"
    WILDCARD = "wildcard"
    TYPE_PARAMETERS = "type_parameters"
    TYPE_PARAMETER = "type_parameter"
    TYPE_BOUND = "type_bound"

    # Statements
    BLOCK = "block"
    LOCAL_VARIABLE_DECLARATION = "local_variable_declaration"
    EXPRESSION_STATEMENT = "expression_statement"
    LABELED_STATEMENT = "labeled_statement"
    IF_STATEMENT = "if_statement"
    WHILE_STATEMENT = "while_statement"
    DO_STATEMENT = "do_statement"
    FOR_STATEMENT = "for_statement"
    ENHANCED_FOR_STATEMENT = "enhanced_for_statement"
    ASSERT_STATEMENT = "assert_statement"
    BREAK_STATEMENT = "break_statement"
    CONTINUE_STATEMENT = "continue_statement"
    RETURN_STATEMENT = "return_statement"
    YIELD_STATEMENT = "yield_statement"
    THROW_STATEMENT = "throw_statement"
    SYNCHRONIZED_STATEMENT = "synchronized_statement"
    TRY_STATEMENT = "try_statement"
    TRY_WITH_RESOURCES_STATEMENT = "try_with_resources_statement"
    CATCH_CLAUSE = "catch_clause"
    CATCH_FORMAL_PARAMETER = "catch_formal_parameter"
    CATCH_TYPE = "catch_type"
    FINALLY_CLAUSE = "finally_clause"
    RESOURCE_SPECIFICATION = "resource_specification"
    RESOURCE = "resource"
    SWITCH_EXPRESSION = "switch_expression"
    SWITCH_BLOCK = "switch_block"
    SWITCH_BLOCK_STATEMENT_GROUP = "switch_block_statement_group"
    SWITCH_RULE = "switch_rule"
    SWITCH_LABEL = "switch_label"
    GUARD = "guard"

    # Patterns
    PATTERN = "pattern"
    TYPE_PATTERN = "type_pattern"
    RECORD_PATTERN = "record_pattern"
    RECORD_PATTERN_BODY = "record_pattern_body"
    RECORD_PATTERN_COMPONENT = "record_pattern_component"

    # Expressions
    ASSIGNMENT_EXPRESSION = "assignment_expression"
    BINARY_EXPRESSION = "binary_expression"
    INSTANCEOF_EXPRESSION = "instanceof_expression"
    LAMBDA_EXPRESSION = "lambda_expression"
    INFERRED_PARAMETERS = "inferred_parameters"
    TERNARY_EXPRESSION = "ternary_expression"
    UNARY_EXPRESSION = "unary_expression"
    UPDATE_EXPRESSION = "update_expression"
    CAST_EXPRESSION = "cast_expression"
    PARENTHESIZED_EXPRESSION = "parenthesized_expression"
    OBJECT_CREATION_EXPRESSION = "object_creation_expression"
    ARRAY_CREATION_EXPRESSION = "array_creation_expression"
    ARRAY_INITIALIZER = "array_initializer"
    ARRAY_ACCESS = "array_access"
    FIELD_ACCESS = "field_access"
    METHOD_INVOCATION = "method_invocation"
    ARGUMENT_LIST = "argument_list"
    METHOD_REFERENCE = "method_reference"
    CLASS_LITERAL = "class_literal"
    TEMPLATE_EXPRESSION = "template_expression"


VERBATIM_KINDS = frozenset(
    {
        NodeKind.IDENTIFIER,
        NodeKind.TYPE_IDENTIFIER,
        NodeKind.DECIMAL_INTEGER_LITERAL,
        NodeKind.HEX_INTEGER_LITERAL,
        NodeKind.OCTAL_INTEGER_LITERAL,
        NodeKind.BINARY_INTEGER_LITERAL,
        NodeKind.DECIMAL_FLOATING_POINT_LITERAL,
        NodeKind.HEX_FLOATING_POINT_LITERAL,
        NodeKind.CHARACTER_LITERAL,
        NodeKind.STRING_LITERAL,
        NodeKind.TEXT_BLOCK,
        NodeKind.TRUE,
        NodeKind.FALSE,
        NodeKind.NULL_LITERAL,
        NodeKind.THIS,
        NodeKind.SUPER,
        NodeKind.INTEGRAL_TYPE,
        NodeKind.FLOATING_POINT_TYPE,
        NodeKind.BOOLEAN_TYPE,
        NodeKind.VOID_TYPE,
        NodeKind.ASTERISK,
        NodeKind.UNDERSCORE_PATTERN,
        NodeKind.REQUIRES_MODIFIER,
    }
)

LITERAL_KINDS = frozenset(
    {
        NodeKind.DECIMAL_INTEGER_LITERAL,
        NodeKind.HEX_INTEGER_LITERAL,
        NodeKind.OCTAL_INTEGER_LITERAL,
        NodeKind.BINARY_INTEGER_LITERAL,
        NodeKind.DECIMAL_FLOATING_POINT_LITERAL,
        NodeKind.HEX_FLOATING_POINT_LITERAL,
        NodeKind.CHARACTER_LITERAL,
        NodeKind.STRING_LITERAL,
        NodeKind.TRUE,
        NodeKind.FALSE,
        NodeKind.NULL_LITERAL,
    }
)

ANNOTATION_KINDS = frozenset({NodeKind.ANNOTATION, NodeKind.MARKER_ANNOTATION})


@dataclass(frozen=True, slots=True)
class SourceSpan:
    start_byte: int
    end_byte: int
    start_line: int
    start_column: int
    end_line: int
    end_column: int


@dataclass(frozen=True, slots=True)
class Comment:
    text: str
    is_line: bool
    span: SourceSpan

    @property
    def is_block(self) -> bool:
        return not self.is_line


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    index: int
    kind: NodeKind
    span: SourceSpan
    children: tuple[int, ...] = ()
    field: str | None = None
    text: str | None = None

    @property
    def is_token(self) -> bool:
        return self.kind is NodeKind.TOKEN

    @property
    def is_named(self) -> bool:
        return self.kind is not NodeKind.TOKEN

    def is_text(self, text: str) -> bool:
        return self.kind is NodeKind.TOKEN and self.text == text


class SourceText:
    """The bytes being formatted with line-level lookups used for blank-line decisions."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.lines = data.split(b"\n")
        self._blank = [not line.strip() for line in self.lines]

    def slice(self, start: int, end: int) -> str:
        return self.data[start:end].decode("utf-8")

    def is_blank_line(self, line: int) -> bool:
        return 0 <= line < len(self._blank) and self._blank[line]

    def blank_lines_before(self, line: int) -> int:
        count = 0
        line -= 1
        while line >= 0 and self._blank[line]:
            count += 1
            line -= 1
        return count

    def blank_lines_after(self, line: int) -> int:
        count = 0
        line += 1
        while line < len(self._blank) and self._blank[line]:
            count += 1
            line += 1
        return count

    def starts_line(self, line: int, column: int) -> bool:
        """True when only whitespace precedes ``column`` on ``line``."""
        return not self.lines[line][:column].strip()

    def ends_line(self, line: int, column: int) -> bool:
        """True when only whitespace follows ``column`` on ``line``."""
        return not self.lines[line][column:].strip()


class SyntaxTree:
    """Flat, post-ordered node table for one parsed source.

    ``parents`` is a non-owning index array; the root(s) have parent ``-1``.
    """

    def __init__(
        self,
        nodes: list[SyntaxNode],
        roots: tuple[int, ...],
        comments: tuple[Comment, ...],
        source: SourceText,
    ) -> None:
        self.nodes = nodes
        self.roots = roots
        self.comments = comments
        self.source = source
        parents = [-1] * len(nodes)
        for node in nodes:
            for child in node.children:
                parents[child] = node.index
        self.parents = parents

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> SyntaxNode:
        return self.nodes[index]

    @property
    def root(self) -> SyntaxNode:
        return self.nodes[self.roots[0]]

    def children(self, node: SyntaxNode) -> list[SyntaxNode]:
        return [self.nodes[i] for i in node.children]

    def named_children(self, node: SyntaxNode) -> list[SyntaxNode]:
        return [self.nodes[i] for i in node.children if self.nodes[i].is_named]

    def field(self, node: SyntaxNode, name: str) -> SyntaxNode | None:
        for i in node.children:
            if self.nodes[i].field == name:
                return self.nodes[i]
        return None

    def fields(self, node: SyntaxNode, name: str) -> list[SyntaxNode]:
        return [self.nodes[i] for i in node.children if self.nodes[i].field == name]

    def first_of(self, node: SyntaxNode, *kinds: NodeKind) -> SyntaxNode | None:
        for i in node.children:
            if self.nodes[i].kind in kinds:
                return self.nodes[i]
        return None

    def has_token(self, node: SyntaxNode, text: str) -> bool:
        return any(self.nodes[i].is_text(text) for i in node.children)

    def parent(self, node: SyntaxNode) -> SyntaxNode | None:
        index = self.parents[node.index]
        return self.nodes[index] if index >= 0 else None

    def next_sibling(self, node: SyntaxNode) -> SyntaxNode | None:
        parent = self.parent(node)
        if parent is None:
            return None
        position = parent.children.index(node.index)
        if position + 1 < len(parent.children):
            return self.nodes[parent.children[position + 1]]
        return None

    def first_token(self, node: SyntaxNode) -> SyntaxNode:
        while node.children:
            node = self.nodes[node.children[0]]
        return node

    def tokens(self, node: SyntaxNode) -> Iterator[SyntaxNode]:
        """Leaves below ``node`` in source order (tokens and verbatim leaves)."""
        stack = [node]
        while stack:
            current = stack.pop()
            if not current.children:
                yield current
            else:
                stack.extend(self.nodes[i] for i in reversed(current.children))
