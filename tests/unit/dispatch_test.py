"""Unit tests for layout builder registration and dispatch."""

import pytest

from java_layout.core.parser import parse
from java_layout.errors import InternalFormatError, UnhandledNodeError
from java_layout.layout.context import BuildContext
from java_layout.layout.dispatch import build_document, missing_builders
from java_layout.layout.registry import BUILDERS, builds
from java_layout.models import FormatOptions
from java_layout.syntax.comments import attach_comments
from java_layout.syntax.tree import NodeKind


def test_every_node_kind_has_a_builder() -> None:
    assert missing_builders() == []


def test_duplicate_registration_is_rejected() -> None:
    with pytest.raises(InternalFormatError, match="Duplicate"):
        builds(NodeKind.BLOCK)(lambda ctx, node: "")


def test_dangling_aware_builders() -> None:
    assert BUILDERS[NodeKind.BLOCK].dangling
    assert BUILDERS[NodeKind.ARGUMENT_LIST].dangling
    assert not BUILDERS[NodeKind.RETURN_STATEMENT].dangling


def test_missing_builder_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    tree = parse("class A {}")
    ctx = BuildContext(tree, attach_comments(tree), FormatOptions())
    monkeypatch.delitem(BUILDERS, NodeKind.CLASS_DECLARATION)
    with pytest.raises(UnhandledNodeError) as exc_info:
        ctx.build(tree.named_children(tree.root)[0])
    assert exc_info.value.kind == NodeKind.CLASS_DECLARATION


def test_document_for_empty_fragment() -> None:
    tree = parse("", "blockStatements")
    assert build_document(tree, attach_comments(tree), FormatOptions()) == ""
