"""Formatting twice gives the same output and keeps every comment."""

from collections.abc import Callable

import pytest

from java_layout.core.parser import parse
from java_layout.models import EntryPoint

Formatter = Callable[..., str]

STATEMENT_CASES = [
    pytest.param("if (x) // c11\n  y(x.z());\nelse w();", id="if-header"),
    pytest.param("while (x) // loop\n  step();", id="while-header"),
    pytest.param("for (int i = 0; i < n; i++) // count\n  step(i);", id="for-header"),
    pytest.param("for (String s : items) // each\n  use(s);", id="enhanced-for-header"),
    pytest.param("if (a) x(); // first\nelse // second\n  y();", id="before-and-after-else"),
    pytest.param("if (a) {\n  x();\n} // done\nelse {\n  y();\n}", id="between-blocks-and-else"),
    pytest.param("do // body\n  x();\nwhile (y);", id="do-body"),
    pytest.param("int[] a = { 1, // one\n  2 // two\n};", id="array-initializer"),
    pytest.param("foo(a, // first\n  b);", id="argument-list-line"),
    pytest.param("foo(/* a */ x, y /* b */);", id="argument-list-block"),
    pytest.param("list.forEach(x -> { // each\n  use(x);\n});", id="lambda-body"),
]

MEMBER_CASES = [
    pytest.param("public /* c */ static void f() {}", id="modifiers-block"),
    pytest.param("public // c\nstatic void f() {}", id="modifiers-line"),
]


def _comment_texts(source: str, entry_point: EntryPoint) -> list[str]:
    return sorted(c.text for c in parse(source, entry_point).comments)


def _assert_stable(fmt: Formatter, source: str, entry_point: EntryPoint) -> None:
    once = fmt(source, entry_point)
    assert fmt(once, entry_point) == once
    assert _comment_texts(once, entry_point) == _comment_texts(source, entry_point)


@pytest.mark.parametrize("source", STATEMENT_CASES)
def test_statement_comments_are_stable(fmt: Formatter, source: str) -> None:
    _assert_stable(fmt, source, EntryPoint.BLOCK_STATEMENTS)


@pytest.mark.parametrize("source", MEMBER_CASES)
def test_member_comments_are_stable(fmt: Formatter, source: str) -> None:
    _assert_stable(fmt, source, EntryPoint.CLASS_BODY_DECLARATIONS)
