"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from java_layout.core.format import format_source
from java_layout.core.parser import parse
from java_layout.models import EntryPoint, FormatOptions
from java_layout.syntax.tree import SyntaxTree

_REPO_ROOT = Path(__file__).parent.parent

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def token_texts(tree: SyntaxTree) -> list[str]:
    """Source text of every leaf, in order; comments are not part of the tree."""
    texts: list[str] = []
    for index in tree.roots:
        texts.extend(leaf.text or "" for leaf in tree.tokens(tree[index]))
    return texts


def fixture_cases() -> list[str]:
    return sorted(p.name for p in FIXTURES_DIR.iterdir() if (p / "_input.java").exists())


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fmt() -> Callable[..., str]:
    """Format source with keyword overrides for the options."""

    def _format(source: str, entry_point: EntryPoint | None = None, **options: object) -> str:
        return format_source(source, FormatOptions(**options), entry_point=entry_point)

    return _format


@pytest.fixture
def stmts(fmt: Callable[..., str]) -> Callable[..., str]:
    """Format a list of block statements."""

    def _format(source: str, **options: object) -> str:
        return fmt(source, EntryPoint.BLOCK_STATEMENTS, **options)

    return _format


@pytest.fixture
def java_tree() -> Callable[..., SyntaxTree]:
    return parse
