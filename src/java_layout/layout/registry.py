from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from java_layout.doc import Doc
from java_layout.errors import InternalFormatError
from java_layout.syntax.tree import NodeKind, SyntaxNode

if TYPE_CHECKING:
    from java_layout.layout.context import BuildContext

Builder = Callable[["BuildContext", SyntaxNode], Doc]


@dataclass(frozen=True)
class BuilderEntry:
    build: Builder
    # Whether the builder prints the node's dangling comments itself
    dangling: bool = False


BUILDERS: dict[NodeKind, BuilderEntry] = {}


def builds(*kinds: NodeKind, dangling: bool = False) -> Callable[[Builder], Builder]:
    """Register ``fn`` as the layout builder for ``kinds``."""

    def decorator(fn: Builder) -> Builder:
        for kind in kinds:
            if kind in BUILDERS:
                raise InternalFormatError(f"Duplicate layout builder for node kind '{kind}'")
            BUILDERS[kind] = BuilderEntry(fn, dangling)
        return fn

    return decorator
