from typing import Protocol

from java_layout.models import EntryPoint
from java_layout.syntax.tree import SyntaxTree


class SourceParser(Protocol):
    def parse(self, source: str, entry_point: EntryPoint | str | None = None) -> SyntaxTree: ...
