from typing import Protocol

from java_layout.doc import Doc
from java_layout.models import FormatOptions


class DocumentRenderer(Protocol):
    def render(self, doc: Doc, options: FormatOptions) -> str: ...
