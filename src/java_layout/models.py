from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class TieBreak(StrEnum):
    """Where a comment goes when it shares a line with both neighbours."""

    TRAILING = "trailing"
    LEADING = "leading"


class EntryPoint(StrEnum):
    COMPILATION_UNIT = "compilationUnit"
    CLASS_BODY_DECLARATIONS = "classBodyDeclarations"
    BLOCK_STATEMENTS = "blockStatements"
    EXPRESSION = "expression"


class FormatOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    print_width: int = Field(default=80, ge=1)
    tab_width: int = Field(default=2, ge=1)
    comment_tie_break: TieBreak = TieBreak.TRAILING


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    line: int
    column: int


class FileResult(BaseModel):
    path: str
    changed: bool = False
    error: str | None = None
    error_position: Position | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
