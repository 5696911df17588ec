class JavaLayoutError(Exception):
    """Base class for every error raised while formatting."""


class JavaSyntaxError(JavaLayoutError):
    """The input is not valid Java according to the parser.

    ``line`` and ``column`` are 1-based and point at the first offending token.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"{message} ({line}:{column})")
        self.message = message
        self.line = line
        self.column = column


class InternalFormatError(JavaLayoutError):
    """A contract of the formatter itself was violated; never caused by user input."""


class UnhandledNodeError(InternalFormatError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"No layout builder for node kind '{kind}'")
        self.kind = kind


class UnattachedCommentError(InternalFormatError):
    def __init__(self, text: str, line: int) -> None:
        super().__init__(f"Comment on line {line} could not be attached to any node: {text!r}")
        self.text = text
        self.line = line


class CommentRetentionError(InternalFormatError):
    def __init__(self, missing: list[str]) -> None:
        preview = ", ".join(repr(m) for m in missing[:3])
        super().__init__(f"{len(missing)} comment(s) not kept exactly once while formatting: {preview}")
        self.missing = missing
