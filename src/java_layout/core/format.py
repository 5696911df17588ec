"""The formatting pipeline: parse, attach comments, build the layout document, render."""

import logging
from collections import Counter
from pathlib import Path

from java_layout.core.parser import TreeSitterJavaParser
from java_layout.core.ports.parser import SourceParser
from java_layout.core.ports.renderer import DocumentRenderer
from java_layout.doc import Doc, DocPrinter
from java_layout.errors import CommentRetentionError, InternalFormatError, JavaLayoutError, JavaSyntaxError
from java_layout.layout.dispatch import build_document
from java_layout.models import EntryPoint, FileResult, FormatOptions, Position
from java_layout.syntax.comments import attach_comments
from java_layout.syntax.tree import Comment, SyntaxTree

logger = logging.getLogger(__name__)


def build_doc(
    source: str,
    options: FormatOptions | None = None,
    *,
    entry_point: EntryPoint | str | None = None,
    parser: SourceParser | None = None,
) -> tuple[SyntaxTree, Doc]:
    options = options or FormatOptions()
    tree = (parser or TreeSitterJavaParser()).parse(source, entry_point)
    attachments = attach_comments(tree, options.comment_tie_break)
    return tree, build_document(tree, attachments, options)


def format_source(
    source: str,
    options: FormatOptions | None = None,
    *,
    entry_point: EntryPoint | str | None = None,
    parser: SourceParser | None = None,
    renderer: DocumentRenderer | None = None,
) -> str:
    """Format Java ``source`` and return the new text.

    Raises :class:`JavaSyntaxError` for invalid input and :class:`CommentRetentionError`
    if a comment of the input would not appear in the output.
    """
    options = options or FormatOptions()
    tree, doc = build_doc(source, options, entry_point=entry_point, parser=parser)
    output = (renderer or DocPrinter()).render(doc, options)
    try:
        formatted = (parser or TreeSitterJavaParser()).parse(output, entry_point)
    except JavaSyntaxError as exc:
        raise InternalFormatError(f"Formatted output is not valid Java: {exc}") from exc
    check_comment_retention(tree, formatted)
    return output


def _comment_key(comment: Comment) -> str:
    # Block comments may be re-indented, so only their stripped lines are compared
    return "\n".join(line.strip() for line in comment.text.split("\n"))


def check_comment_retention(tree: SyntaxTree, formatted: SyntaxTree) -> None:
    """Every comment of ``tree`` must occur in ``formatted`` exactly as often as in the input."""
    expected = Counter(_comment_key(c) for c in tree.comments)
    actual = Counter(_comment_key(c) for c in formatted.comments)
    mismatched = (expected - actual) + (actual - expected)
    if mismatched:
        raise CommentRetentionError(sorted(mismatched.elements()))


def format_file(path: str | Path, options: FormatOptions | None = None, write: bool = False) -> FileResult:
    """Format one file, optionally rewriting it; failures are recorded on the result."""
    file_path = Path(path)
    try:
        original = file_path.read_bytes().decode("utf-8")
        formatted = format_source(original, options)
    except JavaSyntaxError as exc:
        logger.debug("Syntax error in %s: %s", file_path, exc)
        position = Position(line=exc.line, column=exc.column)
        return FileResult(path=str(file_path), error=str(exc), error_position=position)
    except (JavaLayoutError, OSError, UnicodeDecodeError) as exc:
        logger.debug("Could not format %s: %s", file_path, exc)
        return FileResult(path=str(file_path), error=str(exc))

    changed = formatted != original
    if changed and write:
        file_path.write_bytes(formatted.encode("utf-8"))
        logger.info("Reformatted %s", file_path)
    return FileResult(path=str(file_path), changed=changed)
