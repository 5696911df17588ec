from collections.abc import Iterable, Iterator
from pathlib import Path

JAVA_EXTENSIONS = frozenset({".java"})

# Directories never searched for sources
_SKIPPED_DIRECTORIES = frozenset({".git", ".hg", ".svn", ".gradle", ".idea", "build", "target", "node_modules"})


def is_java_file(path: Path) -> bool:
    return path.suffix.lower() in JAVA_EXTENSIONS


def iter_java_files(paths: Iterable[str | Path]) -> Iterator[Path]:
    """Yield every Java source below ``paths`` once, in sorted order per directory.

    Files named explicitly are yielded whatever their extension.
    """
    seen: set[Path] = set()
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            candidates = sorted(
                p for p in path.rglob("*") if p.is_file() and is_java_file(p) and not _is_skipped(p, path)
            )
        elif path.exists():
            candidates = [path]
        else:
            raise FileNotFoundError(f"No such file or directory: {path}")
        for candidate in candidates:
            resolved = candidate.resolve()
            if resolved not in seen:
                seen.add(resolved)
                yield candidate


def _is_skipped(path: Path, root: Path) -> bool:
    return any(part in _SKIPPED_DIRECTORIES for part in path.relative_to(root).parts[:-1])
