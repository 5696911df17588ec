import logging
from collections.abc import Iterable
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from pathlib import Path

from java_layout.core.format import format_file
from java_layout.core.languages import iter_java_files
from java_layout.models import FileResult, FormatOptions

logger = logging.getLogger(__name__)


def format_paths(
    paths: Iterable[str | Path],
    options: FormatOptions | None = None,
    *,
    write: bool = False,
    jobs: int = 1,
) -> list[FileResult]:
    """Format every Java file under ``paths``; one result per file, in discovery order.

    With ``jobs > 1`` files are formatted in a process pool.
    """
    options = options or FormatOptions()
    files = list(iter_java_files(paths))
    logger.info("Formatting %d file(s) with %d job(s)", len(files), jobs)
    worker = partial(format_file, options=options, write=write)
    if jobs > 1 and len(files) > 1:
        with ProcessPoolExecutor(max_workers=jobs) as executor:
            results = list(executor.map(worker, files))
    else:
        results = [worker(path) for path in files]

    failed = sum(1 for result in results if not result.ok)
    changed = sum(1 for result in results if result.changed)
    logger.info("Formatted %d file(s): %d changed, %d failed", len(results), changed, failed)
    return results
