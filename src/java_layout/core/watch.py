import asyncio
import logging
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any

from java_layout.core.format import format_file
from java_layout.models import FileResult, FormatOptions
from java_layout.watcher.watchfiles_adapter import WatchfilesWatcher

logger = logging.getLogger(__name__)


def reformatter(
    options: FormatOptions, report: Callable[[FileResult], None] | None = None
) -> Callable[[set[Path]], Coroutine[Any, Any, None]]:
    """Watch callback that rewrites each changed file in place."""

    async def on_change(paths: set[Path]) -> None:
        for path in sorted(paths):
            result = await asyncio.to_thread(format_file, path, options, True)
            if result.error:
                logger.warning("Could not format %s: %s", path, result.error)
            if report is not None:
                report(result)

    return on_change


async def watch_directory(
    directory: str | Path,
    options: FormatOptions,
    report: Callable[[FileResult], None] | None = None,
    stop: asyncio.Event | None = None,
) -> None:
    """Reformat Java files under ``directory`` as they change, until ``stop`` is set."""
    watcher = WatchfilesWatcher(directory, reformatter(options, report))
    await watcher.start()
    try:
        await (stop or asyncio.Event()).wait()
    finally:
        await watcher.stop()
