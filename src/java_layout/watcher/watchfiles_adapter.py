from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any

from watchfiles import awatch

from java_layout.core.languages import is_java_file

logger = logging.getLogger(__name__)


class WatchfilesWatcher:
    """Watch a directory for Java source changes and trigger a callback.

    Implements the ``FileWatcherPort`` protocol.
    """

    def __init__(
        self,
        directory: str | Path,
        on_change: Callable[[set[Path]], Coroutine[Any, Any, None]],
    ) -> None:
        self._directory = Path(directory)
        self._on_change = on_change
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Watcher started for %s", self._directory)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Watcher stopped for %s", self._directory)

    async def _watch(self) -> None:
        async for changes in awatch(self._directory):
            await self.dispatch({Path(p) for _, p in changes})

    async def dispatch(self, paths: set[Path]) -> None:
        """Forward the existing Java files among ``paths`` to the callback."""
        java_files = {p for p in paths if is_java_file(p) and p.is_file()}
        if not java_files:
            return
        logger.info("Detected changes in %d file(s)", len(java_files))
        try:
            await self._on_change(java_files)
        except Exception:
            logger.exception("Error in watcher callback")
