"""Tests for the watchfiles watcher adapter and the watch loop."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from java_layout.core.watch import reformatter, watch_directory
from java_layout.models import FormatOptions
from java_layout.watcher.watchfiles_adapter import WatchfilesWatcher


class TestWatchfilesWatcher:
    def test_implements_protocol(self) -> None:
        from java_layout.core.ports.watcher import FileWatcherPort

        callback = AsyncMock()
        watcher: FileWatcherPort = WatchfilesWatcher("/tmp", callback)
        assert hasattr(watcher, "start")
        assert hasattr(watcher, "stop")

    @pytest.mark.asyncio
    async def test_start_creates_task(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        with patch("java_layout.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            assert watcher._task is not None
            await watcher.stop()
            assert watcher._task is None

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)
        await watcher.stop()  # should not raise

    @pytest.mark.asyncio
    async def test_double_start_is_noop(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        with patch("java_layout.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            task1 = watcher._task
            await watcher.start()
            assert watcher._task is task1  # same task
            await watcher.stop()

    @pytest.mark.asyncio
    async def test_callback_receives_java_files(self, tmp_path: Path) -> None:
        (tmp_path / "A.java").write_text("class A {}")
        (tmp_path / "notes.txt").write_text("notes")
        callback = AsyncMock()
        watcher = WatchfilesWatcher(tmp_path, callback)

        changes = {(1, str(tmp_path / "A.java")), (2, str(tmp_path / "notes.txt"))}

        with patch("java_layout.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(changes)
            await watcher.start()
            # Let the watch loop process the changes
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_called_once()
        paths = callback.call_args[0][0]
        assert paths == {tmp_path / "A.java"}

    @pytest.mark.asyncio
    async def test_deleted_files_are_ignored(self, tmp_path: Path) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher(tmp_path, callback)
        await watcher.dispatch({tmp_path / "Gone.java"})
        callback.assert_not_called()

    @pytest.mark.asyncio
    async def test_callback_errors_are_logged(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        (tmp_path / "A.java").write_text("class A {}")
        callback = AsyncMock(side_effect=RuntimeError("boom"))
        watcher = WatchfilesWatcher(tmp_path, callback)
        await watcher.dispatch({tmp_path / "A.java"})
        assert "Error in watcher callback" in caplog.text


class TestReformatter:
    @pytest.mark.asyncio
    async def test_rewrites_changed_files_and_reports(self, tmp_path: Path) -> None:
        path = tmp_path / "A.java"
        path.write_text("class A{int x;}")
        report = MagicMock()
        await reformatter(FormatOptions(), report)({path})
        assert path.read_text() == "class A {\n  int x;\n}\n"
        result = report.call_args[0][0]
        assert result.changed

    @pytest.mark.asyncio
    async def test_broken_file_is_left_alone(self, tmp_path: Path) -> None:
        path = tmp_path / "A.java"
        path.write_text("class A {")
        report = MagicMock()
        await reformatter(FormatOptions(), report)({path})
        assert path.read_text() == "class A {"
        assert not report.call_args[0][0].ok

    @pytest.mark.asyncio
    async def test_watch_directory_stops_on_event(self, tmp_path: Path) -> None:
        stop = asyncio.Event()
        with patch("java_layout.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            task = asyncio.create_task(watch_directory(tmp_path, FormatOptions(), stop=stop))
            await asyncio.sleep(0.01)
            stop.set()
            await asyncio.wait_for(task, timeout=1)
        mock_awatch.assert_called_once_with(tmp_path)


async def _empty_async_iter() -> AsyncIterator[Any]:
    """Async iterator that never yields, just blocks until cancelled."""
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
    yield  # make it an async generator  # pragma: no cover


async def _single_change_iter(changes: set[tuple[int, str]]) -> AsyncIterator[set[tuple[int, str]]]:
    """Async iterator that yields one set of changes then blocks."""
    yield changes
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
