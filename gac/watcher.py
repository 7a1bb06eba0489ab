"""Save event source built on watchdog.

watchdog delivers filesystem events on its observer thread. They are
handed to the asyncio loop with ``call_soon_threadsafe`` and debounced per
file, so the save handler and the push callbacks share one loop.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from rich.markup import escape
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from gac.constants import DEFAULT_DEBOUNCE_SECONDS
from gac.exceptions import GacError
from gac.git.push import Notifier, PushJob, notify
from gac.handler import SaveEventHandler
from gac.logging import get_logger
from gac.session import FileSession, SessionRegistry, normalize_path

logger = get_logger("watcher")


class _SaveEventBridge(FileSystemEventHandler):
    """Forwards file write events to the watcher."""

    def __init__(self, on_change: Callable[[str], None]) -> None:
        super().__init__()
        self.on_change = on_change

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.on_change(os.fsdecode(event.src_path))

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.on_change(os.fsdecode(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        # Editors that save via a temp file and rename
        if not event.is_directory:
            self.on_change(os.fsdecode(event.dest_path))


class SaveWatcher:
    """Turns saves of registered files into SaveEventHandler calls."""

    def __init__(
        self,
        registry: SessionRegistry,
        handler: SaveEventHandler,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        notifier: Notifier | None = None,
        observer_factory: Callable[[], Any] = Observer,
    ) -> None:
        """Initialize watcher.

        Args:
            registry: Sessions of the files to watch
            handler: Handler run for each save
            debounce_seconds: Quiet period before a burst of events counts as one save
            notifier: Channel for reporting failed saves
            observer_factory: Creates the watchdog observer
        """
        self.registry = registry
        self.handler = handler
        self.debounce_seconds = debounce_seconds
        self.notifier = notifier or notify
        self.jobs: list[PushJob] = []
        self._observer = observer_factory()
        self._bridge = _SaveEventBridge(self.notify_change)
        self._watches: dict[Path, Any] = {}
        self._pending: dict[Path, asyncio.TimerHandle] = {}
        self._loop: asyncio.AbstractEventLoop | None = None

    def watch(self, path: str | Path, auto_push: bool | None = None) -> FileSession:
        """Enable auto-commit for a file and watch its directory."""
        session = self.registry.enable(path)
        if auto_push is not None:
            session.auto_push_enabled = auto_push

        directory = session.path.parent
        if directory not in self._watches:
            self._watches[directory] = self._observer.schedule(
                self._bridge, str(directory), recursive=False
            )
            logger.debug(f"Watching directory {directory}")
        return session

    def unwatch(self, path: str | Path) -> None:
        """Disable auto-commit for a file and drop its session."""
        key = normalize_path(path)
        self.registry.close(key)
        handle = self._pending.pop(key, None)
        if handle is not None:
            handle.cancel()

        directory = key.parent
        still_used = any(s.path.parent == directory for s in self.registry.active())
        if not still_used and directory in self._watches:
            self._observer.unschedule(self._watches.pop(directory))
            logger.debug(f"Stopped watching directory {directory}")

    def notify_change(self, src_path: str) -> None:
        """Receive a change event; safe to call from any thread."""
        if self._loop is None or self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._schedule, normalize_path(src_path))

    def _schedule(self, path: Path) -> None:
        """Debounce a change to a watched file."""
        session = self.registry.get(path)
        if session is None or not session.enabled:
            return
        if self._loop is None:
            raise RuntimeError("SaveWatcher.start() has not been called")

        handle = self._pending.pop(path, None)
        if handle is not None:
            handle.cancel()
        self._pending[path] = self._loop.call_later(self.debounce_seconds, self.dispatch, path)

    def dispatch(self, path: str | Path) -> PushJob | None:
        """Run the save handler for a file and report commit failures."""
        key = normalize_path(path)
        self._pending.pop(key, None)
        session = self.registry.get(key)
        if session is None or not session.enabled:
            return None

        try:
            job = self.handler.on_save(session)
        except GacError as e:
            logger.error(f"Auto-commit failed for {key}: {e}")
            self.notifier(f"[red]Auto-commit failed:[/red] {escape(str(e))}")
            return None

        self.notifier(f"Committed {escape(key.name)}")
        if job is not None:
            self.jobs = [j for j in self.jobs if not j.done]
            self.jobs.append(job)
        return job

    def start(self) -> None:
        """Start the observer thread. Must be called from the running loop."""
        self._loop = asyncio.get_running_loop()
        self._observer.start()
        logger.info(f"Watching {len(self.registry.active())} file(s)")

    def stop(self) -> None:
        """Stop the observer thread and drop pending saves."""
        for handle in self._pending.values():
            handle.cancel()
        self._pending.clear()
        self._observer.stop()
        self._observer.join()

    async def run(self, stop_event: asyncio.Event) -> None:
        """Watch until ``stop_event`` is set, then wait for running pushes."""
        self.start()
        try:
            await stop_event.wait()
        finally:
            self.stop()
            running = [job.wait() for job in self.jobs if not job.done]
            if running:
                await asyncio.gather(*running, return_exceptions=True)
