"""File watcher — reports component file changes under the source dirs.

Watches each source directory (not just its ``pages/`` folders, so a new
``entrypoints/<name>/pages`` is noticed) and keeps only changes to
component files the active driver understands:

- File created or deleted -> the route tree changed, rebuild
- File modified -> same routes, modules only need invalidating
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change

from burrow._errors import WatchError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger("burrow")

type ChangeKind = Literal["created", "modified", "deleted"]


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A component file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.

    """

    path: Path
    kind: ChangeKind


_CHANGE_KIND_MAP: dict[Change, ChangeKind] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def is_relevant(path: Path, roots: Sequence[Path], extensions: Sequence[str]) -> bool:
    """Whether *path* is a component file inside one of *roots*.

    Dotfiles and files inside dot-directories are ignored.
    """
    if not path.name.endswith(tuple(extensions)):
        return False
    for root in roots:
        try:
            rel = path.relative_to(root)
        except ValueError:
            continue
        return not any(part.startswith(".") for part in rel.parts)
    return False


def should_rebuild(event: ChangeEvent) -> bool:
    """Whether *event* can change the shape of the route tree."""
    return event.kind in ("created", "deleted")


class PagesWatcher:
    """Watches source directories and queues component file changes.

    Runs watchfiles in a background thread and bridges events to an asyncio
    queue owned by the loop that called :meth:`start`.

    Args:
        roots: Directories to watch.  Missing ones are skipped.
        extensions: Component file extensions to report.

    """

    def __init__(self, roots: Sequence[Path], extensions: Sequence[str]) -> None:
        self._roots = tuple(Path(root) for root in roots)
        self._extensions = tuple(extensions)
        self._queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start watching in a background thread.

        Must be called from a running event loop; events are delivered to it.

        Raises:
            WatchError: If none of the roots exist.

        """
        if self.is_running:
            return

        existing = [root for root in self._roots if root.is_dir()]
        if not existing:
            names = ", ".join(str(root) for root in self._roots) or "(none)"
            msg = f"Nothing to watch: no source directory exists among {names}"
            raise WatchError(msg)

        self._loop = asyncio.get_running_loop()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            args=(existing,),
            name="burrow-watcher",
            daemon=True,
        )
        self._thread.start()
        logger.debug("Watching %s", ", ".join(str(root) for root in existing))

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    async def changes(self) -> AsyncIterator[ChangeEvent]:
        """Async iterator that yields ChangeEvent objects as they occur.

        Ends once the watcher is stopped and the queue has drained.
        """
        while self.is_running or not self._queue.empty():
            try:
                event = await asyncio.wait_for(self._queue.get(), timeout=0.5)
                yield event
            except TimeoutError:
                if not self.is_running:
                    break

    def _watch_loop(self, roots: list[Path]) -> None:
        """Background thread: run watchfiles and push events to the queue."""
        from watchfiles import watch

        for raw_changes in watch(
            *roots,
            stop_event=self._stop_event,
            debounce=300,
            step=100,
        ):
            for change_type, path_str in raw_changes:
                path = Path(path_str)
                if not is_relevant(path, roots, self._extensions):
                    continue

                event = ChangeEvent(path=path, kind=_CHANGE_KIND_MAP.get(change_type, "modified"))
                assert self._loop is not None
                self._loop.call_soon_threadsafe(self._queue.put_nowait, event)
