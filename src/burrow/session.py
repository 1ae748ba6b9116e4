"""Pages session — discovery, build pass and route modules for one project.

A session owns the current :class:`RouteModules`.  Every :meth:`rebuild`
rescans the source directories from scratch and swaps the result in whole,
so routes from deleted files never linger.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from burrow.build import BuildResult, build_routes
from burrow.discovery import PagesDirInfo, get_pages_dirs
from burrow.modules import RouteModules
from burrow.observability import BuildCompleted, EventLog, FileChanged, ModulesInvalidated, now_ns
from burrow.reporter import log_routes
from burrow.watcher import ChangeEvent, should_rebuild

if TYPE_CHECKING:
    from burrow.broadcaster import Broadcaster
    from burrow.config import BurrowConfig
    from burrow.drivers.base import PagesDriver

logger = logging.getLogger("burrow")


class PagesSession:
    """Builds and serves the routes of one project.

    Args:
        config: Resolved configuration.
        driver: Framework driver for file roles and code generation.
        broadcaster: Dev clients to notify after a rebuild, if any.
        event_log: Where build and change events are recorded.

    """

    def __init__(
        self,
        config: BurrowConfig,
        driver: PagesDriver,
        *,
        broadcaster: Broadcaster | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        self.config = config
        self.driver = driver
        self.broadcaster = broadcaster
        self.event_log = event_log if event_log is not None else EventLog()
        self.modules = RouteModules(driver)
        self._build_lock = threading.Lock()

    @property
    def result(self) -> BuildResult:
        return self.modules.result

    def pages_dirs(self) -> tuple[PagesDirInfo, ...]:
        """Pages roots of every source directory, in scan order."""
        infos: list[PagesDirInfo] = []
        for source in self.config.source_paths:
            infos.extend(get_pages_dirs(source))
        return tuple(infos)

    def rebuild(self) -> BuildResult:
        """Run a fresh build pass and swap it in.

        Passes are serialised; one that starts while another is running
        waits until the earlier result has been swapped in.

        Raises:
            RouteConflictError: In strict mode, when the pass found
                conflicts.  The previous routes stay in place.

        """
        with self._build_lock:
            result = build_routes(self.pages_dirs(), self.driver, strict=self.config.strict)
            self.modules.swap(result)
            self.event_log.append(
                BuildCompleted(
                    scopes=result.scopes,
                    route_count=result.route_count,
                    file_count=result.file_count,
                    conflict_count=len(result.conflicts),
                    duration_ms=result.duration_ms,
                    timestamp_ns=now_ns(),
                )
            )
        log_routes(result, self.config.source_path)
        return result

    async def handle_change(self, event: ChangeEvent) -> bool:
        """React to one watcher event.

        Structural changes (created/deleted files) rebuild the routes;
        every change invalidates the modules and notifies dev clients.

        Returns:
            Whether a rebuild ran.

        """
        rebuilt = should_rebuild(event)
        logger.debug("%s %s", event.kind, event.path)
        self.event_log.append(
            FileChanged(path=str(event.path), kind=event.kind, rebuilt=rebuilt, timestamp_ns=now_ns())
        )

        if rebuilt:
            self.rebuild()

        notified = 0
        if self.broadcaster is not None:
            notified = await self.broadcaster.push_reload(self.modules.version)
        self.event_log.append(
            ModulesInvalidated(
                version=self.modules.version,
                clients_notified=notified,
                timestamp_ns=now_ns(),
            )
        )
        return rebuilt
