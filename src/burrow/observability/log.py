"""Session history — recent build passes, file changes and reloads.

The dev server's stats endpoint reports from here: the last build pass,
how many clients each reload reached, and the file changes since a given
timestamp (so a polling client only sees what is new).

Thread Safety:
    Guarded by a ``threading.Lock``.  The watcher consumer appends while
    request handlers read.

"""

import threading
from collections import deque
from dataclasses import asdict
from typing import Any

from burrow.observability.events import (
    BuildCompleted,
    BurrowEvent,
    FileChanged,
    ModulesInvalidated,
    now_ns,
)


class EventLog:
    """Bounded history of one session's events.

    The oldest events drop out once *max_events* is reached; the latest
    :class:`BuildCompleted` is kept separately and never drops out.

    Args:
        max_events: Number of events to retain.

    """

    __slots__ = ("_events", "_last_build", "_lock")

    def __init__(self, max_events: int = 500) -> None:
        self._events: deque[BurrowEvent] = deque(maxlen=max_events)
        self._last_build: BuildCompleted | None = None
        self._lock = threading.Lock()

    def append(self, event: BurrowEvent) -> None:
        with self._lock:
            self._events.append(event)
            if isinstance(event, BuildCompleted):
                self._last_build = event

    @property
    def last_build(self) -> BuildCompleted | None:
        with self._lock:
            return self._last_build

    def of_type(self, event_type: type, since_ns: int = 0) -> list[BurrowEvent]:
        """Retained events of *event_type* newer than *since_ns*, oldest first."""
        with self._lock:
            return [
                event
                for event in self._events
                if isinstance(event, event_type) and event.timestamp_ns > since_ns
            ]

    def summary(self, since_ns: int = 0) -> dict[str, Any]:
        """JSON-ready report for the stats endpoint.

        ``changes`` lists only file changes newer than *since_ns*; pass the
        previous report's ``timestamp_ns`` to poll for new ones.
        """
        changes = self.of_type(FileChanged, since_ns)
        reloads = self.of_type(ModulesInvalidated)
        last_build = self.last_build

        return {
            "timestamp_ns": now_ns(),
            "builds": len(self.of_type(BuildCompleted)),
            "last_build": asdict(last_build) if last_build is not None else None,
            "reloads": len(reloads),
            "clients_notified": sum(event.clients_notified for event in reloads),
            "changes": [asdict(event) for event in changes],
        }
