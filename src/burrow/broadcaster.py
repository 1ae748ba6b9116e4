"""SSE broadcaster — tells connected dev clients that routes changed.

Each browser tab (or build-tool plugin) holds one connection to the dev
server's event stream.  When a rebuild swaps in new route modules, every
connection receives a ``burrow:reload`` event carrying the new module
version.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

RELOAD_EVENT = "burrow:reload"


@dataclass(frozen=True, slots=True)
class SSEConnection:
    """A connected SSE client.

    Attributes:
        client_id: Unique identifier for this connection.
        queue: asyncio.Queue[Any] for pushing events to the client's generator.

    """

    client_id: str
    queue: asyncio.Queue[Any] = field(default_factory=asyncio.Queue, compare=False, hash=False)


class Broadcaster:
    """Holds SSE connections and pushes reload events to all of them.

    Thread-safe: the subscriber set is protected by a lock.

    """

    def __init__(self) -> None:
        self._subscribers: set[SSEConnection] = set()
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        """Number of active SSE connections."""
        with self._lock:
            return len(self._subscribers)

    def subscribe(self, conn: SSEConnection) -> None:
        """Register an SSE client."""
        with self._lock:
            self._subscribers.add(conn)

    def unsubscribe(self, conn: SSEConnection) -> None:
        """Remove an SSE client.  Unknown clients are ignored."""
        with self._lock:
            self._subscribers.discard(conn)

    def get_subscribers(self) -> frozenset[SSEConnection]:
        """Snapshot of all subscribers (no lock held on return)."""
        with self._lock:
            return frozenset(self._subscribers)

    async def push_reload(self, version: int) -> int:
        """Send a ``burrow:reload`` event to every subscriber.

        Returns:
            Number of clients notified.

        """
        from chirp import SSEEvent

        event = SSEEvent(data=str(version), event=RELOAD_EVENT)

        count = 0
        for conn in self.get_subscribers():
            conn.queue.put_nowait(event)
            count += 1
        return count

    async def client_generator(self, conn: SSEConnection) -> AsyncIterator[Any]:
        """Yield events from a connection's queue until the client goes away.

        Used as the generator for Chirp's ``EventStream``.
        """
        try:
            while True:
                event = await conn.queue.get()
                yield event
        except (asyncio.CancelledError, GeneratorExit):
            return
