"""Event model for route builds and dev-mode activity.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class BuildCompleted:
    """A build pass finished and its routes were swapped in.

    Attributes:
        scopes: Scope names in the new route table.
        route_count: Number of top-level routes across all scopes.
        file_count: Number of component files scanned.
        conflict_count: Number of conflicts reported by the pass.
        duration_ms: Time spent scanning and building.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    scopes: tuple[str, ...]
    route_count: int
    file_count: int
    conflict_count: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class FileChanged:
    """The watcher reported a component file change.

    Attributes:
        path: Absolute path of the changed file.
        kind: Type of filesystem change.
        rebuilt: Whether the change triggered a build pass.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    kind: Literal["created", "modified", "deleted"]
    rebuilt: bool
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ModulesInvalidated:
    """Generated route modules were invalidated and clients told to reload.

    Attributes:
        version: Route module version after the invalidation.
        clients_notified: Number of dev clients that received a reload.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    version: int
    clients_notified: int
    timestamp_ns: int


type BurrowEvent = BuildCompleted | FileChanged | ModulesInvalidated


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
