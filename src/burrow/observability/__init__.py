"""Observability — build and dev-mode events in a bounded log.

Quick Start:
    >>> from burrow.observability import EventLog, BuildCompleted, now_ns
    >>> log = EventLog()
    >>> log.append(BuildCompleted(("global",), 3, 3, 0, 1.2, now_ns()))
    >>> log.summary()["builds"]
    1

"""

from burrow.observability.events import (
    BuildCompleted,
    BurrowEvent,
    FileChanged,
    ModulesInvalidated,
    now_ns,
)
from burrow.observability.log import EventLog

__all__ = [
    "BuildCompleted",
    "BurrowEvent",
    "EventLog",
    "FileChanged",
    "ModulesInvalidated",
    "now_ns",
]
