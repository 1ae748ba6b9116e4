"""Burrow error hierarchy.

All burrow-specific errors inherit from BurrowError for easy catching.
"""


class BurrowError(Exception):
    """Base error for all burrow operations."""


class ConfigError(BurrowError):
    """Invalid or missing configuration."""


class DriverError(BurrowError):
    """Unknown driver or a driver that cannot render a route."""


class RouteConflictError(BurrowError):
    """A build pass found conflicting routes and strict mode is on.

    Attributes:
        conflicts: The conflicts found during the pass.

    """

    def __init__(self, message: str, conflicts: tuple[object, ...] = ()) -> None:
        super().__init__(message)
        self.conflicts = conflicts


class WatchError(BurrowError):
    """The file watcher could not be started."""
