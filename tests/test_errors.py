"""Tests for burrow._errors."""

from burrow._errors import (
    BurrowError,
    ConfigError,
    DriverError,
    RouteConflictError,
    WatchError,
)


class TestErrorHierarchy:
    """All burrow errors inherit from BurrowError."""

    def test_burrow_error_is_exception(self) -> None:
        assert issubclass(BurrowError, Exception)

    def test_config_error_inherits(self) -> None:
        assert issubclass(ConfigError, BurrowError)

    def test_driver_error_inherits(self) -> None:
        assert issubclass(DriverError, BurrowError)

    def test_route_conflict_error_inherits(self) -> None:
        assert issubclass(RouteConflictError, BurrowError)

    def test_watch_error_inherits(self) -> None:
        assert issubclass(WatchError, BurrowError)

    def test_catch_all_burrow_errors(self) -> None:
        """All specific errors are catchable via BurrowError."""
        for error_cls in (ConfigError, DriverError, RouteConflictError, WatchError):
            try:
                raise error_cls("test")
            except BurrowError:
                pass  # caught by the base class


class TestRouteConflictError:
    def test_carries_conflicts(self) -> None:
        err = RouteConflictError("2 conflicts", ("a", "b"))
        assert str(err) == "2 conflicts"
        assert err.conflicts == ("a", "b")

    def test_conflicts_default_empty(self) -> None:
        assert RouteConflictError("x").conflicts == ()
