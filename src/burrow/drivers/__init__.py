"""Framework drivers.

Public API::

    from burrow.drivers import get_driver

    driver = get_driver("vue")
    code = driver.routes_to_code([driver.route_to_code(r) for r in routes])
"""

from burrow._errors import DriverError
from burrow.drivers.base import ComponentDriver, PagesDriver, pascal_case
from burrow.drivers.frameworks import (
    AngularDriver,
    LitDriver,
    PreactDriver,
    ReactDriver,
    SolidDriver,
    SvelteDriver,
    VueDriver,
)

_DRIVERS: dict[str, type[ComponentDriver]] = {
    cls.name: cls
    for cls in (
        VueDriver,
        ReactDriver,
        PreactDriver,
        AngularDriver,
        SolidDriver,
        LitDriver,
        SvelteDriver,
    )
}


def available_drivers() -> tuple[str, ...]:
    """Names accepted by :func:`get_driver`."""
    return tuple(_DRIVERS)


def get_driver(name: str) -> PagesDriver:
    """Return a new driver instance by name.

    Raises:
        DriverError: If no driver is registered under *name*.

    """
    cls = _DRIVERS.get(name.lower())
    if cls is None:
        msg = f"Unknown driver {name!r}. Available: {', '.join(_DRIVERS)}"
        raise DriverError(msg)
    return cls()


__all__ = [
    "AngularDriver",
    "ComponentDriver",
    "LitDriver",
    "PagesDriver",
    "PreactDriver",
    "ReactDriver",
    "SolidDriver",
    "SvelteDriver",
    "VueDriver",
    "available_drivers",
    "get_driver",
    "pascal_case",
]
