"""Burrow — filesystem page routes for client-side routers.

Turns a ``pages/`` directory of framework components into the nested route
table a client-side router consumes.  Directories become nested routes,
``[id]`` becomes ``:id``, ``+layout`` files wrap their siblings, and every
``entrypoints/<name>/pages`` folder gets its own scope.

Quick start::

    import burrow

    burrow.build("my-app/")                 # write generated/routes/*.js
    burrow.dev("my-app/")                   # serve modules, rebuild on change

Lower level::

    from burrow import files_to_routes, get_driver, routes_to_code

    driver = get_driver("vue")
    routes = files_to_routes(files, "/app/src/pages", "global",
                             driver.parent_file, driver.layout_file)
    print(routes_to_code(routes, driver))

"""

__version__ = "0.1.0.dev0"
__all__ = [
    "BurrowConfig",
    "__version__",
    "build",
    "dev",
    "files_to_routes",
    "get_driver",
    "routes_to_code",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import burrow`` fast; kida and watchfiles load on first use.
    """
    if name == "BurrowConfig":
        from burrow.config import BurrowConfig

        return BurrowConfig

    if name == "build":
        from burrow.app import build

        return build

    if name == "dev":
        from burrow.app import dev

        return dev

    if name == "files_to_routes":
        from burrow.routes import files_to_routes

        return files_to_routes

    if name == "routes_to_code":
        from burrow.build import routes_to_code

        return routes_to_code

    if name == "get_driver":
        from burrow.drivers import get_driver

        return get_driver

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
