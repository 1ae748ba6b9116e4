"""Burrow application — the public entry points.

``routes`` inspects, ``build`` writes generated modules to disk, ``dev``
serves them from a Chirp app and rebuilds on file changes.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path

from burrow.build import BuildResult, flatten_routes
from burrow.config import BurrowConfig
from burrow.config_loader import load_config
from burrow.drivers import get_driver
from burrow.reporter import configure_logging, plural
from burrow.session import PagesSession

logger = logging.getLogger("burrow")


def _open_session(root: str | Path, **kwargs: object) -> tuple[BurrowConfig, PagesSession]:
    config = load_config(Path(root), **kwargs)
    configure_logging(config.log_level)
    driver = get_driver(config.driver)
    return config, PagesSession(config, driver)


def routes(root: str | Path = ".", *, as_json: bool = False, **kwargs: object) -> BuildResult:
    """Print the resolved routes of a project to stdout.

    Args:
        root: Path to the project root.
        as_json: Print the route trees as JSON instead of flat paths.
        **kwargs: Override BurrowConfig fields.

    """
    _config, session = _open_session(root, **kwargs)
    result = session.rebuild()

    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return result

    for scope, scope_routes in result.routes.items():
        print(f"{scope}:")
        for path in flatten_routes(scope_routes):
            print(f"  {path}")
    return result


def build(root: str | Path = ".", **kwargs: object) -> BuildResult:
    """Generate route modules and declarations into the output directory.

    Args:
        root: Path to the project root.
        **kwargs: Override BurrowConfig fields.

    Raises:
        RouteConflictError: In strict mode, when routes conflict.

    """
    from burrow.banner import print_banner

    t0 = time.perf_counter()
    config, session = _open_session(root, **kwargs)
    result = session.rebuild()
    load_ms = (time.perf_counter() - t0) * 1000

    print_banner(
        config, result, mode="build",
        load_ms=load_ms,
        warnings=[conflict.describe() for conflict in result.conflicts],
    )

    written = session.modules.write(config.output_path)
    logger.info("Wrote %s to %s", plural("file", len(written)), config.output_path)
    return result


def dev(root: str | Path = ".", **kwargs: object) -> None:
    """Serve route modules and rebuild them as pages change.

    Args:
        root: Path to the project root.
        **kwargs: Override BurrowConfig fields.

    """
    from burrow.banner import print_banner
    from burrow.broadcaster import Broadcaster
    from burrow.server import attach_watcher, create_app
    from burrow.watcher import PagesWatcher

    t0 = time.perf_counter()
    config = load_config(Path(root), **kwargs)
    configure_logging(config.log_level)
    driver = get_driver(config.driver)

    broadcaster = Broadcaster()
    session = PagesSession(config, driver, broadcaster=broadcaster)
    result = session.rebuild()

    app = create_app(session, broadcaster)
    if config.watch:
        attach_watcher(app, session, PagesWatcher(config.source_paths, driver.extensions))

    load_ms = (time.perf_counter() - t0) * 1000
    print_banner(
        config, result, mode="dev",
        load_ms=load_ms,
        warnings=[conflict.describe() for conflict in result.conflicts],
    )

    try:
        app.run(host=config.host, port=config.port)
    except KeyboardInterrupt:
        print("", file=sys.stderr)
