"""Burrow CLI — burrow routes / burrow build / burrow dev.

Entry point for the ``burrow`` command-line interface.
"""

from __future__ import annotations

import argparse
import logging
import sys

from burrow._errors import BurrowError

logger = logging.getLogger("burrow")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the burrow CLI."""
    from burrow.drivers import available_drivers

    parser = argparse.ArgumentParser(
        prog="burrow",
        description="Filesystem page routes for client-side routers.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    drivers = available_drivers()

    # burrow routes
    routes_parser = subparsers.add_parser("routes", help="Print the resolved routes")
    routes_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    routes_parser.add_argument("--driver", choices=drivers, help="Framework driver")
    routes_parser.add_argument(
        "--json", action="store_true", dest="as_json", help="Print route trees as JSON",
    )

    # burrow build
    build_parser = subparsers.add_parser("build", help="Write generated route modules")
    build_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    build_parser.add_argument("--driver", choices=drivers, help="Framework driver")
    build_parser.add_argument("--output", help="Output directory")
    build_parser.add_argument(
        "--strict", action="store_const", const=True, help="Fail on conflicting routes",
    )

    # burrow dev
    dev_parser = subparsers.add_parser("dev", help="Serve route modules with live rebuilds")
    dev_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    dev_parser.add_argument("--driver", choices=drivers, help="Framework driver")
    dev_parser.add_argument("--host", help="Bind address")
    dev_parser.add_argument("--port", type=int, help="Bind port")
    dev_parser.add_argument(
        "--no-watch", action="store_const", const=False, dest="watch",
        help="Do not rebuild on file changes",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from burrow import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from burrow.app import build, dev, routes

    try:
        if args.command == "routes":
            routes(root=args.root, as_json=args.as_json, driver=args.driver)
        elif args.command == "build":
            build(root=args.root, driver=args.driver, output=args.output, strict=args.strict)
        elif args.command == "dev":
            dev(
                root=args.root,
                driver=args.driver,
                host=args.host,
                port=args.port,
                watch=args.watch,
            )
    except BurrowError as exc:
        logger.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
