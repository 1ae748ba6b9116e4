"""Route logging — what was found, which scopes, which paths.

Everything goes through the ``burrow`` logger.  Summaries log at INFO,
per-folder and per-route detail at DEBUG, conflicts at WARNING.
:func:`configure_logging` installs a stderr handler for CLI use; library
callers can attach their own handlers instead.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sized
from pathlib import Path
from typing import TYPE_CHECKING

from burrow._style import RED, RESET, YELLOW, cyan, dim
from burrow.build import flatten_routes
from burrow.discovery import GLOBAL_SCOPE

if TYPE_CHECKING:
    from burrow.build import BuildResult

logger = logging.getLogger("burrow")

_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


class _PrefixFormatter(logging.Formatter):
    """``[burrow] message``, with warnings and errors tinted."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            message = f"{RED}{message}{RESET}"
        elif record.levelno >= logging.WARNING:
            message = f"{YELLOW}{message}{RESET}"
        return f"{dim('[burrow]')} {message}"


def configure_logging(level: str = "info") -> None:
    """Route ``burrow`` log records to stderr at *level*.

    Safe to call repeatedly; the handler is installed once.
    """
    logger.setLevel(_LEVELS.get(level, logging.INFO))
    if any(getattr(h, "_burrow", False) for h in logger.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_PrefixFormatter("%(message)s"))
    handler._burrow = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.propagate = False


def plural(word: str, count: int | Sized, include_count: bool = True) -> str:
    """Pluralize *word* for *count*.

    Irregular plurals use ``"singular|plural"``::

        plural("scope", 2)           -> "2 scopes"
        plural("entry|entries", 1)   -> "1 entry"

    """
    single, _, many = word.partition("|")
    value = count if isinstance(count, int) else len(count)
    chosen = single if value == 1 else (many or f"{single}s")
    return f"{value} {chosen}" if include_count else chosen


def log_routes(result: BuildResult, source_dir: str | Path | None = None) -> None:
    """Log the page folders, scopes and resolved paths of a build pass."""
    logger.info("Found %s", plural("page folder", len(result.pages_dirs)))
    for info in result.pages_dirs:
        location = os.path.relpath(info.path, source_dir) if source_dir else str(info.path)
        label = dim("(global)") if info.scope == GLOBAL_SCOPE else cyan(f"@{info.scope}")
        logger.debug(" - %s %s", location, label)

    logger.info(
        "Generated routes for %s %s",
        plural("scope", len(result.routes)),
        dim(f"in {result.duration_ms:.0f}ms"),
    )
    for scope, routes in result.routes.items():
        logger.debug("- %s", scope)
        for path in flatten_routes(routes):
            logger.debug("   - %s", path)

    for conflict in result.conflicts:
        logger.warning(conflict.describe())
