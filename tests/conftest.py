"""Shared test fixtures for burrow."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

import pytest

# Pages root used by the pure tree tests; never touched on disk.
BASE = "/app/src/pages"


def abs_paths(relative: Iterable[str], base: str = BASE) -> list[str]:
    """Absolute page paths under *base*, in the given order."""
    return [f"{base}/{rel}" for rel in relative]


def write_pages(root: Path, relative: Iterable[str]) -> list[Path]:
    """Create empty component files beneath *root*."""
    written: list[Path] = []
    for rel in relative:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("<template><div /></template>\n")
        written.append(path)
    return written


@pytest.fixture(autouse=True)
def _reset_burrow_logger() -> Iterator[None]:
    """Undo configure_logging() so caplog sees ``burrow`` records."""
    logger = logging.getLogger("burrow")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def make_pages(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing page files into ``<tmp>/src/<pages_dir>``.

    Returns the project root (``tmp_path``)::

        root = make_pages("index.vue", "users/[id].vue")
        root = make_pages("index.vue", pages_dir="entrypoints/popup/pages")

    """

    def _make(*relative: str, pages_dir: str = "pages") -> Path:
        write_pages(tmp_path / "src" / pages_dir, relative)
        return tmp_path

    return _make


@pytest.fixture
def project(make_pages: Callable[..., Path]) -> Path:
    """A small project: global pages plus a popup entrypoint."""
    make_pages(
        "index.vue",
        "about.vue",
        "users.vue",
        "users/index.vue",
        "users/[id].vue",
        "(auth)/login.vue",
    )
    return make_pages("index.vue", "settings.vue", pages_dir="entrypoints/popup/pages")
