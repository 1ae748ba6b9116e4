"""Page discovery — find pages directories and the component files inside.

A source directory contributes up to one pages root per surface::

    src/pages/                    -> scope "global"
    src/entrypoints/popup/pages/  -> scope "popup"
    src/entrypoints/options/pages -> scope "options"

Missing or unreadable directories are not errors: they contribute nothing.
"""

from __future__ import annotations

import os
import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from burrow._types import FilePath

GLOBAL_SCOPE = "global"

_ENTRYPOINT_RE = re.compile(r"/entrypoints/([^/]+)/pages$")


@dataclass(frozen=True, slots=True)
class PagesDirInfo:
    """A pages root and the scope its routes belong to.

    Attributes:
        scope: ``"global"`` for ``<src>/pages``, else the entrypoint name.
        path: Absolute path to the pages directory.

    """

    scope: str
    path: Path


def get_pages_dirs(source_dir: str | Path) -> tuple[PagesDirInfo, ...]:
    """Return the pages roots of one source directory.

    ``<src>/pages`` comes first, followed by ``<src>/entrypoints/*/pages``
    in name order.  Only existing directories are returned.
    """
    source = Path(source_dir)
    candidates = [source / "pages", *sorted(source.glob("entrypoints/*/pages"))]

    infos: list[PagesDirInfo] = []
    for path in candidates:
        if not path.is_dir():
            continue
        match = _ENTRYPOINT_RE.search(path.as_posix())
        scope = match.group(1) if match else GLOBAL_SCOPE
        infos.append(PagesDirInfo(scope=scope, path=path.absolute()))
    return tuple(infos)


def get_page_files(directory: str | Path, extensions: Sequence[str]) -> list[FilePath]:
    """Recursively list component files beneath *directory*.

    Entries are visited in name order so repeated scans of an unchanged tree
    produce identical lists.  Hidden entries are skipped.  A directory that
    vanishes or cannot be read contributes nothing.
    """
    files: list[FilePath] = []
    _collect(Path(directory), tuple(extensions), files)
    return files


def _collect(directory: Path, extensions: tuple[str, ...], files: list[FilePath]) -> None:
    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError:
        return

    for entry in entries:
        if entry.name.startswith("."):
            continue
        if entry.is_dir():
            _collect(Path(entry.path), extensions, files)
        elif entry.name.endswith(extensions):
            files.append(entry.path)
