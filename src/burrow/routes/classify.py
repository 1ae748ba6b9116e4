"""Node classification and directory grouping.

Turns the flat list of absolute file paths from discovery into
:class:`FileNode` objects and indexes them by containing directory::

    /src/pages/users/[id].vue    -> users/[id].vue   (page, global)
    /src/pages/@popup/index.vue  -> @popup/index.vue (page, popup)
    /src/pages/+layout.vue       -> +layout.vue      (layout, global)

Both functions are pure and never raise; odd paths pass through as-is.
"""

from __future__ import annotations

import os
import re
from pathlib import PurePath
from typing import TYPE_CHECKING

from burrow.routes.types import FileNode

if TYPE_CHECKING:
    from collections.abc import Iterable

    from burrow._types import FileRole

# Leading @scope/ segment of a relative path
_SCOPE_RE = re.compile(r"^@([^/]+)/")


def classify(
    absolute_path: str,
    base_dir: str,
    ambient_scope: str,
    parent_file_name: str | None = None,
    layout_file_name: str | None = None,
) -> FileNode:
    """Classify one file found beneath *base_dir*.

    A file whose base name matches both special names is a parent: parent
    routes wrap their siblings, which a layout cannot express.

    Args:
        absolute_path: The file, as supplied by discovery.
        base_dir: The pages root it was found under.
        ambient_scope: Scope of the pages root (``"global"`` or an
            entrypoint name).
        parent_file_name: Exact base name of parent/outlet files, if any.
        layout_file_name: Exact base name of layout files, if any.

    """
    relative_path = os.path.relpath(absolute_path, base_dir).replace("\\", "/")
    name = PurePath(absolute_path).name

    role: FileRole = "page"
    if parent_file_name and name == parent_file_name:
        role = "parent"
    elif layout_file_name and name == layout_file_name:
        role = "layout"

    match = _SCOPE_RE.match(relative_path)
    scope = match.group(1) if match else ambient_scope

    return FileNode(
        absolute_path=absolute_path,
        relative_path=relative_path,
        role=role,
        scope=scope,
    )


def group_by_directory(nodes: Iterable[FileNode]) -> dict[str, list[FileNode]]:
    """Index nodes by containing directory (``.`` for the root).

    Order within each directory follows input order.
    """
    index: dict[str, list[FileNode]] = {}
    for node in nodes:
        index.setdefault(node.directory, []).append(node)
    return index
