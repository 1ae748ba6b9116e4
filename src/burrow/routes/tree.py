"""Route tree construction.

Recursively turns a directory index into nested :class:`RouteDefinition`
objects.  Per directory:

- every page becomes a route, wrapped by the directory's layout if any
- a page ``users.vue`` adopts the routes of a sibling ``users/`` directory
  as its children
- subdirectories no page adopted ("orphans") are built on their own and
  spliced in as siblings
- a parent/outlet file wraps everything above into a single route

Nothing is sorted: routes follow the order of the index.  No branch raises;
a directory without files simply yields no routes.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable, Sequence
from dataclasses import replace

from burrow.routes.classify import classify, group_by_directory
from burrow.routes.derive import (
    DEFAULT_EXTENSIONS,
    derive_route,
    flatten_underscores,
    strip_extension,
)
from burrow.routes.types import FileNode, RouteConflict, RouteDefinition

type DirectoryIndex = dict[str, list[FileNode]]


def _parent_of(directory: str) -> str:
    return posixpath.dirname(directory) or "."


def _child_of(directory: str, name: str) -> str:
    return name if directory == "." else f"{directory}/{name}"


def _known_directories(index: DirectoryIndex) -> dict[str, None]:
    """Every directory in the index plus its ancestors, in first-seen order.

    Ancestors without files of their own are included so that
    ``a/b/page.vue`` stays reachable when ``a/`` holds nothing.
    """
    known: dict[str, None] = {}
    for directory in index:
        while directory not in (".", "") and directory not in known:
            known[directory] = None
            directory = _parent_of(directory)
    return known


def build_route_tree(
    index: DirectoryIndex,
    *,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> tuple[RouteDefinition, ...]:
    """Build the route forest for one pages root, starting at ``.``."""
    known = _known_directories(index)

    def build_directory(
        directory: str,
        parent_path: str = "",
        parent_scope: str | None = None,
    ) -> list[RouteDefinition]:
        nodes = index.get(directory, [])
        parent = next((node for node in nodes if node.is_parent), None)
        layout = next((node for node in nodes if node.is_layout), None)
        pages = [node for node in nodes if node.role == "page"]

        routes: list[RouteDefinition] = []
        adopted: set[str] = set()

        for page in pages:
            route = derive_route(page, parent_path, False, parent_scope, extensions=extensions)
            if layout is not None:
                route = replace(route, layout=layout.absolute_path)

            child_dir = _child_of(directory, strip_extension(page.basename, extensions))
            adopted.add(child_dir)
            if child_dir in known:
                children = build_directory(child_dir, route.path, route.scope)
                if children:
                    route = replace(route, children=tuple(children))

            # Flat route: users_[id]_edit -> /users/:id/edit
            if "_" in route.path:
                path, name = flatten_underscores(route.path)
                route = replace(route, path=path, name=name)

            routes.append(route)

        for subdirectory in known:
            if subdirectory in adopted or _parent_of(subdirectory) != directory:
                continue
            routes.extend(build_directory(subdirectory, "", parent_scope))

        if parent is not None:
            outlet = derive_route(parent, parent_path, True, parent_scope, extensions=extensions)
            if routes:
                outlet = replace(outlet, children=tuple(routes))
            return [outlet]

        return routes

    return tuple(build_directory("."))


def files_to_routes(
    files: Iterable[str],
    base_dir: str,
    dir_scope: str,
    parent_file_name: str | None = None,
    layout_file_name: str | None = None,
    *,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> tuple[RouteDefinition, ...]:
    """Classify, group and build the routes for one pages root.

    Args:
        files: Absolute component paths found under *base_dir*.
        base_dir: The pages root.
        dir_scope: Ambient scope of the pages root.
        parent_file_name: Base name of parent/outlet files, if any.
        layout_file_name: Base name of layout files, if any.
        extensions: Component suffixes to strip.

    """
    nodes = [
        classify(path, base_dir, dir_scope, parent_file_name, layout_file_name)
        for path in files
    ]
    return build_route_tree(group_by_directory(nodes), extensions=extensions)


def find_special_conflicts(index: DirectoryIndex) -> tuple[RouteConflict, ...]:
    """Report directories holding more than one parent or layout file.

    The builder keeps the first of each; the rest are reported here so the
    caller can surface them once the pass completes.
    """
    conflicts: list[RouteConflict] = []
    for directory, nodes in index.items():
        for role in ("parent", "layout"):
            matches = [node.absolute_path for node in nodes if node.role == role]
            if len(matches) > 1:
                conflicts.append(
                    RouteConflict(kind="special_file", key=directory, files=tuple(matches))
                )
    return tuple(conflicts)
