"""File-path to route-tree conversion.

Classifies component files, groups them by directory, and builds the nested
route tree a client-side router consumes.

Public API::

    from burrow.routes import files_to_routes

    routes = files_to_routes(files, "/src/pages", "global", "+index.vue", "+layout.vue")
"""

from burrow.routes.classify import classify, group_by_directory
from burrow.routes.derive import DEFAULT_EXTENSIONS, derive_route
from burrow.routes.tree import build_route_tree, files_to_routes, find_special_conflicts
from burrow.routes.types import FileNode, RouteConflict, RouteDefinition

__all__ = [
    "DEFAULT_EXTENSIONS",
    "FileNode",
    "RouteConflict",
    "RouteDefinition",
    "build_route_tree",
    "classify",
    "derive_route",
    "files_to_routes",
    "find_special_conflicts",
    "group_by_directory",
]
