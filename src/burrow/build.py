"""Build pass — scan every pages root and assemble routes per scope.

A pass is a pure function of the filesystem snapshot it reads: it returns a
fresh :class:`BuildResult` and holds no state afterwards, so callers swap
results in whole rather than patching a shared map.

Scope merging is last-wins on ``path``: a later pages root (or layer) that
produces a route with the same path replaces the earlier one in place.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from burrow._errors import RouteConflictError
from burrow._types import RoutePath, Scope
from burrow.discovery import GLOBAL_SCOPE, PagesDirInfo, get_page_files
from burrow.routes.classify import classify, group_by_directory
from burrow.routes.tree import build_route_tree, find_special_conflicts
from burrow.routes.types import RouteConflict, RouteDefinition

if TYPE_CHECKING:
    from burrow.drivers.base import PagesDriver


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Outcome of one build pass.

    Attributes:
        routes: Scope name to top-level routes.  Always contains ``global``,
            first.
        pages_dirs: The pages roots that were scanned, in scan order.
        conflicts: Conflicts found; empty on a clean pass.
        file_count: Number of component files scanned.
        duration_ms: Time spent on the pass.

    """

    routes: Mapping[Scope, tuple[RouteDefinition, ...]] = field(
        default_factory=lambda: {GLOBAL_SCOPE: ()}
    )
    pages_dirs: tuple[PagesDirInfo, ...] = ()
    conflicts: tuple[RouteConflict, ...] = ()
    file_count: int = 0
    duration_ms: float = 0.0

    @property
    def scopes(self) -> tuple[Scope, ...]:
        return tuple(self.routes)

    @property
    def route_count(self) -> int:
        """Number of top-level routes across all scopes."""
        return sum(len(routes) for routes in self.routes.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            scope: [route.to_dict() for route in routes]
            for scope, routes in self.routes.items()
        }


def build_routes(
    pages_dirs: Iterable[PagesDirInfo],
    driver: PagesDriver,
    *,
    strict: bool = False,
) -> BuildResult:
    """Scan *pages_dirs* and build the route table for every scope.

    Raises:
        RouteConflictError: If *strict* and the pass found conflicts.  The
            pass itself always completes first.

    """
    t0 = time.perf_counter()
    infos = tuple(pages_dirs)

    by_scope: dict[str, list[RouteDefinition]] = {GLOBAL_SCOPE: []}
    conflicts: list[RouteConflict] = []
    file_count = 0

    for info in infos:
        base_dir = str(info.path)
        files = get_page_files(base_dir, driver.extensions)
        file_count += len(files)

        nodes = [
            classify(path, base_dir, info.scope, driver.parent_file, driver.layout_file)
            for path in files
        ]
        index = group_by_directory(nodes)
        conflicts.extend(find_special_conflicts(index))

        for route in build_route_tree(index, extensions=driver.extensions):
            _merge(by_scope.setdefault(route.scope, []), route)

    routes = {scope: tuple(scope_routes) for scope, scope_routes in by_scope.items()}
    for scope, scope_routes in routes.items():
        conflicts.extend(find_name_collisions(scope_routes, scope))

    result = BuildResult(
        routes=routes,
        pages_dirs=infos,
        conflicts=tuple(conflicts),
        file_count=file_count,
        duration_ms=(time.perf_counter() - t0) * 1000,
    )

    if strict and result.conflicts:
        details = "; ".join(conflict.describe() for conflict in result.conflicts)
        msg = f"{len(result.conflicts)} route conflict(s): {details}"
        raise RouteConflictError(msg, result.conflicts)

    return result


def _merge(existing: list[RouteDefinition], route: RouteDefinition) -> None:
    for i, current in enumerate(existing):
        if current.path == route.path:
            existing[i] = route
            return
    existing.append(route)


def _walk(routes: Iterable[RouteDefinition]) -> Iterable[RouteDefinition]:
    for route in routes:
        yield route
        if route.children:
            yield from _walk(route.children)


def find_name_collisions(
    routes: Sequence[RouteDefinition],
    scope: str,
) -> tuple[RouteConflict, ...]:
    """Report route names used by more than one route anywhere in *routes*."""
    files_by_name: dict[str, list[str]] = {}
    for route in _walk(routes):
        files_by_name.setdefault(route.name, []).append(route.file)

    return tuple(
        RouteConflict(kind="name", key=name, files=tuple(files), scope=scope)
        for name, files in files_by_name.items()
        if len(files) > 1
    )


def _join(prefix: str, path: str) -> str:
    if not path:
        return prefix
    if not prefix or path.startswith("/"):
        return path
    return prefix.rstrip("/") + "/" + path


def flatten_routes(routes: Iterable[RouteDefinition], prefix: str = "") -> list[RoutePath]:
    """Fully resolved URL paths of every route in the tree, sorted.

    Child paths are resolved against their parent, so ``/users`` with a
    child ``:id`` yields ``/users`` and ``/users/:id``.
    """
    paths: set[RoutePath] = set()
    for route in routes:
        full = _join(prefix, route.path) or "/"
        paths.add(full)
        if route.children:
            paths.update(flatten_routes(route.children, full))
    return sorted(paths)


def routes_to_code(routes: Iterable[RouteDefinition], driver: PagesDriver) -> str:
    """Render top-level *routes* and wrap them into a module with *driver*."""
    return driver.routes_to_code([driver.route_to_code(route, 0) for route in routes])
