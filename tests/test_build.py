"""Tests for burrow.build — build passes, scope merging and conflicts."""

from __future__ import annotations

from pathlib import Path

import pytest

from burrow._errors import RouteConflictError
from burrow.build import BuildResult, build_routes, find_name_collisions, flatten_routes, routes_to_code
from burrow.discovery import GLOBAL_SCOPE, PagesDirInfo, get_pages_dirs
from burrow.drivers import VueDriver
from burrow.routes.types import RouteDefinition
from tests.conftest import write_pages


def _summary(routes) -> list[tuple[str, str]]:
    return [(route.path, route.name) for route in routes]


class TestBuildRoutes:
    def test_scopes_and_routes(self, project: Path) -> None:
        result = build_routes(get_pages_dirs(project / "src"), VueDriver())

        assert result.scopes == ("global", "popup")
        assert _summary(result.routes["global"]) == [
            ("/about", "about"),
            ("/", "index"),
            ("/users", "users"),
            ("/login", "login"),
        ]
        assert _summary(result.routes["popup"]) == [("/", "index"), ("/settings", "settings")]
        assert all(route.scope == "popup" for route in result.routes["popup"])

    def test_counts(self, project: Path) -> None:
        result = build_routes(get_pages_dirs(project / "src"), VueDriver())

        assert result.file_count == 8
        assert result.route_count == 6
        assert len(result.pages_dirs) == 2
        assert result.duration_ms >= 0

    def test_nested_children(self, project: Path) -> None:
        result = build_routes(get_pages_dirs(project / "src"), VueDriver())
        users = result.routes["global"][2]

        assert _summary(users.children) == [(":id", "users-id"), ("", "users")]

    def test_name_collision_reported(self, project: Path) -> None:
        result = build_routes(get_pages_dirs(project / "src"), VueDriver())

        (conflict,) = result.conflicts
        assert conflict.kind == "name"
        assert conflict.key == "users"
        assert conflict.scope == "global"
        assert [Path(f).name for f in conflict.files] == ["users.vue", "index.vue"]

    def test_strict_raises_with_conflicts(self, project: Path) -> None:
        with pytest.raises(RouteConflictError) as exc_info:
            build_routes(get_pages_dirs(project / "src"), VueDriver(), strict=True)

        assert len(exc_info.value.conflicts) == 1
        assert "users" in str(exc_info.value)

    def test_strict_passes_when_clean(self, make_pages) -> None:
        root = make_pages("index.vue", "about.vue")
        result = build_routes(get_pages_dirs(root / "src"), VueDriver(), strict=True)
        assert result.conflicts == ()

    def test_global_always_present_and_first(self, make_pages) -> None:
        root = make_pages("index.vue", pages_dir="entrypoints/popup/pages")
        result = build_routes(get_pages_dirs(root / "src"), VueDriver())

        assert result.scopes == (GLOBAL_SCOPE, "popup")
        assert result.routes[GLOBAL_SCOPE] == ()

    def test_scope_prefix_creates_scope(self, make_pages) -> None:
        root = make_pages("index.vue", "@billing/invoice.vue")
        result = build_routes(get_pages_dirs(root / "src"), VueDriver())

        assert result.scopes == (GLOBAL_SCOPE, "billing")
        assert _summary(result.routes["billing"]) == [("/invoice", "invoice")]

    def test_later_root_replaces_same_path(self, tmp_path: Path) -> None:
        write_pages(tmp_path / "src" / "pages", ["index.vue", "about.vue"])
        write_pages(tmp_path / "layer" / "pages", ["about.vue", "extra.vue"])
        dirs = [
            PagesDirInfo(GLOBAL_SCOPE, tmp_path / "src" / "pages"),
            PagesDirInfo(GLOBAL_SCOPE, tmp_path / "layer" / "pages"),
        ]

        routes = build_routes(dirs, VueDriver()).routes[GLOBAL_SCOPE]

        assert [route.path for route in routes] == ["/about", "/", "/extra"]
        assert routes[0].file == str(tmp_path / "layer" / "pages" / "about.vue")

    def test_layout_file_is_not_a_route(self, make_pages) -> None:
        root = make_pages("+layout.vue", "index.vue")
        result = build_routes(get_pages_dirs(root / "src"), VueDriver())

        (route,) = result.routes[GLOBAL_SCOPE]
        assert route.layout == str(root / "src" / "pages" / "+layout.vue")
        assert result.file_count == 2

    def test_empty(self) -> None:
        result = build_routes([], VueDriver())
        assert result.routes == {GLOBAL_SCOPE: ()}
        assert result.file_count == 0

    def test_fresh_result_each_pass(self, make_pages) -> None:
        root = make_pages("index.vue", "about.vue")
        first = build_routes(get_pages_dirs(root / "src"), VueDriver())
        (root / "src" / "pages" / "about.vue").unlink()
        second = build_routes(get_pages_dirs(root / "src"), VueDriver())

        assert len(first.routes[GLOBAL_SCOPE]) == 2
        assert _summary(second.routes[GLOBAL_SCOPE]) == [("/", "index")]


class TestBuildResult:
    def test_default(self) -> None:
        result = BuildResult()
        assert result.scopes == (GLOBAL_SCOPE,)
        assert result.route_count == 0

    def test_to_dict(self) -> None:
        route = RouteDefinition(path="/", name="index", file="/p/index.vue", scope="global")
        result = BuildResult(routes={"global": (route,)})

        assert result.to_dict() == {
            "global": [{"path": "/", "name": "index", "file": "/p/index.vue", "scope": "global"}]
        }


class TestFindNameCollisions:
    def test_nested_names_counted(self) -> None:
        child = RouteDefinition(path="", name="a", file="/a/index.vue", scope="s")
        parent = RouteDefinition(path="/a", name="a", file="/a.vue", scope="s", children=(child,))

        (conflict,) = find_name_collisions([parent], "s")
        assert conflict.files == ("/a.vue", "/a/index.vue")
        assert "'a'" in conflict.describe()

    def test_unique_names(self) -> None:
        routes = [
            RouteDefinition(path="/a", name="a", file="/a.vue", scope="s"),
            RouteDefinition(path="/b", name="b", file="/b.vue", scope="s"),
        ]
        assert find_name_collisions(routes, "s") == ()


class TestFlattenRoutes:
    def test_resolves_children(self, project: Path) -> None:
        result = build_routes(get_pages_dirs(project / "src"), VueDriver())
        assert flatten_routes(result.routes["global"]) == [
            "/",
            "/about",
            "/login",
            "/users",
            "/users/:id",
        ]

    def test_absolute_child_path(self) -> None:
        child = RouteDefinition(path="/x/y", name="x-y", file="/f", scope="s")
        parent = RouteDefinition(path="/x", name="x", file="/g", scope="s", children=(child,))
        assert flatten_routes([parent]) == ["/x", "/x/y"]


class TestRoutesToCode:
    def test_renders_module(self, make_pages) -> None:
        root = make_pages("index.vue", "about.vue")
        result = build_routes(get_pages_dirs(root / "src"), VueDriver())

        code = routes_to_code(result.routes[GLOBAL_SCOPE], VueDriver())

        assert "export default [" in code
        assert "path: '/about'" in code
        assert "name: 'index'" in code
        assert code.index("'/about'") < code.index("'index'")
