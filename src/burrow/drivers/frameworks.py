"""Built-in framework drivers.

Full support: Vue, React, Preact, Angular, Solid.
Partial support: Lit (no declarations yet), Svelte (usually routed by
SvelteKit itself).

Only the Vue driver renders layouts; the others treat ``layout`` as
informational because their parent file already wraps siblings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from burrow.drivers.base import ComponentDriver, pascal_case, quote

if TYPE_CHECKING:
    from burrow.routes.types import RouteDefinition


def _lazy_import(route: RouteDefinition) -> str:
    return f"() => import({quote(route.file)})"


class VueDriver(ComponentDriver):
    """vue-router ``RouteRecordRaw`` tables."""

    name = "vue"
    template_dir = "vue"
    extensions = (".vue",)
    layout_file = "+layout.vue"
    parent_file = "+index.vue"

    def route_entries(self, route: RouteDefinition) -> list[str]:
        if route.layout:
            component = f"withLayout({quote(route.file)}, {quote(route.layout)})"
        else:
            component = _lazy_import(route)
        return [
            f"path: {quote(route.path)}",
            f"name: {quote(route.name)}",
            f"component: {component}",
        ]


class ReactDriver(ComponentDriver):
    """react-router ``RouteObject`` tables.

    React layouts render an ``<Outlet />``, so the layout file doubles as
    the parent file.
    """

    name = "react"
    template_dir = "react"
    extensions = (".jsx", ".tsx")
    layout_file = "+layout.tsx"
    parent_file = "+layout.tsx"

    def route_entries(self, route: RouteDefinition) -> list[str]:
        return [
            f"path: {quote(route.path)}",
            f"Component: lazy({_lazy_import(route)})",
        ]


class PreactDriver(ComponentDriver):
    """preact-iso route tables."""

    name = "preact"
    template_dir = "preact"
    extensions = (".jsx", ".tsx")
    layout_file = "+layout.tsx"
    parent_file = "+index.tsx"

    def route_entries(self, route: RouteDefinition) -> list[str]:
        return [
            f"path: {quote(route.path)}",
            f"component: lazy({_lazy_import(route)})",
        ]


class SolidDriver(PreactDriver):
    """@solidjs/router ``RouteDefinition`` tables."""

    name = "solid"
    template_dir = "solid"


class AngularDriver(ComponentDriver):
    """@angular/router ``Routes`` with standalone ``loadComponent``."""

    name = "angular"
    template_dir = "angular"
    extensions = (".component.ts",)
    layout_file = "layout.component.ts"
    parent_file = "index.component.ts"

    def route_entries(self, route: RouteDefinition) -> list[str]:
        component = f"{pascal_case(route.name)}Component"
        return [
            f"path: {quote(route.path)}",
            f"loadComponent: () => import({quote(route.file)}).then(m => m.{component})",
        ]


class LitDriver(ComponentDriver):
    """@lit-labs/router routes: a custom element tag plus a loader."""

    name = "lit"
    template_dir = "lit"
    extensions = (".ts", ".js")
    layout_file = "+layout.ts"
    parent_file = "+index.ts"

    def route_entries(self, route: RouteDefinition) -> list[str]:
        return [
            f"path: {quote(route.path)}",
            f"component: {quote(route.name.replace('-', '_'))}",
            f"load: {_lazy_import(route)}",
        ]


class SvelteDriver(ComponentDriver):
    """Plain route table for svelte routers outside SvelteKit."""

    name = "svelte"
    template_dir = "svelte"
    extensions = (".svelte",)
    layout_file = "+layout.svelte"
    parent_file = "+page.svelte"

    def route_entries(self, route: RouteDefinition) -> list[str]:
        return [
            f"path: {quote(route.path)}",
            f"component: {_lazy_import(route)}",
        ]
