"""Driver protocol and the shared object-literal driver.

A driver turns finished :class:`RouteDefinition` trees into source text for
one client-side router.  The core never branches on framework identity; it
only calls the methods below::

    class MyDriver:
        name = "mine"
        extensions = (".mine",)
        layout_file = None
        parent_file = None

        def route_to_code(self, route, depth=0): ...
        def routes_to_code(self, route_strings): ...
        def declarations_to_code(self, scope): ...

No base class required.  :class:`ComponentDriver` covers the common case of
routers configured with nested object literals; subclasses only list the
entries for one route and ship two kida templates.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import cache
from typing import TYPE_CHECKING, ClassVar, Protocol

if TYPE_CHECKING:
    from kida import Environment

    from burrow.routes.types import RouteDefinition


class PagesDriver(Protocol):
    """Protocol for framework drivers.

    Attributes:
        name: Registry key (e.g., ``"vue"``).
        extensions: Component file suffixes to scan for.
        layout_file: Base name of layout files, if the framework has them.
        parent_file: Base name of parent/outlet files, if any.

    """

    name: str
    extensions: tuple[str, ...]
    layout_file: str | None
    parent_file: str | None

    def route_to_code(self, route: RouteDefinition, depth: int = 0) -> str:
        """Render one route and, recursively, its children."""
        ...

    def routes_to_code(self, route_strings: Sequence[str]) -> str:
        """Wrap rendered top-level routes into a complete module."""
        ...

    def declarations_to_code(self, scope: str) -> str:
        """Body of the type declaration for one scope's module."""
        ...


@cache
def template_environment() -> Environment:
    """Kida environment for the bundled driver templates.

    Output is source code, so autoescaping is off.
    """
    from kida import Environment, PackageLoader

    return Environment(
        loader=PackageLoader("burrow.drivers", "templates"),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def quote(value: str) -> str:
    """Single-quoted JS string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def pascal_case(value: str) -> str:
    """``users-id`` -> ``UsersId``."""
    return "".join(word[:1].upper() + word[1:] for word in value.split("-"))


class ComponentDriver:
    """Driver for routers configured with nested object literals.

    Each route renders as an indented ``{ ... }`` block whose entries come
    from :meth:`route_entries`, followed by a ``children`` array indented
    two levels deeper.  Module wrapping and declarations are rendered from
    ``templates/<template_dir>/routes.js`` and ``routes.d.ts``.
    """

    name: ClassVar[str]
    template_dir: ClassVar[str]
    extensions: tuple[str, ...] = ()
    layout_file: str | None = None
    parent_file: str | None = None

    def route_entries(self, route: RouteDefinition) -> list[str]:
        """``key: value`` entries for one route, in output order."""
        raise NotImplementedError

    def route_to_code(self, route: RouteDefinition, depth: int = 0) -> str:
        indent = "  " * (depth + 1)
        child_indent = "  " * (depth + 2)

        code = f"{indent}{{\n"
        code += ",\n".join(f"{child_indent}{entry}" for entry in self.route_entries(route))

        if route.children:
            rendered = ",\n".join(
                self.route_to_code(child, depth + 2) for child in route.children
            )
            code += f",\n{child_indent}children: [\n{rendered}\n{child_indent}]"

        return code + f"\n{indent}}}"

    def routes_to_code(self, route_strings: Sequence[str]) -> str:
        return self._render("routes.js", routes=",\n".join(route_strings))

    def declarations_to_code(self, scope: str) -> str:
        return self._render("routes.d.ts", scope=scope)

    def _render(self, template: str, **context: object) -> str:
        env = template_environment()
        return env.get_template(f"{self.template_dir}/{template}").render(context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(extensions={self.extensions!r})"
