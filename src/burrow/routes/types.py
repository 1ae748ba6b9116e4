"""Data models for filesystem page routing.

Frozen dataclasses for classified files and emitted routes.  Built fresh on
every build pass and never shared between passes.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from burrow._types import FileRole


@dataclass(frozen=True, slots=True)
class FileNode:
    """One discovered component file.

    Attributes:
        absolute_path: Path as supplied by discovery; the node's identity.
        relative_path: Path relative to the pages root, ``/``-separated.
        role: ``"page"``, ``"layout"`` or ``"parent"``.
        scope: Scope tag, from a leading ``@name/`` segment or the
            directory's ambient scope.

    """

    absolute_path: str
    relative_path: str
    role: FileRole
    scope: str

    @property
    def is_layout(self) -> bool:
        return self.role == "layout"

    @property
    def is_parent(self) -> bool:
        return self.role == "parent"

    @property
    def directory(self) -> str:
        """Containing directory relative to the pages root (``.`` at root)."""
        return posixpath.dirname(self.relative_path) or "."

    @property
    def basename(self) -> str:
        return posixpath.basename(self.relative_path)


@dataclass(frozen=True, slots=True)
class RouteDefinition:
    """A single route ready for a driver.

    Attributes:
        path: URL path or path segment.  Empty for a default child.
        name: Human-readable identifier derived from the file path.
        file: Absolute path of the backing component.
        scope: Scope the route belongs to.
        children: Nested routes, or *None* when the route has none.
        layout: Absolute path of a layout component wrapping this route.

    """

    path: str
    name: str
    file: str
    scope: str
    children: tuple[RouteDefinition, ...] | None = None
    layout: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form, omitting absent ``children`` and ``layout``."""
        data: dict[str, Any] = {
            "path": self.path,
            "name": self.name,
            "file": self.file,
            "scope": self.scope,
        }
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        if self.layout is not None:
            data["layout"] = self.layout
        return data


@dataclass(frozen=True, slots=True)
class RouteConflict:
    """A configuration conflict found during a build pass.

    Attributes:
        kind: ``"special_file"`` for a second parent/layout file in one
            directory, ``"name"`` for two routes sharing a name in one scope.
        key: The directory or route name the conflict is about.
        files: Absolute paths involved, first (winning) entry first.
        scope: Scope the conflict was found in, when known.

    """

    kind: Literal["special_file", "name"]
    key: str
    files: tuple[str, ...]
    scope: str | None = None

    def describe(self) -> str:
        if self.kind == "special_file":
            return (
                f"multiple special files in {self.key!r}: "
                f"{self.files[0]} wins over {', '.join(self.files[1:])}"
            )
        return (
            f"route name {self.key!r} is used more than once in scope "
            f"{self.scope!r}: {', '.join(self.files)}"
        )
