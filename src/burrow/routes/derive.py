"""Route path and name derivation.

Pure string transformations from a file's relative path to the URL path
and route name a client-side router expects::

    index.vue                -> /                 index
    users/index.vue          -> /users            users
    users/[id].vue           -> /users/:id        users-id
    docs/[...slug].vue       -> /docs/:slug(.*)*  docs-slug-all
    (admin)/settings.vue     -> /settings         settings
    @popup/about.vue         -> /about            about
    users_[id]_edit.vue      -> /users/:id/edit   users-id-edit  (flat route)

The name is always derived from the cleaned relative path, never from the
possibly parent-relative path, so nested and top-level routes name alike.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Sequence
from functools import lru_cache

from burrow.routes.types import FileNode, RouteDefinition

# Component suffixes recognised when no driver supplies its own
DEFAULT_EXTENSIONS: tuple[str, ...] = (".vue", ".jsx", ".tsx", ".svelte", ".component.ts")

_SCOPE_PREFIX_RE = re.compile(r"^@[^/]+/")
_GROUP_RE = re.compile(r"\([^)]+\)/")
_DYNAMIC_RE = re.compile(r"\[(\w+)\]")
_CATCH_ALL_RE = re.compile(r"\[\.\.\.(\w+)\]")
_FLAT_NAME_RE = re.compile(r"/:?")


@lru_cache(maxsize=32)
def _extension_re(extensions: tuple[str, ...]) -> re.Pattern[str]:
    # Longest first so ".component.ts" wins over ".ts"
    ordered = sorted(extensions, key=len, reverse=True)
    return re.compile("(?:" + "|".join(re.escape(ext) for ext in ordered) + ")$")


def strip_extension(path: str, extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> str:
    """Remove a trailing component extension from *path*, if present."""
    if not extensions:
        return path
    return _extension_re(tuple(extensions)).sub("", path)


def clean_path(relative_path: str, extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> str:
    """Strip extension, ``@scope/`` prefix and ``(group)/`` segments."""
    path = strip_extension(relative_path, extensions)
    path = _SCOPE_PREFIX_RE.sub("", path)
    return _GROUP_RE.sub("", path)


def route_name(cleaned: str) -> str:
    """Derive a route name from a cleaned relative path.

    ``about/team`` -> ``about-team``, ``users/index`` -> ``users``,
    ``[...slug]`` -> ``slug-all``.
    """
    name = _CATCH_ALL_RE.sub(r"\1-all", cleaned)
    name = _DYNAMIC_RE.sub(r"\1", name)
    return name.replace("/", "-").removesuffix("-index")


def rewrite_params(path: str) -> str:
    """Turn ``[id]`` into ``:id`` and ``[...slug]`` into ``:slug(.*)*``.

    The dynamic rule runs first; its pattern cannot consume the dots of a
    catch-all, which the second rule then rewrites.
    """
    path = _DYNAMIC_RE.sub(r":\1", path)
    return _CATCH_ALL_RE.sub(r":\1(.*)*", path)


def flatten_underscores(path: str) -> tuple[str, str]:
    """Apply the flat-route convention: every ``_`` becomes ``/``.

    Returns the rewritten path and the name recomputed from it.
    """
    path = path.replace("_", "/")
    name = _FLAT_NAME_RE.sub("-", path.removeprefix("/"))
    return path, name


def _relative_to_parent(path: str, parent_path: str) -> str:
    if not parent_path or not path.startswith(parent_path):
        return path
    path = path[len(parent_path):]
    if path.startswith("/") and path != "/":
        path = path[1:]
    return path


def derive_route(
    node: FileNode,
    parent_path: str = "",
    is_parent: bool = False,
    inherited_scope: str | None = None,
    *,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> RouteDefinition:
    """Derive the route for one file, without children or layout.

    Args:
        node: The classified file.
        parent_path: Path of the route this one nests under, if any.
            Matching prefixes are stripped so child paths are relative.
        is_parent: Derive a parent/outlet route for the file's directory.
        inherited_scope: Scope of the enclosing route; falls back to the
            node's own scope.
        extensions: Component suffixes to strip.

    """
    scope = inherited_scope or node.scope
    stripped = _SCOPE_PREFIX_RE.sub("", strip_extension(node.relative_path, extensions))
    file_name = posixpath.basename(stripped)
    cleaned = _GROUP_RE.sub("", stripped)
    directory = posixpath.dirname(cleaned)

    if is_parent:
        return RouteDefinition(
            path="" if parent_path else rewrite_params("/" + directory),
            name=directory.replace("/", "-") or "parent",
            file=node.absolute_path,
            scope=scope,
        )

    if file_name == "index":
        path = "/" + directory if directory else "/"
    else:
        path = "/" + cleaned

    path = _relative_to_parent(rewrite_params(path), parent_path)

    return RouteDefinition(
        path=path,
        name=route_name(cleaned),
        file=node.absolute_path,
        scope=scope,
    )
