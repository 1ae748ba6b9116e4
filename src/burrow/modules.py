"""Route modules — generated source for each scope, plus an index.

Build tools import routes through virtual module ids::

    import routes from 'burrow:routes'          // { global, popup, ... }
    import popup from 'burrow:routes/popup'     // one scope's table

:class:`RouteModules` answers ``resolve_id`` / ``load`` for those ids from
the current :class:`BuildResult`, writes the same modules to disk for
``burrow build``, and renders the matching TypeScript declarations.

Thread Safety:
    The current result is replaced whole under a lock (:meth:`swap`);
    readers take a snapshot reference and never see a half-built table.

"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from burrow.build import BuildResult, routes_to_code
from burrow.drivers.base import template_environment

if TYPE_CHECKING:
    from burrow.drivers.base import PagesDriver

logger = logging.getLogger("burrow")

MODULE_NAME = "burrow:routes"

# Rollup/Vite convention: resolved virtual ids start with a NUL byte
VIRTUAL_PREFIX = "\0"

DECLARATIONS_FILE = "burrow.d.ts"
INDEX_FILE = "index.js"

_NON_IDENTIFIER_RE = re.compile(r"\W")


def scope_identifier(scope: str) -> str:
    """A JS identifier for *scope*: ``side-panel`` -> ``side_panel``."""
    identifier = _NON_IDENTIFIER_RE.sub("_", scope)
    if identifier[:1].isdigit():
        identifier = "_" + identifier
    return identifier


def module_id(scope: str | None = None) -> str:
    """Virtual id of the index module, or of one scope's module."""
    return MODULE_NAME if scope is None else f"{MODULE_NAME}/{scope}"


@dataclass(frozen=True, slots=True)
class _ScopeModule:
    name: str
    identifier: str
    specifier: str
    module_id: str
    declarations: str = ""


class RouteModules:
    """Serves generated route modules from the latest build pass.

    Args:
        driver: Driver used to render each scope.
        result: Initial build result; an empty table when omitted.

    """

    def __init__(self, driver: PagesDriver, result: BuildResult | None = None) -> None:
        self._driver = driver
        self._result = result if result is not None else BuildResult()
        self._version = 0
        self._lock = threading.Lock()

    @property
    def driver(self) -> PagesDriver:
        return self._driver

    @property
    def result(self) -> BuildResult:
        """Snapshot of the current build result."""
        with self._lock:
            return self._result

    @property
    def version(self) -> int:
        """Incremented on every :meth:`swap`; lets consumers drop stale output."""
        with self._lock:
            return self._version

    def swap(self, result: BuildResult) -> int:
        """Replace the current result and return the new version."""
        with self._lock:
            self._result = result
            self._version += 1
            return self._version

    # ----- virtual module protocol -----

    def resolve_id(self, source: str) -> str | None:
        """Resolve an import specifier to a virtual id, or None if not ours."""
        if source == MODULE_NAME or source.startswith(MODULE_NAME + "/"):
            return VIRTUAL_PREFIX + source
        return None

    def parse_id(self, source: str) -> str | None:
        """Scope named by a (resolved or bare) id; ``""`` for the index."""
        source = source.removeprefix(VIRTUAL_PREFIX)
        if source == MODULE_NAME:
            return ""
        if source.startswith(MODULE_NAME + "/"):
            return source[len(MODULE_NAME) + 1:]
        return None

    def load(self, source: str) -> str | None:
        """Source text for a module id, or None if the id is not ours."""
        scope = self.parse_id(source)
        if scope is None:
            return None
        if scope == "":
            return self.index_module()
        return self.scope_module(scope)

    # ----- rendering -----

    def index_module(self, specifier: Callable[[str], str] = module_id) -> str:
        """Module importing every scope and exporting them as one object.

        Args:
            specifier: Maps a scope name to the import path of its module.

        """
        scopes = self._scope_modules(self.result, specifier)
        exports = ", ".join(
            s.identifier if s.identifier == s.name else f"'{s.name}': {s.identifier}"
            for s in scopes
        )
        template = template_environment().get_template("_modules/index.js")
        return template.render({"scopes": scopes, "exports": exports})

    def scope_module(self, scope: str) -> str:
        """Route table module for one scope.  Unknown scopes render empty."""
        result = self.result
        if scope not in result.routes:
            logger.warning("Invalid routes import: %s", scope)
        return routes_to_code(result.routes.get(scope, ()), self._driver)

    def declarations(self) -> str:
        """TypeScript declarations for the index and every scope module."""
        scopes = [
            _ScopeModule(
                name=s.name,
                identifier=s.identifier,
                specifier=s.specifier,
                module_id=s.module_id,
                declarations=self._driver.declarations_to_code(s.name).rstrip(),
            )
            for s in self._scope_modules(self.result, module_id)
        ]
        index_entries = ",\n".join(
            f"    {s.name}: import('{s.module_id}').default"
            if s.identifier == s.name
            else f"    '{s.name}': import('{s.module_id}').default"
            for s in scopes
        )
        template = template_environment().get_template("_modules/burrow.d.ts")
        return template.render({
            "scopes": scopes,
            "module_name": MODULE_NAME,
            "index_entries": index_entries,
        })

    def write(self, output_dir: Path) -> list[Path]:
        """Write the index, every scope module and the declarations.

        The written index imports its siblings relatively (``./popup.js``).
        Returns the written paths in write order.
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []

        index_path = output_dir / INDEX_FILE
        index_path.write_text(self.index_module(lambda scope: f"./{scope}.js"))
        written.append(index_path)

        for scope in self.result.scopes:
            path = output_dir / f"{scope}.js"
            path.write_text(self.scope_module(scope))
            written.append(path)

        declarations_path = output_dir / DECLARATIONS_FILE
        declarations_path.write_text(self.declarations())
        written.append(declarations_path)

        return written

    @staticmethod
    def _scope_modules(
        result: BuildResult,
        specifier: Callable[[str], str],
    ) -> list[_ScopeModule]:
        return [
            _ScopeModule(
                name=scope,
                identifier=scope_identifier(scope),
                specifier=specifier(scope),
                module_id=module_id(scope),
            )
            for scope in result.scopes
        ]
