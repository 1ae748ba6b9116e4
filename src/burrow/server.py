"""Dev server — serves generated route modules over HTTP.

Build tools (or a browser during development) fetch the route modules from
a small Chirp app instead of reading them from disk:

- ``/@burrow/routes.js``          index module, every scope
- ``/@burrow/routes/<scope>.js``  one scope's route table
- ``/@burrow/routes.d.ts``        TypeScript declarations
- ``/__burrow/events``            SSE stream of ``burrow:reload`` events
- ``/__burrow/stats``             session history as JSON (``?since=<ns>``)

Chirp is an optional dependency (``pip install burrow[server]``).
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from typing import TYPE_CHECKING, Any

from burrow._errors import BurrowError, ConfigError
from burrow.modules import RouteModules, module_id

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from chirp import App

    from burrow.broadcaster import Broadcaster
    from burrow.session import PagesSession
    from burrow.watcher import ChangeEvent, PagesWatcher

logger = logging.getLogger("burrow")

ROUTES_ENDPOINT = "/@burrow/routes.js"
SCOPE_ENDPOINT = "/@burrow/routes/{module}"
DECLARATIONS_ENDPOINT = "/@burrow/routes.d.ts"
SSE_ENDPOINT = "/__burrow/events"
STATS_ENDPOINT = "/__burrow/stats"

JS_CONTENT_TYPE = "application/javascript; charset=utf-8"
TS_CONTENT_TYPE = "application/typescript; charset=utf-8"


def _scope_url(scope: str) -> str:
    return f"/@burrow/routes/{scope}.js"


def _require_chirp() -> None:
    try:
        import chirp  # noqa: F401
    except ImportError as exc:
        msg = "burrow dev requires chirp. Install with: pip install burrow[server]"
        raise ConfigError(msg) from exc


def create_app(session: PagesSession, broadcaster: Broadcaster) -> App:
    """Create the Chirp app serving *session*'s route modules.

    Raises:
        ConfigError: If chirp is not installed.

    """
    _require_chirp()
    from chirp import App, EventStream
    from chirp.http.response import Response

    from burrow.broadcaster import SSEConnection

    app = App()
    modules: RouteModules = session.modules

    @app.route(ROUTES_ENDPOINT, name="burrow:routes")
    def routes_module() -> Any:
        return Response(body=modules.index_module(_scope_url), content_type=JS_CONTENT_TYPE)

    @app.route(SCOPE_ENDPOINT, name="burrow:scope")
    def scope_module(module: str) -> Any:
        scope = module.removesuffix(".js")
        if scope == module or scope not in modules.result.routes:
            return Response(body=f"Unknown routes module: {module}", status=404, content_type="text/plain")
        return Response(body=modules.scope_module(scope), content_type=JS_CONTENT_TYPE)

    @app.route(DECLARATIONS_ENDPOINT, name="burrow:declarations")
    def declarations() -> Any:
        return Response(body=modules.declarations(), content_type=TS_CONTENT_TYPE)

    @app.route(SSE_ENDPOINT, name="burrow:events")
    async def events() -> Any:
        conn = SSEConnection(client_id=str(uuid.uuid4()))
        broadcaster.subscribe(conn)

        async def generate():  # type: ignore[return]
            try:
                async for event in broadcaster.client_generator(conn):
                    yield event
            finally:
                broadcaster.unsubscribe(conn)

        return EventStream(generate())

    @app.route(STATS_ENDPOINT, name="burrow:stats")
    def stats(request: Any) -> Any:
        result = modules.result
        since_ns = request.query.get_int("since", 0) or 0
        payload = json.dumps(
            {
                "version": modules.version,
                "scopes": {scope: module_id(scope) for scope in result.scopes},
                "routes": result.route_count,
                "files": result.file_count,
                "conflicts": [conflict.describe() for conflict in result.conflicts],
                "clients": broadcaster.subscriber_count,
                "history": session.event_log.summary(since_ns),
            },
            indent=2,
        )
        return Response(body=payload, status=200, content_type="application/json")

    return app


async def consume_changes(changes: AsyncIterator[ChangeEvent], session: PagesSession) -> None:
    """Feed watcher *changes* to *session* until the stream ends.

    A failed change is logged and skipped; later changes still rebuild.
    """
    async for event in changes:
        try:
            await session.handle_change(event)
        except BurrowError as exc:
            logger.error("Rebuild failed: %s", exc)
        except Exception:
            logger.exception("Unexpected error handling %s", event.path)


def attach_watcher(app: App, session: PagesSession, watcher: PagesWatcher) -> None:
    """Run *watcher* for the lifetime of *app*, feeding changes to *session*.

    Flow:
        on_startup  -> start the watcher thread, spawn the consumer task
        file change -> session.handle_change()
        on_shutdown -> cancel the consumer, stop the watcher thread

    """
    _task: asyncio.Task[None] | None = None

    @app.on_startup
    async def _start_watcher() -> None:
        nonlocal _task
        watcher.start()
        _task = asyncio.create_task(consume_changes(watcher.changes(), session))

    @app.on_shutdown
    async def _stop_watcher() -> None:
        watcher.stop()
        if _task is not None and not _task.done():
            _task.cancel()
