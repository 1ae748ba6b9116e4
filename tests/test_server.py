"""Tests for burrow.server — the dev server endpoints."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

pytest.importorskip("chirp")

from chirp.testing import TestClient  # noqa: E402

from burrow._errors import RouteConflictError  # noqa: E402
from burrow.broadcaster import Broadcaster  # noqa: E402
from burrow.config import BurrowConfig  # noqa: E402
from burrow.drivers import VueDriver  # noqa: E402
from burrow.server import (  # noqa: E402
    DECLARATIONS_ENDPOINT,
    ROUTES_ENDPOINT,
    SSE_ENDPOINT,
    STATS_ENDPOINT,
    attach_watcher,
    consume_changes,
    create_app,
)
from burrow.session import PagesSession  # noqa: E402
from burrow.watcher import ChangeEvent, PagesWatcher  # noqa: E402


@pytest.fixture
def session(project: Path) -> PagesSession:
    session = PagesSession(BurrowConfig(root=project), VueDriver())
    session.rebuild()
    return session


class TestEndpoints:
    def test_constants(self) -> None:
        assert ROUTES_ENDPOINT == "/@burrow/routes.js"
        assert DECLARATIONS_ENDPOINT == "/@burrow/routes.d.ts"
        assert SSE_ENDPOINT == "/__burrow/events"
        assert STATS_ENDPOINT == "/__burrow/stats"

    def test_routes_registered(self, session: PagesSession) -> None:
        app = create_app(session, Broadcaster())
        names = [r.name for r in app._pending_routes if hasattr(r, "name")]
        assert {"burrow:routes", "burrow:scope", "burrow:declarations",
                "burrow:events", "burrow:stats"} <= set(names)

    @pytest.mark.asyncio
    async def test_index_module(self, session: PagesSession) -> None:
        app = create_app(session, Broadcaster())
        async with TestClient(app) as client:
            response = await client.get("/@burrow/routes.js")

        assert response.status == 200
        assert "javascript" in response.content_type
        assert "import popup from '/@burrow/routes/popup.js'" in response.text

    @pytest.mark.asyncio
    async def test_scope_module(self, session: PagesSession) -> None:
        app = create_app(session, Broadcaster())
        async with TestClient(app) as client:
            response = await client.get("/@burrow/routes/popup.js")

        assert response.status == 200
        assert "path: '/settings'" in response.text

    @pytest.mark.asyncio
    async def test_unknown_scope_is_404(self, session: PagesSession) -> None:
        app = create_app(session, Broadcaster())
        async with TestClient(app) as client:
            missing = await client.get("/@burrow/routes/nope.js")
            no_suffix = await client.get("/@burrow/routes/popup")

        assert missing.status == 404
        assert no_suffix.status == 404

    @pytest.mark.asyncio
    async def test_declarations(self, session: PagesSession) -> None:
        app = create_app(session, Broadcaster())
        async with TestClient(app) as client:
            response = await client.get("/@burrow/routes.d.ts")

        assert response.status == 200
        assert "typescript" in response.content_type
        assert "declare module 'burrow:routes/popup'" in response.text

    @pytest.mark.asyncio
    async def test_stats(self, session: PagesSession) -> None:
        app = create_app(session, Broadcaster())
        async with TestClient(app) as client:
            response = await client.get("/__burrow/stats")

        data = json.loads(response.text)
        assert data["version"] == 1
        assert data["routes"] == 6
        assert data["scopes"] == {"global": "burrow:routes/global", "popup": "burrow:routes/popup"}
        assert data["clients"] == 0
        assert data["history"]["builds"] == 1
        assert data["history"]["last_build"]["route_count"] == 6

    @pytest.mark.asyncio
    async def test_stats_changes_since(self, session: PagesSession, project: Path) -> None:
        page = project / "src" / "pages" / "about.vue"
        await session.handle_change(ChangeEvent(path=page, kind="modified"))
        app = create_app(session, Broadcaster())

        async with TestClient(app) as client:
            everything = json.loads((await client.get("/__burrow/stats")).text)
            cutoff = everything["history"]["timestamp_ns"]
            newer = json.loads((await client.get(f"/__burrow/stats?since={cutoff}")).text)

        assert [c["path"] for c in everything["history"]["changes"]] == [str(page)]
        assert newer["history"]["changes"] == []

    @pytest.mark.asyncio
    async def test_serves_latest_build(self, session: PagesSession, project: Path) -> None:
        app = create_app(session, Broadcaster())
        write_path = project / "src" / "entrypoints" / "popup" / "pages" / "help.vue"
        write_path.write_text("<template />\n")
        session.rebuild()

        async with TestClient(app) as client:
            response = await client.get("/@burrow/routes/popup.js")

        assert "path: '/help'" in response.text


class TestAttachWatcher:
    @pytest.mark.asyncio
    async def test_lifecycle(self, session: PagesSession, project: Path) -> None:
        app = create_app(session, Broadcaster())
        watcher = PagesWatcher([project / "src"], VueDriver.extensions)
        attach_watcher(app, session, watcher)

        async with TestClient(app):
            assert watcher.is_running

        assert not watcher.is_running


class _FlakySession:
    """Stands in for PagesSession; fails on chosen paths."""

    def __init__(self, failures: dict[str, Exception]) -> None:
        self.failures = failures
        self.handled: list[Path] = []

    async def handle_change(self, event: ChangeEvent) -> bool:
        self.handled.append(event.path)
        failure = self.failures.get(event.path.name)
        if failure is not None:
            raise failure
        return True


async def _events(*names: str):
    for name in names:
        yield ChangeEvent(path=Path("/src/pages") / name, kind="created")


class TestConsumeChanges:
    @pytest.mark.asyncio
    async def test_unexpected_error_is_logged_and_skipped(
        self, caplog: pytest.LogCaptureFixture,
    ) -> None:
        session = _FlakySession({"a.vue": RuntimeError("boom")})

        with caplog.at_level(logging.ERROR, logger="burrow"):
            await consume_changes(_events("a.vue", "b.vue"), session)  # type: ignore[arg-type]

        assert [path.name for path in session.handled] == ["a.vue", "b.vue"]
        (record,) = caplog.records
        assert "a.vue" in record.getMessage()
        assert record.exc_info is not None

    @pytest.mark.asyncio
    async def test_burrow_error_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        session = _FlakySession({"a.vue": RouteConflictError("2 route conflict(s)")})

        with caplog.at_level(logging.ERROR, logger="burrow"):
            await consume_changes(_events("a.vue", "b.vue"), session)  # type: ignore[arg-type]

        assert len(session.handled) == 2
        assert "Rebuild failed: 2 route conflict(s)" in caplog.text
