"""Tests for burrow.banner — startup banner output."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from unittest.mock import patch

from burrow.banner import print_banner, render_banner
from burrow.build import BuildResult
from burrow.config import BurrowConfig
from burrow.routes.types import RouteDefinition


def _result(count: int = 3) -> BuildResult:
    routes = tuple(
        RouteDefinition(path=f"/{i}", name=str(i), file=f"/p/{i}.vue", scope="global")
        for i in range(count)
    )
    return BuildResult(routes={"global": routes, "popup": ()}, file_count=count)


class TestPrintBanner:
    """Tests for the startup banner."""

    def _capture_banner(self, mode: str, **kwargs: object) -> str:
        """Call print_banner and capture stderr output."""
        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            config = BurrowConfig(root=Path("/tmp/test-app"))
            print_banner(config, kwargs.pop("result", _result()), mode, **kwargs)  # type: ignore[arg-type]
        return buf.getvalue()

    def test_dev_mode_banner(self) -> None:
        output = self._capture_banner("dev", load_ms=42.5)

        assert "burrow" in output
        assert "[dev]" in output
        assert "3 routes from 3 files" in output
        assert "42ms" in output
        assert "scopes: global, popup" in output
        assert "http://127.0.0.1:5180/@burrow/routes.js" in output
        assert "Watching for changes" in output

    def test_build_mode_banner(self) -> None:
        output = self._capture_banner("build", load_ms=100.0)

        assert "[build]" in output
        assert "100ms" in output
        assert "output:" in output
        assert "Watching" not in output

    def test_singular(self) -> None:
        output = self._capture_banner("build", result=_result(1))
        assert "1 route from 1 file" in output

    def test_warnings(self) -> None:
        output = self._capture_banner("build", warnings=["two layouts in users"])
        assert "two layouts in users" in output

    def test_no_watch(self) -> None:
        config = BurrowConfig(root=Path("/tmp/test-app"), watch=False)
        assert "Watching" not in render_banner(config, _result(), "dev")
