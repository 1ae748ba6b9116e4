"""Startup banner — mode-aware status output.

Prints a short banner with timing, scope summary and, in dev mode, the
server URL.  Colors follow :mod:`burrow._style` (``NO_COLOR`` aware).
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from burrow._style import BOLD, COLOR, CYAN, DIM, GREEN, ORANGE, RESET, YELLOW
from burrow.reporter import plural

if TYPE_CHECKING:
    from burrow._types import BurrowMode
    from burrow.build import BuildResult
    from burrow.config import BurrowConfig


_MODE_STYLES: dict[str, tuple[str, str]] = {
    "dev": (GREEN, "dev"),
    "build": (YELLOW, "build"),
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (DIM, mode))
    return f"{color}[{label}]{RESET}"


def _clickable_url(url: str) -> str:
    """Wrap *url* in an OSC 8 hyperlink escape if the terminal supports it."""
    if not COLOR:
        return url
    return f"\033]8;;{url}\033\\{BOLD}{CYAN}{url}{RESET}\033]8;;\033\\"


def render_banner(
    config: BurrowConfig,
    result: BuildResult,
    mode: BurrowMode,
    *,
    load_ms: float = 0.0,
    warnings: list[str] | None = None,
) -> str:
    """Build the banner text without printing it."""
    from burrow import __version__

    header = f"  {ORANGE}{BOLD}burrow{RESET} {DIM}v{__version__}{RESET}  {_mode_badge(mode)}"
    lines: list[str] = ["", header, f"  {DIM}{'─' * 43}{RESET}"]

    timing = f" {DIM}in {load_ms:.0f}ms{RESET}" if load_ms > 0 else ""
    lines.append(
        f"  {DIM}├─{RESET} {plural('route', result.route_count)} "
        f"from {plural('file', result.file_count)}{timing}"
    )
    lines.append(f"  {DIM}├─{RESET} scopes: {', '.join(result.scopes)}")
    lines.append(f"  {DIM}├─{RESET} driver: {config.driver}")

    if mode == "build":
        lines.append(f"  {DIM}└─{RESET} output: {DIM}{config.output_path}{RESET}")
    elif mode == "dev":
        lines.append(f"  {DIM}└─{RESET} source: {DIM}{config.source_path}{RESET}")
        lines.append("")
        lines.append(f"  {_clickable_url(f'http://{config.host}:{config.port}/@burrow/routes.js')}")
        if config.watch:
            lines.append("")
            lines.append(f"  {DIM}Watching for changes...{RESET}")

    if warnings:
        lines.append("")
        lines.extend(f"  {YELLOW}!{RESET} {w}" for w in warnings)

    lines.append("")
    return "\n".join(lines)


def print_banner(
    config: BurrowConfig,
    result: BuildResult,
    mode: BurrowMode,
    *,
    load_ms: float = 0.0,
    warnings: list[str] | None = None,
) -> None:
    """Print the startup banner to stderr.

    Args:
        config: Resolved BurrowConfig.
        result: The first build pass.
        mode: ``"dev"`` or ``"build"``.
        load_ms: Time spent on startup in milliseconds.
        warnings: Optional list of warning messages to display.

    """
    print(render_banner(config, result, mode, load_ms=load_ms, warnings=warnings), file=sys.stderr)
