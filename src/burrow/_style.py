"""ANSI helpers shared by the banner and log output.

Respects NO_COLOR (https://no-color.org) and ``TERM=dumb``.
"""

from __future__ import annotations

import os
import sys


def supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


COLOR = supports_color()

RESET = "\033[0m" if COLOR else ""
BOLD = "\033[1m" if COLOR else ""
DIM = "\033[2m" if COLOR else ""
CYAN = "\033[36m" if COLOR else ""
GREEN = "\033[32m" if COLOR else ""
YELLOW = "\033[33m" if COLOR else ""
RED = "\033[31m" if COLOR else ""
ORANGE = "\033[38;5;214m" if COLOR else ""


def dim(text: str) -> str:
    return f"{DIM}{text}{RESET}"


def cyan(text: str) -> str:
    return f"{CYAN}{text}{RESET}"
