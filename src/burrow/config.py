"""Burrow configuration.

BurrowConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

LOG_LEVELS = ("error", "warn", "info", "debug")


@dataclass(frozen=True, slots=True)
class BurrowConfig:
    """Configuration for a Burrow project.

    Attributes:
        root: Project root.  Always resolved to an absolute path on
            construction.
        src_dir: Source directory holding ``pages/`` and ``entrypoints/``.
        driver: Name of the framework driver (see ``burrow.drivers``).
        layers: Extra source directories scanned after ``src_dir``, relative
            to ``root`` unless absolute.  Later layers override earlier
            routes with the same path.
        output: Output directory for ``burrow build``.
        watch: Rebuild routes on file changes in dev mode.
        strict: Fail a build pass that finds conflicting routes.
        log_level: One of ``error``, ``warn``, ``info``, ``debug``.
        host: Bind address for the dev server.
        port: Bind port for the dev server.

    """

    root: Path = field(default_factory=Path.cwd)
    src_dir: str = "src"
    driver: str = "vue"
    layers: tuple[str, ...] = ()
    output: Path = field(default_factory=lambda: Path("generated/routes"))
    watch: bool = True
    strict: bool = False
    log_level: str = "info"
    host: str = "127.0.0.1"
    port: int = 5180

    def __post_init__(self) -> None:
        # watchfiles reports absolute paths; keep root comparable.
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())

    @property
    def source_path(self) -> Path:
        """Absolute path to the main source directory."""
        return self.root / self.src_dir

    @property
    def source_paths(self) -> tuple[Path, ...]:
        """Main source directory followed by every layer, in scan order."""
        layers = tuple(self.root / layer for layer in self.layers)
        return (self.source_path, *layers)

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output
