"""Load BurrowConfig from burrow.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path

from burrow._errors import ConfigError
from burrow.config import LOG_LEVELS, BurrowConfig

_FIELDS = frozenset(f.name for f in fields(BurrowConfig)) - {"root"}


def load_config(root: Path, **overrides: object) -> BurrowConfig:
    """Load BurrowConfig from root, optionally merging burrow.yaml.

    Looks for burrow.yaml, burrow.yml, or burrow.toml in root. If found, loads
    and merges with overrides. Overrides take precedence; ``None`` overrides
    are ignored so unset CLI flags fall through to the file.

    Raises:
        ConfigError: On unknown keys or an unsupported log level.

    """
    file_config = _read_burrow_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}

    unknown = sorted(set(merged) - _FIELDS)
    if unknown:
        msg = f"Unknown burrow config keys: {', '.join(unknown)}"
        raise ConfigError(msg)

    # Normalize output to Path and layers to a tuple
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    if "layers" in merged:
        layers = merged["layers"]
        merged["layers"] = (layers,) if isinstance(layers, str) else tuple(layers)  # type: ignore[arg-type]

    level = merged.get("log_level", "info")
    if level not in LOG_LEVELS:
        msg = f"log_level must be one of {', '.join(LOG_LEVELS)}, got {level!r}"
        raise ConfigError(msg)

    return BurrowConfig(root=root, **merged)  # type: ignore[arg-type]


def _read_burrow_config(root: Path) -> dict[str, object]:
    """Read burrow config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("burrow.yaml", "burrow.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "burrow.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config.

    Raises:
        ConfigError: If the file is not valid YAML.

    """
    import yaml

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        return {}
    return _flatten_burrow_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config.

    Raises:
        ConfigError: If the file is not valid TOML.

    """
    import tomllib

    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_burrow_section(data)


def _flatten_burrow_section(data: dict[str, object]) -> dict[str, object]:
    """Extract burrow.* keys into top-level config.

    Top-level keys are only picked up when they name a config field, so a
    shared file can carry settings for other tools.
    """
    result: dict[str, object] = {}
    for k, v in data.items():
        if k != "burrow" and k in _FIELDS:
            result[k] = v
    section = data.get("burrow")
    if isinstance(section, dict):
        result.update(section)
    return result
