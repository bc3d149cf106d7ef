"""Layered TOML configuration.

``config/default.toml`` is the base layer and ``config/{ITEMS_ENV}.toml``
is merged over it. Both are optional; the environment variable layer on
top is handled by pydantic-settings.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

DEFAULT_ENV = "development"
SEARCH_DEPTH = 5


def find_config_dir() -> Path | None:
    """Locate the config directory.

    ``ITEMS_CONFIG_DIR`` wins and must exist. Otherwise the nearest
    ``config/`` at or above the working directory is used.

    Raises:
        FileNotFoundError: If ITEMS_CONFIG_DIR names a missing directory
    """
    explicit = os.environ.get("ITEMS_CONFIG_DIR")
    if explicit:
        path = Path(explicit)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {explicit}")
        return path

    here = Path.cwd()
    for candidate in [here, *here.parents][:SEARCH_DEPTH]:
        if (candidate / "config").is_dir():
            return candidate / "config"
    return None


def _read_layer(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    with path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base; nested tables merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config(config_dir: Path | None = None, env: str | None = None) -> dict[str, Any]:
    """Read the default and per-environment TOML layers.

    Args:
        config_dir: Directory holding the TOML files; located with
            find_config_dir() when omitted
        env: Environment layer name; ITEMS_ENV or "development" when omitted

    Returns:
        The merged tables, empty when no config directory or file exists

    Raises:
        tomllib.TOMLDecodeError: If a file exists but is not valid TOML
    """
    config_dir = config_dir or find_config_dir()
    if config_dir is None:
        return {}

    env = env or os.environ.get("ITEMS_ENV", DEFAULT_ENV)
    return deep_merge(
        _read_layer(config_dir / "default.toml"),
        _read_layer(config_dir / f"{env}.toml"),
    )
