"""
YAML → settings dict loader.

Loads program settings from settings.yaml (bundled with the package) and
optionally merges user overrides from ~/.beyond-normal/settings.yaml, then
an explicitly given file on top.

Usage:
    from beyond_normal.core.engine.config_loader import load_settings_config
    cfg = load_settings_config()
    bar = cfg.get("bar", {}).get("weight", 45.0)

If a YAML file cannot be read or parsed, a warning is issued and the file
is ignored; lookups then fall back to the Python defaults in config.py.
"""

from __future__ import annotations

import importlib.resources
import os
import warnings
from pathlib import Path
from typing import Any

import yaml

USER_DIR_NAME = ".beyond-normal"
SETTINGS_FILE_NAME = "settings.yaml"

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} on error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(
            f"beyond-normal: ignoring settings file {path} ({exc})",
            stacklevel=2,
        )
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        warnings.warn(
            f"beyond-normal: ignoring settings file {path} (top level is not a mapping)",
            stacklevel=2,
        )
        return {}
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled settings.yaml, or None if not found."""
    ref = importlib.resources.files("beyond_normal").joinpath(SETTINGS_FILE_NAME)
    if not ref.is_file():
        return None
    return Path(str(ref))


def get_user_yaml_path() -> Path | None:
    """Return ~/.beyond-normal/settings.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / USER_DIR_NAME / SETTINGS_FILE_NAME
    return p if p.exists() else None


def load_settings_config(extra_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load and merge settings from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/beyond_normal/settings.yaml
    2. User override at ~/.beyond-normal/settings.yaml
    3. extra_path, when given

    Returns:
        Merged dict of settings sections.  Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = _deep_merge(config, _load_yaml_file(bundled))

    user = get_user_yaml_path()
    if user is not None:
        config = _deep_merge(config, _load_yaml_file(user))

    if extra_path is not None:
        config = _deep_merge(config, _load_yaml_file(Path(extra_path)))

    return config
