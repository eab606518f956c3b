"""Configuration management — TOML config at ~/.config/treecomplete/treecomplete.toml."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import tomli_w

from treecomplete.core.exceptions import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

_DEFAULT_CONFIG: dict[str, Any] = {
    "catalog": {
        "path": "~/.local/share/treecomplete/catalog",
        "root_name": "az",
        "root_description": "Root command",
    },
    "logging": {
        "level": "WARNING",
        "file": "",
    },
}

# Keys accepted by `treecomplete config set`
SETTABLE_KEYS = ("catalog.path", "catalog.root_name", "catalog.root_description", "logging.level", "logging.file")


def get_config_dir() -> Path:
    """Return the config directory, creating it if needed."""
    config_dir = Path(os.environ.get("TREECOMPLETE_CONFIG_DIR", "~/.config/treecomplete")).expanduser()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_path() -> Path:
    """Return the path to the config TOML file."""
    return get_config_dir() / "treecomplete.toml"


def get_catalog_dir(config: dict[str, Any] | None = None) -> Path:
    """Return the catalog root directory. Not created: the harvester owns it."""
    if config is None:
        config = load_config()
    return Path(config.get("catalog", {}).get("path", _DEFAULT_CONFIG["catalog"]["path"])).expanduser()


def get_history_path() -> Path:
    """Return the path to the interactive shell history file."""
    return get_config_dir() / "history"


def load_config() -> dict[str, Any]:
    """Load configuration from TOML file, returning defaults if not found."""
    config_path = get_config_path()
    if not config_path.exists():
        return _deep_copy_dict(_DEFAULT_CONFIG)
    try:
        with open(config_path, "rb") as f:
            user_config = tomllib.load(f)
        return _merge_config(_deep_copy_dict(_DEFAULT_CONFIG), user_config)
    except Exception as e:
        raise ConfigError(f"Failed to load config: {e}") from e


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to TOML file."""
    config_path = get_config_path()
    try:
        with open(config_path, "wb") as f:
            tomli_w.dump(config, f)
    except Exception as e:
        raise ConfigError(f"Failed to save config: {e}") from e


def update_config(**sections: dict[str, Any]) -> dict[str, Any]:
    """Merge per-section settings into the saved config and return the result.

    Usage: update_config(catalog={"path": "/opt/az-catalog"}, logging={"level": "DEBUG"})
    """
    config = _merge_config(load_config(), sections)
    save_config(config)
    return config


def set_value(key: str, value: str) -> dict[str, Any]:
    """Set a dotted `section.name` key and persist it."""
    if key not in SETTABLE_KEYS:
        raise ConfigError(f"Unknown config key: {key}. Valid keys: {', '.join(SETTABLE_KEYS)}")
    section, name = key.split(".", 1)
    return update_config(**{section: {name: value}})


def _merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_config(base[key], value)
        else:
            base[key] = value
    return base


def _deep_copy_dict(d: dict[str, Any]) -> dict[str, Any]:
    """Simple deep copy for nested dicts of simple types."""
    result: dict[str, Any] = {}
    for k, v in d.items():
        if isinstance(v, dict):
            result[k] = _deep_copy_dict(v)
        else:
            result[k] = v
    return result
