# -*- coding: utf-8 -*-
"""Settings persistence and validation."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any

from wordsprint.constants import DEFAULT_HOTKEYS, DEFAULT_SETTINGS_FILE, FILENAME_COMPONENTS
from wordsprint.utils.file_utils import read_json_file, write_json_file


DEFAULT_CONFIG: dict[str, Any] = {
    "journal": {"path": "", "always_prompt": True},
    "modes": {"mandala": False, "typewriter": False},
    "appearance": {"dark_mode": False},
    "filename": {
        "use_default_structure": True,
        "include_app_prefix": True,
        "include_custom_prefix": False,
        "custom_prefix": "",
        "include_prompt": True,
        "include_date": True,
        "include_time": True,
        "order": list(FILENAME_COMPONENTS),
    },
    "hotkeys": deepcopy(DEFAULT_HOTKEYS),
}

_BOOL_FIELDS = (
    ("journal", "always_prompt"),
    ("modes", "mandala"),
    ("modes", "typewriter"),
    ("appearance", "dark_mode"),
    ("filename", "use_default_structure"),
    ("filename", "include_app_prefix"),
    ("filename", "include_custom_prefix"),
    ("filename", "include_prompt"),
    ("filename", "include_date"),
    ("filename", "include_time"),
)

# Values that came from .env and must never be written back to settings.json.
_ENV_OVERRIDES_KEY = "_env_overrides"


class ConfigError(ValueError):
    """Raised when settings are invalid."""


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default config."""
    return deepcopy(DEFAULT_CONFIG)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load a simple .env file (KEY=VALUE)."""
    values: dict[str, str] = {}
    if not env_path.exists():
        return values

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue
        if (value.startswith('"') and value.endswith('"')) or (
            value.startswith("'") and value.endswith("'")
        ):
            value = value[1:-1]
        values[key] = value
    return values


def _apply_env_overrides(config: dict[str, Any], env_values: dict[str, str]) -> dict[str, Any]:
    """Apply environment-based overrides to runtime config."""
    merged = deepcopy(config)
    overrides: dict[str, Any] = {}
    journal_path = env_values.get("WORDSPRINT_JOURNAL_PATH", "").strip()
    mandala = env_values.get("WORDSPRINT_MANDALA_MODE", "").strip().lower()

    if journal_path:
        overrides["journal.path"] = [merged["journal"]["path"], journal_path]
        merged["journal"]["path"] = journal_path
    if mandala:
        enabled = mandala in {"1", "true", "yes", "on"}
        overrides["modes.mandala"] = [merged["modes"]["mandala"], enabled]
        merged["modes"]["mandala"] = enabled
    if overrides:
        merged[_ENV_OVERRIDES_KEY] = overrides
    return merged


def validate_config(config: dict[str, Any]) -> None:
    """Validate the fields the session and journal rely on."""
    for section, key in _BOOL_FIELDS:
        value = config.get(section, {}).get(key)
        if not isinstance(value, bool):
            raise ConfigError(f"{section}.{key} must be true or false")

    journal_path = config.get("journal", {}).get("path")
    if not isinstance(journal_path, str):
        raise ConfigError("journal.path must be a string")

    custom_prefix = config.get("filename", {}).get("custom_prefix")
    if not isinstance(custom_prefix, str):
        raise ConfigError("filename.custom_prefix must be a string")

    order = config.get("filename", {}).get("order")
    if not isinstance(order, list) or sorted(order) != sorted(FILENAME_COMPONENTS):
        raise ConfigError(
            "filename.order must list each of " + ", ".join(FILENAME_COMPONENTS) + " exactly once"
        )

    hotkeys = config.get("hotkeys")
    if not isinstance(hotkeys, dict) or not all(isinstance(v, str) for v in hotkeys.values()):
        raise ConfigError("hotkeys must map action names to key sequences")


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load config from JSON and merge into defaults."""
    config_path = Path(path or DEFAULT_SETTINGS_FILE)
    env_values = _load_env_file(config_path.parent / ".env")
    if not config_path.exists():
        return _apply_env_overrides(get_default_config(), env_values)

    loaded = read_json_file(config_path)
    merged = _deep_merge(get_default_config(), loaded)
    validate_config(merged)
    return _apply_env_overrides(merged, env_values)


def _strip_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Restore file values that .env replaced at load time.

    A value the user changed after loading is kept.
    """
    config_copy = deepcopy(config)
    overrides = config_copy.pop(_ENV_OVERRIDES_KEY, {})
    for dotted, (original, from_env) in overrides.items():
        section, key = dotted.split(".", 1)
        target = config_copy.setdefault(section, {})
        if target.get(key) == from_env:
            target[key] = original
    return config_copy


def save_config(config: dict[str, Any], path: str | Path | None = None) -> Path:
    """Validate and save config as JSON, without .env overrides.

    Values supplied through .env stay in .env; settings.json keeps whatever the
    file held before they were applied.
    """
    validate_config(config)
    config_path = Path(path or DEFAULT_SETTINGS_FILE)
    write_json_file(config_path, _strip_env_overrides(config))
    return config_path
