# -*- coding: utf-8 -*-
"""Tests for config persistence and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from wordsprint.config import (
    ConfigError,
    get_default_config,
    load_config,
    save_config,
    validate_config,
)


def test_default_config_has_all_keys() -> None:
    config = get_default_config()
    assert {"journal", "modes", "appearance", "filename", "hotkeys"}.issubset(config.keys())


def test_default_config_is_a_fresh_copy() -> None:
    first = get_default_config()
    first["journal"]["path"] = "/elsewhere.txt"
    assert get_default_config()["journal"]["path"] == ""


def test_save_config_creates_json_file(tmp_path: Path, default_config: dict) -> None:
    target = tmp_path / "settings.json"
    save_config(default_config, target)
    assert target.exists()


def test_journal_settings_persisted(tmp_path: Path, default_config: dict) -> None:
    target = tmp_path / "settings.json"
    default_config["journal"]["path"] = str(tmp_path / "journal.txt")
    default_config["journal"]["always_prompt"] = False
    save_config(default_config, target)
    loaded = load_config(target)
    assert loaded["journal"]["path"] == str(tmp_path / "journal.txt")
    assert loaded["journal"]["always_prompt"] is False


def test_modes_and_theme_persisted(tmp_path: Path, default_config: dict) -> None:
    target = tmp_path / "settings.json"
    default_config["modes"]["mandala"] = True
    default_config["modes"]["typewriter"] = True
    default_config["appearance"]["dark_mode"] = True
    save_config(default_config, target)
    loaded = load_config(target)
    assert loaded["modes"] == {"mandala": True, "typewriter": True}
    assert loaded["appearance"]["dark_mode"] is True


def test_filename_order_persisted(tmp_path: Path, default_config: dict) -> None:
    target = tmp_path / "settings.json"
    default_config["filename"]["order"] = ["date", "time", "prompt", "custom_prefix", "app_prefix"]
    save_config(default_config, target)
    loaded = load_config(target)
    assert loaded["filename"]["order"] == ["date", "time", "prompt", "custom_prefix", "app_prefix"]


def test_hotkeys_persisted(tmp_path: Path, default_config: dict) -> None:
    target = tmp_path / "settings.json"
    default_config["hotkeys"]["save"] = "Alt+S"
    save_config(default_config, target)
    loaded = load_config(target)
    assert loaded["hotkeys"]["save"] == "Alt+S"


def test_partial_file_is_merged_into_defaults(tmp_path: Path) -> None:
    target = tmp_path / "settings.json"
    target.write_text(json.dumps({"modes": {"typewriter": True}}), encoding="utf-8")
    loaded = load_config(target)
    assert loaded["modes"]["typewriter"] is True
    assert loaded["modes"]["mandala"] is False
    assert loaded["journal"]["always_prompt"] is True


def test_non_boolean_flag_rejected(default_config: dict) -> None:
    default_config["modes"]["mandala"] = "yes"
    with pytest.raises(ConfigError):
        validate_config(default_config)


def test_non_string_journal_path_rejected(default_config: dict) -> None:
    default_config["journal"]["path"] = 42
    with pytest.raises(ConfigError):
        validate_config(default_config)


def test_incomplete_filename_order_rejected(default_config: dict) -> None:
    default_config["filename"]["order"] = ["prompt", "date"]
    with pytest.raises(ConfigError):
        validate_config(default_config)


def test_invalid_file_rejected_on_load(tmp_path: Path) -> None:
    target = tmp_path / "settings.json"
    target.write_text(json.dumps({"appearance": {"dark_mode": "on"}}), encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(target)


def test_load_config_returns_defaults_when_file_missing(tmp_path: Path) -> None:
    loaded = load_config(tmp_path / "missing.json")
    assert loaded["journal"]["path"] == ""
    assert loaded["modes"]["mandala"] is False


def test_load_config_reads_journal_path_from_env(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("WORDSPRINT_JOURNAL_PATH=/data/journal.txt\n", encoding="utf-8")
    loaded = load_config(tmp_path / "settings.json")
    assert loaded["journal"]["path"] == "/data/journal.txt"


def test_load_config_reads_mandala_mode_from_env(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("WORDSPRINT_MANDALA_MODE=true\n", encoding="utf-8")
    loaded = load_config(tmp_path / "settings.json")
    assert loaded["modes"]["mandala"] is True


def test_env_values_are_not_written_back(tmp_path: Path, default_config: dict) -> None:
    target = tmp_path / "settings.json"
    default_config["journal"]["path"] = "/home/me/journal.txt"
    save_config(default_config, target)
    (tmp_path / ".env").write_text("WORDSPRINT_JOURNAL_PATH=/data/journal.txt\n", encoding="utf-8")

    loaded = load_config(target)
    save_config(loaded, target)

    on_disk = json.loads(target.read_text(encoding="utf-8"))
    assert on_disk["journal"]["path"] == "/home/me/journal.txt"
    assert "_env_overrides" not in on_disk


def test_value_changed_after_env_override_is_kept(tmp_path: Path) -> None:
    target = tmp_path / "settings.json"
    (tmp_path / ".env").write_text("WORDSPRINT_JOURNAL_PATH=/data/journal.txt\n", encoding="utf-8")

    loaded = load_config(target)
    loaded["journal"]["path"] = "/picked/by/user.txt"
    save_config(loaded, target)

    on_disk = json.loads(target.read_text(encoding="utf-8"))
    assert on_disk["journal"]["path"] == "/picked/by/user.txt"
