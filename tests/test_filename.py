# -*- coding: utf-8 -*-
"""Tests for export filename building."""

from __future__ import annotations

from datetime import datetime

from wordsprint.core.filename import build_filename, sanitize_custom_prefix, sanitize_prompt

WHEN = datetime(2026, 3, 14, 9, 5, 7)


def test_default_structure() -> None:
    assert build_filename("lantern", WHEN) == "WordSprint_lantern_2026-03-14_09-05-07.txt"


def test_default_structure_ignores_custom_flags(default_config: dict) -> None:
    options = default_config["filename"]
    options["include_custom_prefix"] = True
    options["custom_prefix"] = "draft"
    options["order"] = ["time", "date", "prompt", "custom_prefix", "app_prefix"]
    assert build_filename("lantern", WHEN, options) == "WordSprint_lantern_2026-03-14_09-05-07.txt"


def test_custom_structure_follows_order(default_config: dict) -> None:
    options = default_config["filename"]
    options.update(
        use_default_structure=False,
        include_app_prefix=False,
        include_custom_prefix=True,
        custom_prefix="morning pages!",
        include_time=False,
        order=["date", "custom_prefix", "prompt", "app_prefix", "time"],
    )
    assert build_filename("lantern", WHEN, options) == "2026-03-14_morningpages_lantern.txt"


def test_everything_disabled_falls_back(default_config: dict) -> None:
    options = default_config["filename"]
    options.update(
        use_default_structure=False,
        include_app_prefix=False,
        include_prompt=False,
        include_date=False,
        include_time=False,
    )
    assert build_filename("lantern", WHEN, options) == "WordSprint_Save.txt"


def test_missing_components_are_appended_to_order(default_config: dict) -> None:
    options = default_config["filename"]
    options.update(use_default_structure=False, include_time=False, order=["prompt"])
    assert build_filename("lantern", WHEN, options) == "lantern_WordSprint_2026-03-14.txt"


def test_sanitize_prompt() -> None:
    assert sanitize_prompt("sea glass") == "sea_glass"
    assert sanitize_prompt("") == "Writing"


def test_sanitize_custom_prefix() -> None:
    assert sanitize_custom_prefix("  my-notes_1 ") == "my-notes_1"
    assert sanitize_custom_prefix("a/b\\c") == "abc"
