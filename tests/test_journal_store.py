# -*- coding: utf-8 -*-
"""Tests for journal appends and exports."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from wordsprint.core.journal_store import (
    JournalLocation,
    JournalStore,
    JournalUnavailableError,
    SaveCancelledError,
    format_entry,
)

WHEN = datetime(2026, 3, 14, 9, 5, 7)


def _store(location: Path | None, chooser=None, **kwargs) -> JournalStore:
    return JournalStore(
        location=JournalLocation.from_path(location) if location is not None else None,
        chooser=chooser,
        now=lambda: WHEN,
        **kwargs,
    )


def test_format_entry_layout() -> None:
    entry = format_entry("It was raining.", "harbor", WHEN)
    assert entry == "\n\n--- Entry: 2026-03-14 09:05:07 | Prompt: harbor ---\nIt was raining.\n"


def test_location_setting_round_trip(tmp_path: Path) -> None:
    location = JournalLocation.from_path(tmp_path / "journal.txt")
    assert JournalLocation.from_setting(location.to_setting()) == location
    assert location.display_name == "journal.txt"
    assert JournalLocation.from_setting("   ") is None


def test_append_writes_to_configured_journal(tmp_path: Path) -> None:
    journal = tmp_path / "journal.txt"
    store = _store(journal, always_prompt=False)

    assert store.append("First words.", "lantern") == journal
    assert journal.read_text(encoding="utf-8") == format_entry("First words.", "lantern", WHEN)


def test_append_keeps_previous_entries(tmp_path: Path) -> None:
    journal = tmp_path / "journal.txt"
    journal.write_text("Existing notes.\n", encoding="utf-8")
    store = _store(journal, always_prompt=False)

    store.append("One.", "echo")
    store.append("Two.", "ember")

    content = journal.read_text(encoding="utf-8")
    assert content.startswith("Existing notes.\n")
    assert content.count("--- Entry: ") == 2
    assert content.index("One.") < content.index("Two.")


def test_always_prompt_asks_chooser_every_time(tmp_path: Path, chooser_factory) -> None:
    chosen = tmp_path / "picked.txt"
    chooser = chooser_factory(journal_answers=[chosen, chosen])
    store = _store(tmp_path / "journal.txt", chooser, always_prompt=True)

    store.append("One.", "echo")
    store.append("Two.", "echo")

    assert len(chooser.journal_calls) == 2
    assert chosen.read_text(encoding="utf-8").count("--- Entry: ") == 2


def test_no_location_asks_chooser(tmp_path: Path, chooser_factory) -> None:
    chosen = tmp_path / "new_journal.txt"
    changes: list[JournalLocation] = []
    store = _store(None, chooser_factory(journal_answers=[chosen]), always_prompt=False, on_location_changed=changes.append)

    assert store.append("Words.", "salt") == chosen
    assert store.location == JournalLocation.from_path(chosen)
    assert changes == [JournalLocation.from_path(chosen)]


def test_cancelled_chooser_raises_and_writes_nothing(tmp_path: Path, chooser_factory) -> None:
    store = _store(None, chooser_factory(), always_prompt=True)
    with pytest.raises(SaveCancelledError):
        store.append("Words.", "salt")
    assert list(tmp_path.iterdir()) == []


def test_missing_folder_triggers_reselection(tmp_path: Path, chooser_factory) -> None:
    gone = tmp_path / "removed" / "journal.txt"
    replacement = tmp_path / "journal.txt"
    chooser = chooser_factory(journal_answers=[replacement])
    changes: list[JournalLocation] = []
    store = _store(gone, chooser, always_prompt=False, on_location_changed=changes.append)

    assert store.append("Words.", "frost") == replacement
    assert chooser.journal_calls == [gone]
    assert changes == [JournalLocation.from_path(replacement)]
    assert "Words." in replacement.read_text(encoding="utf-8")


def test_missing_folder_with_cancelled_reselection_is_unavailable(tmp_path: Path, chooser_factory) -> None:
    gone = tmp_path / "removed" / "journal.txt"
    store = _store(gone, chooser_factory(), always_prompt=False)
    with pytest.raises(JournalUnavailableError):
        store.append("Words.", "frost")
    assert store.location == JournalLocation.from_path(gone)


def test_prompt_mode_unavailable_pick_fails_without_reselection(tmp_path: Path, chooser_factory) -> None:
    gone = tmp_path / "removed" / "journal.txt"
    chooser = chooser_factory(journal_answers=[gone, tmp_path / "journal.txt"])
    store = _store(None, chooser, always_prompt=True)
    with pytest.raises(JournalUnavailableError):
        store.append("Words.", "frost")
    assert chooser.journal_calls == [None]
    assert list(tmp_path.iterdir()) == []


def test_directory_as_journal_is_unavailable(tmp_path: Path) -> None:
    store = _store(tmp_path, always_prompt=False)
    with pytest.raises(JournalUnavailableError):
        with store.resolve():
            pass


def test_resolve_without_location_is_unavailable() -> None:
    with pytest.raises(JournalUnavailableError):
        with _store(None).resolve():
            pass


def test_save_as_writes_standalone_file(tmp_path: Path, chooser_factory) -> None:
    target = tmp_path / "export"
    chooser = chooser_factory(export_answers=[target])
    store = _store(tmp_path / "journal.txt", chooser)

    written = store.save_as("Whole draft.", "WordSprint_lantern.txt")

    assert written == tmp_path / "export.txt"
    assert written.read_text(encoding="utf-8") == "Whole draft."
    assert chooser.export_calls == [("WordSprint_lantern.txt", tmp_path)]


def test_save_as_cancelled(tmp_path: Path, chooser_factory) -> None:
    store = _store(tmp_path / "journal.txt", chooser_factory())
    with pytest.raises(SaveCancelledError):
        store.save_as("Whole draft.", "WordSprint_lantern.txt")
