# -*- coding: utf-8 -*-
"""Shared pytest fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qt_app():
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def default_config() -> dict:
    from wordsprint.config import get_default_config

    return get_default_config()


class FakeChooser:
    """Scripted file chooser; each queued answer is used once, None means cancel."""

    def __init__(self, journal_answers=None, export_answers=None) -> None:
        self.journal_answers = list(journal_answers or [])
        self.export_answers = list(export_answers or [])
        self.journal_calls: list[Path | None] = []
        self.export_calls: list[tuple[str, Path | None]] = []

    def choose_journal_file(self, current):
        self.journal_calls.append(current)
        return self.journal_answers.pop(0) if self.journal_answers else None

    def choose_export_path(self, suggested_name, directory):
        self.export_calls.append((suggested_name, directory))
        return self.export_answers.pop(0) if self.export_answers else None


class FakeStore:
    """Records writes; ``error`` is raised instead of writing when set."""

    def __init__(self, path: Path = Path("/tmp/WordSprint_Journal.txt")) -> None:
        self.path = path
        self.error: BaseException | None = None
        self.appended: list[tuple[str, str]] = []
        self.exported: list[tuple[str, str]] = []
        self.on_write = None

    def append(self, text: str, prompt: str) -> Path:
        if self.on_write is not None:
            self.on_write()
        if self.error is not None:
            raise self.error
        self.appended.append((text, prompt))
        return self.path

    def save_as(self, text: str, suggested_name: str) -> Path:
        if self.on_write is not None:
            self.on_write()
        if self.error is not None:
            raise self.error
        self.exported.append((text, suggested_name))
        return self.path.with_name(suggested_name)


class FakePrompts:
    """Hands out prompt words in order, wrapping around."""

    def __init__(self, words=("lantern", "harbor", "echo")) -> None:
        self.words = tuple(words)
        self._index = 0

    def next_prompt(self) -> str:
        word = self.words[self._index % len(self.words)]
        self._index += 1
        return word


@pytest.fixture
def fake_chooser() -> FakeChooser:
    return FakeChooser()


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def fake_prompts() -> FakePrompts:
    return FakePrompts()


@pytest.fixture
def clock(qt_app):
    from wordsprint.core.clock import SessionClock

    return SessionClock()


@pytest.fixture
def state(qt_app, fake_store, fake_prompts, clock):
    from wordsprint.core.session_state import SessionState

    return SessionState(store=fake_store, prompts=fake_prompts, clock=clock)


@pytest.fixture
def chooser_factory():
    return FakeChooser
