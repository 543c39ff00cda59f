# -*- coding: utf-8 -*-
"""Append writing sessions to the journal file."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol

from wordsprint.utils.file_utils import append_text_file, write_text_file

logger = logging.getLogger(__name__)

ENTRY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class JournalError(Exception):
    """Base class for journal persistence problems."""


class SaveCancelledError(JournalError):
    """The user dismissed the file chooser without picking a location."""


class JournalUnavailableError(JournalError):
    """The configured journal location cannot be used any more."""


class FileChooser(Protocol):
    def choose_journal_file(self, current: Path | None) -> Path | None:
        """Return the journal file to append to, or None when cancelled."""

    def choose_export_path(self, suggested_name: str, directory: Path | None) -> Path | None:
        """Return a file path for a standalone export, or None when cancelled."""


@dataclass(frozen=True)
class JournalLocation:
    """Opaque, persistable reference to the journal file."""

    reference: str

    @classmethod
    def from_setting(cls, value: str | None) -> JournalLocation | None:
        value = (value or "").strip()
        return cls(value) if value else None

    @classmethod
    def from_path(cls, path: Path) -> JournalLocation:
        return cls(str(Path(path).expanduser()))

    def to_setting(self) -> str:
        return self.reference

    @property
    def display_name(self) -> str:
        return Path(self.reference).name


def format_entry(text: str, prompt: str, when: datetime) -> str:
    """Render one journal block; leading blank lines separate it from the last."""
    stamp = when.strftime(ENTRY_TIMESTAMP_FORMAT)
    return f"\n\n--- Entry: {stamp} | Prompt: {prompt} ---\n{text}\n"


class JournalStore:
    """Own every file the app writes to.

    With ``always_prompt`` (or no configured journal) each append asks the
    chooser which file to use. Otherwise it writes straight to the configured
    journal, and only asks the chooser again when that location has become
    unavailable.
    """

    def __init__(
        self,
        location: JournalLocation | None = None,
        chooser: FileChooser | None = None,
        always_prompt: bool = True,
        now: Callable[[], datetime] = datetime.now,
        on_location_changed: Callable[[JournalLocation], None] | None = None,
    ) -> None:
        self._location = location
        self.chooser = chooser
        self.always_prompt = always_prompt
        self._now = now
        self.on_location_changed = on_location_changed

    @property
    def location(self) -> JournalLocation | None:
        return self._location

    def set_location(self, location: JournalLocation | None) -> None:
        self._location = location

    @contextmanager
    def resolve(self, location: JournalLocation | None = None) -> Iterator[Path]:
        """Acquire the journal location for the duration of the block."""
        location = location or self._location
        if location is None:
            raise JournalUnavailableError("No journal file has been chosen")
        path = Path(location.reference).expanduser()
        if not path.parent.is_dir():
            raise JournalUnavailableError(f"Journal folder is missing: {path.parent}")
        if path.exists() and not path.is_file():
            raise JournalUnavailableError(f"Journal path is not a file: {path}")
        target = path if path.exists() else path.parent
        if not os.access(target, os.W_OK):
            raise JournalUnavailableError(f"No permission to write to {target}")
        logger.debug("Acquired journal location %s", path)
        try:
            yield path
        finally:
            logger.debug("Released journal location %s", path)

    def append(self, text: str, prompt: str) -> Path:
        """Append one entry and return the journal path.

        Raises SaveCancelledError, JournalUnavailableError or OSError.
        """
        entry = format_entry(text, prompt, self._now())
        if self._location is None or self.always_prompt:
            return self._write_entry(self._choose_journal(), entry)

        try:
            return self._write_entry(self._location, entry)
        except JournalUnavailableError as exc:
            logger.warning("Configured journal unavailable, asking for a new one: %s", exc)
            try:
                replacement = self._choose_journal()
            except SaveCancelledError:
                raise JournalUnavailableError(f"{exc}; no replacement journal was chosen") from exc
            return self._write_entry(replacement, entry)

    def save_as(self, text: str, suggested_name: str) -> Path:
        """Write ``text`` to a new file picked through the chooser."""
        if self.chooser is None:
            raise JournalUnavailableError("No file chooser available for export")
        directory = Path(self._location.reference).expanduser().parent if self._location else None
        chosen = self.chooser.choose_export_path(suggested_name, directory)
        if chosen is None:
            raise SaveCancelledError("Export cancelled by user")
        path = Path(chosen)
        if path.suffix.lower() != ".txt":
            path = path.with_name(path.name + ".txt")
        write_text_file(path, text)
        logger.info("Exported writing to %s", path)
        return path

    def _choose_journal(self) -> JournalLocation:
        if self.chooser is None:
            raise JournalUnavailableError("No journal file has been chosen")
        current = Path(self._location.reference).expanduser() if self._location else None
        chosen = self.chooser.choose_journal_file(current)
        if chosen is None:
            raise SaveCancelledError("Save cancelled by user")
        return JournalLocation.from_path(chosen)

    def _write_entry(self, location: JournalLocation, entry: str) -> Path:
        with self.resolve(location) as path:
            append_text_file(path, entry)
        logger.info("Appended %d chars to journal %s", len(entry), path)
        if location != self._location:
            self._location = location
            if self.on_location_changed is not None:
                self.on_location_changed(location)
        return path
