# -*- coding: utf-8 -*-
"""Writing session data model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wordsprint.constants import DEFAULT_DURATION_SECONDS


class SessionPhase(str, Enum):
    """Phase derived from the session flags; never stored."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    EXPIRED = "expired"


@dataclass
class Session:
    """Mutable state of the single live writing session."""

    started: bool = False
    active: bool = False
    prompt: str = ""
    remaining_seconds: int = DEFAULT_DURATION_SECONDS
    selected_duration_seconds: int = DEFAULT_DURATION_SECONDS
    text: str = ""
    unsaved: bool = False
    restricted_mode: bool = False

    @property
    def phase(self) -> SessionPhase:
        if not self.started:
            return SessionPhase.NOT_STARTED
        if self.active:
            return SessionPhase.RUNNING
        if self.remaining_seconds > 0:
            return SessionPhase.PAUSED
        return SessionPhase.EXPIRED

    def snapshot(self) -> tuple[str, bool, bool, int]:
        """Fields a cancelled quit must leave untouched."""
        return (self.text, self.unsaved, self.started, self.remaining_seconds)
