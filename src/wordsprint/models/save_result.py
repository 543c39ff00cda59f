# -*- coding: utf-8 -*-
"""Save outcome and decision models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class SaveReason(str, Enum):
    MANUAL = "manual"
    ON_EXPIRY = "on_expiry"
    ON_RESET = "on_reset"
    ON_QUIT = "on_quit"


class SaveStatus(str, Enum):
    SAVED = "saved"
    NOTHING_TO_SAVE = "nothing_to_save"
    DISABLED = "disabled"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class SaveOutcome:
    """Result of one save attempt. Failures are values, never exceptions."""

    status: SaveStatus
    path: Path | None = None
    detail: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status in {SaveStatus.SAVED, SaveStatus.NOTHING_TO_SAVE}

    @property
    def permits_discard(self) -> bool:
        """Whether a pending reset or quit may go ahead after this outcome."""
        return self.succeeded or self.status is SaveStatus.DISABLED


class ExpiryChoice(str, Enum):
    KEEP_WRITING = "keep_writing"
    SAVE = "save"
    NEW_PROMPT_DISCARD = "new_prompt_discard"
    CANCEL = "cancel"


class ResetChoice(str, Enum):
    SAVE_THEN_RESET = "save_then_reset"
    DISCARD_THEN_RESET = "discard_then_reset"
    CANCEL = "cancel"


class QuitChoice(str, Enum):
    SAVE_AND_QUIT = "save_and_quit"
    DISCARD_AND_QUIT = "discard_and_quit"
    CANCEL = "cancel"


@dataclass(frozen=True)
class ResetDecision:
    """Either the reset already happened, or the user must pick from choices."""

    performed: bool
    choices: tuple[ResetChoice, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class QuitDecision:
    """Either quitting may proceed now, or the user must pick from choices."""

    proceed: bool
    choices: tuple[QuitChoice, ...] = field(default_factory=tuple)
