# -*- coding: utf-8 -*-
"""Session and save lifecycle for a writing sprint.

Every user-visible transition goes through :class:`SessionState`: starting,
pausing and resuming the countdown, the decision points raised on expiry,
reset and quit, and every save. Store failures are caught here and turned
into :class:`SaveOutcome` values, so ``text`` and ``unsaved`` only change on a
confirmed save.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from PyQt6.QtCore import QObject, pyqtSignal

from wordsprint.constants import STATUS_DETAIL_MAX_CHARS, TIMER_DURATIONS
from wordsprint.core.activity import SessionActivity
from wordsprint.core.clock import SessionClock
from wordsprint.core.filename import build_filename
from wordsprint.core.journal_store import JournalError, JournalStore, SaveCancelledError
from wordsprint.core.prompts import PromptSource
from wordsprint.models.save_result import (
    ExpiryChoice,
    QuitChoice,
    QuitDecision,
    ResetChoice,
    ResetDecision,
    SaveOutcome,
    SaveReason,
    SaveStatus,
)
from wordsprint.models.session import Session, SessionPhase

logger = logging.getLogger(__name__)

MANDALA_SAVE_DISABLED = "Mandala Mode: Saving is disabled."

_FAILURE_SUFFIX = {
    SaveReason.ON_RESET: " Not starting over.",
    SaveReason.ON_QUIT: " Not quitting.",
}


class SessionError(RuntimeError):
    """An operation was requested in a phase that does not allow it."""


class SaveInProgressError(SessionError):
    """A save was requested while another one is still running."""


class SessionState(QObject):
    """State machine for one writing session."""

    phase_changed = pyqtSignal(str)
    remaining_changed = pyqtSignal(int)
    prompt_changed = pyqtSignal(str)
    text_replaced = pyqtSignal(str)
    unsaved_changed = pyqtSignal(bool)
    saving_changed = pyqtSignal(bool)
    expired = pyqtSignal()
    status_message = pyqtSignal(str)

    def __init__(
        self,
        store: JournalStore,
        prompts: PromptSource,
        clock: SessionClock | None = None,
        activity: SessionActivity | None = None,
        restricted_mode: bool = False,
        filename_options: dict[str, Any] | None = None,
        now: Callable[[], datetime] = datetime.now,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._prompts = prompts
        self._clock = clock or SessionClock(parent=self)
        self._activity = activity or SessionActivity(self)
        self._filename_options = dict(filename_options or {})
        self._now = now
        self._session = Session(restricted_mode=restricted_mode)
        self._phase = self._session.phase
        self._saving = False
        self._resume_after_quit_cancel = False
        self.last_status = ""

        self._clock.ticked.connect(self._on_clock_ticked)
        self._clock.active_changed.connect(self._on_clock_active_changed)
        self._clock.expired.connect(self._on_clock_expired)

    # -- read-only view -------------------------------------------------

    @property
    def session(self) -> Session:
        return self._session

    @property
    def activity(self) -> SessionActivity:
        return self._activity

    @property
    def phase(self) -> SessionPhase:
        return self._session.phase

    @property
    def text(self) -> str:
        return self._session.text

    @property
    def unsaved(self) -> bool:
        return self._session.unsaved

    @property
    def started(self) -> bool:
        return self._session.started

    @property
    def active(self) -> bool:
        return self._session.active

    @property
    def prompt(self) -> str:
        return self._session.prompt

    @property
    def remaining_seconds(self) -> int:
        return self._session.remaining_seconds

    @property
    def selected_duration_seconds(self) -> int:
        return self._session.selected_duration_seconds

    @property
    def restricted_mode(self) -> bool:
        return self._session.restricted_mode

    @property
    def is_saving(self) -> bool:
        return self._saving

    def can_save(self) -> bool:
        return self._session.started and bool(self._session.text) and not self._session.restricted_mode

    # -- configuration --------------------------------------------------

    def select_duration(self, seconds: int) -> None:
        if seconds not in TIMER_DURATIONS:
            raise ValueError(f"Unsupported sprint duration: {seconds}s")
        if self._session.started:
            raise SessionError("Duration can only change before the session starts")
        self._session.selected_duration_seconds = seconds
        self._set_remaining(seconds)

    def set_restricted_mode(self, enabled: bool) -> None:
        if enabled == self._session.restricted_mode:
            return
        if self._session.started:
            raise SessionError("Mandala Mode cannot change during a session")
        self._session.restricted_mode = enabled
        logger.info("Mandala Mode %s", "enabled" if enabled else "disabled")

    def set_filename_options(self, options: dict[str, Any]) -> None:
        self._filename_options = dict(options)

    def set_text(self, text: str) -> None:
        """Record a mutation of the writing buffer."""
        if text == self._session.text:
            return
        self._session.text = text
        self._set_unsaved(bool(text))

    # -- countdown transitions -----------------------------------------

    def primary_action_label(self) -> str:
        phase = self.phase
        if phase is SessionPhase.NOT_STARTED:
            return "Start Writing"
        if phase is SessionPhase.RUNNING:
            return "Pause Writing"
        if phase is SessionPhase.PAUSED:
            return "Resume Writing"
        return "Start New Writing"

    def primary_action(self) -> None:
        phase = self.phase
        if phase is SessionPhase.NOT_STARTED:
            self.start()
        elif phase is SessionPhase.RUNNING:
            self.pause()
        else:
            self.resume()

    def start(self) -> None:
        if self._session.started:
            logger.debug("start() ignored: session already started")
            return
        self._new_prompt()
        self._set_started(True)
        self._set_status("")
        self._start_clock(self._session.selected_duration_seconds)
        logger.info("Session started (%ss, prompt=%r)", self._session.selected_duration_seconds, self.prompt)

    def pause(self) -> None:
        if self._session.active:
            self._clock.pause()
            logger.info("Session paused at %ss", self._session.remaining_seconds)

    def resume(self) -> None:
        phase = self.phase
        if phase is SessionPhase.NOT_STARTED:
            self.start()
        elif phase is SessionPhase.PAUSED:
            self._start_clock(self._session.remaining_seconds)
            logger.info("Session resumed with %ss left", self._session.remaining_seconds)
        elif phase is SessionPhase.EXPIRED:
            self._new_prompt()
            self._set_status("")
            self._start_clock(self._session.selected_duration_seconds)
            logger.info("New sprint started (prompt=%r)", self.prompt)

    # -- expiry decision ------------------------------------------------

    def expiry_choices(self) -> tuple[ExpiryChoice, ...]:
        choices = [ExpiryChoice.KEEP_WRITING]
        if not self._session.restricted_mode:
            choices.append(ExpiryChoice.SAVE)
        choices.extend([ExpiryChoice.NEW_PROMPT_DISCARD, ExpiryChoice.CANCEL])
        return tuple(choices)

    def resolve_expiry(self, choice: ExpiryChoice) -> SaveOutcome | None:
        if choice is ExpiryChoice.CANCEL:
            return None
        if choice is ExpiryChoice.SAVE:
            return self.request_save(SaveReason.ON_EXPIRY)
        if self.phase is not SessionPhase.EXPIRED:
            raise SessionError(f"{choice.value} is only available once the timer has run out")
        if choice is ExpiryChoice.NEW_PROMPT_DISCARD:
            self._replace_text("")
            self._set_unsaved(False)
            self._new_prompt()
            logger.info("Text discarded; new prompt %r", self.prompt)
        self._set_status("")
        self._start_clock(self._session.selected_duration_seconds)
        return None

    # -- reset decision -------------------------------------------------

    def request_reset(self) -> ResetDecision:
        if not self._session.text and not self._session.restricted_mode:
            self._reset()
            return ResetDecision(performed=True)
        self.pause()
        choices: list[ResetChoice] = []
        if self._session.text and not self._session.restricted_mode:
            choices.append(ResetChoice.SAVE_THEN_RESET)
        choices.extend([ResetChoice.DISCARD_THEN_RESET, ResetChoice.CANCEL])
        return ResetDecision(performed=False, choices=tuple(choices))

    def resolve_reset(self, choice: ResetChoice) -> SaveOutcome | None:
        if choice is ResetChoice.CANCEL:
            return None
        if choice is ResetChoice.DISCARD_THEN_RESET:
            self._reset()
            return None
        outcome = self.request_save(SaveReason.ON_RESET)
        if outcome.permits_discard:
            self._reset()
        return outcome

    # -- quit decision --------------------------------------------------

    def request_quit(self) -> QuitDecision:
        if not self._session.unsaved or not self._session.text:
            return QuitDecision(proceed=True)
        self._resume_after_quit_cancel = self._session.active
        self.pause()
        choices: list[QuitChoice] = []
        if not self._session.restricted_mode:
            choices.append(QuitChoice.SAVE_AND_QUIT)
        choices.extend([QuitChoice.DISCARD_AND_QUIT, QuitChoice.CANCEL])
        logger.info("Quit requested with unsaved text; asking the user")
        return QuitDecision(proceed=False, choices=tuple(choices))

    def resolve_quit(self, choice: QuitChoice) -> bool:
        """Return True when the application may terminate."""
        resume = self._resume_after_quit_cancel
        self._resume_after_quit_cancel = False
        if choice is QuitChoice.DISCARD_AND_QUIT:
            logger.info("Discarding unsaved text and quitting")
            return True
        if choice is QuitChoice.CANCEL:
            if resume:
                self._start_clock(self._session.remaining_seconds)
            logger.info("Quit cancelled")
            return False
        outcome = self.request_save(SaveReason.ON_QUIT)
        return outcome.permits_discard

    # -- saving ---------------------------------------------------------

    def request_save(self, reason: SaveReason = SaveReason.MANUAL) -> SaveOutcome:
        """Append the buffer to the journal."""
        text = self._session.text
        prompt = self._session.prompt
        return self._save(reason, lambda: self._store.append(text, prompt))

    def request_export(self) -> SaveOutcome:
        """Write the buffer to a standalone file with a generated name."""
        text = self._session.text
        suggested = build_filename(self._session.prompt, self._now(), self._filename_options)
        return self._save(SaveReason.MANUAL, lambda: self._store.save_as(text, suggested))

    def _save(self, reason: SaveReason, write: Callable[[], Path]) -> SaveOutcome:
        if self._saving:
            raise SaveInProgressError("A save is already in progress")
        if self._session.restricted_mode:
            outcome = SaveOutcome(SaveStatus.DISABLED)
        elif not self._session.text:
            outcome = SaveOutcome(SaveStatus.NOTHING_TO_SAVE)
        else:
            self.pause()
            outcome = self._run_write(reason, write)
        self._announce(outcome, reason)
        return outcome

    def _run_write(self, reason: SaveReason, write: Callable[[], Path]) -> SaveOutcome:
        self._set_saving(True)
        try:
            path = write()
        except SaveCancelledError:
            logger.info("Save (%s) cancelled by user", reason.value)
            return SaveOutcome(SaveStatus.CANCELLED)
        except (JournalError, OSError) as exc:
            logger.warning("Save (%s) failed: %s", reason.value, exc)
            return SaveOutcome(SaveStatus.FAILED, detail=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error during save (%s)", reason.value)
            return SaveOutcome(SaveStatus.FAILED, detail=str(exc) or type(exc).__name__)
        finally:
            self._set_saving(False)
        self._set_unsaved(False)
        logger.info("Save (%s) succeeded: %s", reason.value, path)
        return SaveOutcome(SaveStatus.SAVED, path=Path(path))

    def _announce(self, outcome: SaveOutcome, reason: SaveReason) -> None:
        suffix = _FAILURE_SUFFIX.get(reason, "")
        if outcome.status is SaveStatus.SAVED and outcome.path is not None:
            message = f"Saved to: {outcome.path.name}"
        elif outcome.status is SaveStatus.NOTHING_TO_SAVE:
            message = "Nothing to save."
        elif outcome.status is SaveStatus.DISABLED:
            message = MANDALA_SAVE_DISABLED
            if reason is SaveReason.ON_RESET:
                message += " Work will be discarded."
        elif outcome.status is SaveStatus.CANCELLED:
            message = "Save cancelled." + suffix
        else:
            detail = outcome.detail[:STATUS_DETAIL_MAX_CHARS]
            message = f"Save failed: {detail}." + suffix
        self._set_status(message)

    # -- internals ------------------------------------------------------

    def _reset(self) -> None:
        self._clock.pause()
        self._replace_text("")
        self._set_unsaved(False)
        self._session.prompt = ""
        self.prompt_changed.emit("")
        self._set_started(False)
        self._set_remaining(self._session.selected_duration_seconds)
        self._emit_phase()
        logger.info("Session reset")

    def _new_prompt(self) -> None:
        self._session.prompt = self._prompts.next_prompt()
        self.prompt_changed.emit(self._session.prompt)

    def _start_clock(self, seconds: int) -> None:
        self._set_remaining(seconds)
        self._clock.start(seconds)

    def _replace_text(self, text: str) -> None:
        if text == self._session.text:
            return
        self._session.text = text
        self.text_replaced.emit(text)

    def _set_unsaved(self, unsaved: bool) -> None:
        if unsaved == self._session.unsaved:
            return
        self._session.unsaved = unsaved
        self.unsaved_changed.emit(unsaved)

    def _set_started(self, started: bool) -> None:
        self._session.started = started
        self._activity.set_active(started)
        self._emit_phase()

    def _set_remaining(self, seconds: int) -> None:
        self._session.remaining_seconds = seconds
        self.remaining_changed.emit(seconds)

    def _set_saving(self, saving: bool) -> None:
        self._saving = saving
        self.saving_changed.emit(saving)

    def _set_status(self, message: str) -> None:
        self.last_status = message
        self.status_message.emit(message)

    def _emit_phase(self) -> None:
        phase = self._session.phase
        if phase is not self._phase:
            self._phase = phase
            self.phase_changed.emit(phase.value)

    def _on_clock_ticked(self, remaining: int) -> None:
        self._set_remaining(remaining)
        logger.debug("Tick: %ss remaining", remaining)

    def _on_clock_active_changed(self, active: bool) -> None:
        self._session.active = active
        self._emit_phase()

    def _on_clock_expired(self) -> None:
        self._set_remaining(0)
        self._emit_phase()
        self.expired.emit()
