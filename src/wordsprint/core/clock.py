# -*- coding: utf-8 -*-
"""Countdown clock for a writing sprint."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from wordsprint.constants import TICK_INTERVAL_MS

logger = logging.getLogger(__name__)


def format_clock(seconds: int) -> str:
    """Render seconds as MM:SS."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class SessionClock(QObject):
    """Single-threaded countdown ticking once per interval on the Qt event loop.

    Resuming is ``start`` again with the remaining value; the clock has no
    memory of the original duration.
    """

    ticked = pyqtSignal(int)
    active_changed = pyqtSignal(bool)
    expired = pyqtSignal()

    def __init__(self, interval_ms: int = TICK_INTERVAL_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._remaining = 0
        self._active = False
        self._expiry_pending = False
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.tick)

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    def is_active(self) -> bool:
        return self._active

    def start(self, duration_seconds: int) -> None:
        if self._active:
            return
        if duration_seconds <= 0:
            raise ValueError(f"Countdown needs a positive duration, got {duration_seconds}")
        self._remaining = int(duration_seconds)
        self._expiry_pending = True
        self._timer.start()
        self._set_active(True)
        logger.debug("Clock started with %ss", self._remaining)

    def pause(self) -> None:
        self._timer.stop()
        self._set_active(False)

    def tick(self) -> None:
        if not self._active:
            return
        if self._remaining > 0:
            self._remaining -= 1
            self.ticked.emit(self._remaining)
        if self._remaining == 0:
            self._timer.stop()
            self._set_active(False)
            if self._expiry_pending:
                self._expiry_pending = False
                logger.info("Countdown expired")
                self.expired.emit()

    def _set_active(self, active: bool) -> None:
        if active == self._active:
            return
        self._active = active
        self.active_changed.emit(active)
