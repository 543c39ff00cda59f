# -*- coding: utf-8 -*-
"""Shared "session is active" value."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal


class SessionActivity(QObject):
    """Observable flag shared by the session and the settings dialog.

    Injected into both so neither reaches for global state to learn whether a
    writing session is underway.
    """

    changed = pyqtSignal(bool)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def set_active(self, active: bool) -> None:
        if active == self._active:
            return
        self._active = active
        self.changed.emit(active)
