# -*- coding: utf-8 -*-
"""Gate window close and application quit on unsaved writing."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QCoreApplication, QEvent, QObject, QTimer
from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import QWidget

from wordsprint.core.session_state import SessionState
from wordsprint.models.save_result import QuitChoice

logger = logging.getLogger(__name__)

QuitPrompter = Callable[[tuple[QuitChoice, ...], bool], QuitChoice]


class ExitCoordinator(QObject):
    """Turn every close or quit attempt into one ``request_quit`` call.

    The native close/quit is suppressed while the user decides. When the
    decision allows it, the coordinator re-issues the close or quit itself and
    lets that second attempt through.
    """

    def __init__(
        self,
        state: SessionState,
        window: QWidget,
        ask_quit: QuitPrompter,
        app: QCoreApplication | None = None,
    ) -> None:
        super().__init__(window)
        self._state = state
        self._window = window
        self._ask_quit = ask_quit
        self._app = app
        self._allow_exit = False
        self._deciding = False
        if app is not None:
            app.installEventFilter(self)

    @property
    def exit_allowed(self) -> bool:
        return self._allow_exit

    def handle_close_event(self, event: QCloseEvent) -> None:
        """Call from the window's ``closeEvent``."""
        if self._allow_exit:
            event.accept()
            return
        event.ignore()
        if self._decide():
            # A close issued from inside closeEvent is swallowed by Qt.
            QTimer.singleShot(0, self._window.close)

    def request_app_quit(self) -> None:
        """Quit action entry point."""
        if self._allow_exit or self._decide():
            self._quit_natively()

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if event.type() == QEvent.Type.Quit and obj is self._app and not self._allow_exit:
            logger.debug("Intercepted application quit")
            if self._decide():
                QTimer.singleShot(0, self._quit_natively)
            return True
        return super().eventFilter(obj, event)

    def _decide(self) -> bool:
        if self._deciding:
            logger.debug("Exit attempt ignored: a decision is already open")
            return False
        if self._state.is_saving:
            logger.info("Exit suppressed: a save is in progress")
            return False
        self._deciding = True
        try:
            decision = self._state.request_quit()
            if decision.proceed:
                proceed = True
            else:
                choice = self._ask_quit(decision.choices, self._state.restricted_mode)
                proceed = self._state.resolve_quit(choice)
        finally:
            self._deciding = False
        self._allow_exit = proceed
        logger.info("Exit %s", "allowed" if proceed else "suppressed")
        return proceed

    def _quit_natively(self) -> None:
        if self._app is not None:
            self._app.removeEventFilter(self)
            self._app.quit()
        else:
            self._window.close()
