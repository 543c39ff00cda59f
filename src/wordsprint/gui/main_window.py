# -*- coding: utf-8 -*-
"""Main writing window."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from PyQt6.QtCore import QCoreApplication, Qt, QTimer
from PyQt6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QVBoxLayout,
    QWidget,
)

from wordsprint.config import ConfigError, save_config
from wordsprint.constants import APP_NAME, APP_VERSION, STATUS_MESSAGE_TIMEOUT_MS
from wordsprint.core.clock import format_clock
from wordsprint.core.journal_store import FileChooser, JournalLocation, JournalStore
from wordsprint.core.session_state import SaveInProgressError, SessionError, SessionState
from wordsprint.gui.controls_widget import ControlsWidget
from wordsprint.gui.exit_coordinator import ExitCoordinator
from wordsprint.gui.settings_dialog import SettingsDialog
from wordsprint.models.save_result import ExpiryChoice, QuitChoice, ResetChoice
from wordsprint.models.session import SessionPhase

logger = logging.getLogger(__name__)

ChoiceT = TypeVar("ChoiceT", bound=Enum)

_EXPIRY_LABELS = {
    ExpiryChoice.KEEP_WRITING: "Keep Writing",
    ExpiryChoice.SAVE: "Save Work",
    ExpiryChoice.NEW_PROMPT_DISCARD: "New Prompt (Discard)",
    ExpiryChoice.CANCEL: "Cancel",
}
_RESET_LABELS = {
    ResetChoice.SAVE_THEN_RESET: "Save and Start Over",
    ResetChoice.DISCARD_THEN_RESET: "Discard and Start Over",
    ResetChoice.CANCEL: "Cancel",
}
_QUIT_LABELS = {
    QuitChoice.SAVE_AND_QUIT: "Save and Quit",
    QuitChoice.DISCARD_AND_QUIT: "Discard and Quit",
    QuitChoice.CANCEL: "Cancel",
}

_THEMES = {
    False: {
        "background": "#f3f5f8",
        "surface": "#ffffff",
        "text": "#1f2937",
        "muted": "#6b7280",
        "border": "#d1d9e6",
        "accent": "#0f766e",
        "accent_text": "#ffffff",
    },
    True: {
        "background": "#111827",
        "surface": "#1f2937",
        "text": "#e5e7eb",
        "muted": "#9ca3af",
        "border": "#374151",
        "accent": "#14b8a6",
        "accent_text": "#0f172a",
    },
}


class MainWindow(QMainWindow):
    """Distraction-free editor driven by a :class:`SessionState`."""

    def __init__(
        self,
        settings: dict[str, Any],
        state: SessionState,
        store: JournalStore,
        chooser: FileChooser | None = None,
        app: QCoreApplication | None = None,
        settings_path: str | Path | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.settings = settings
        self.state = state
        self.store = store
        self.chooser = chooser
        self._settings_path = settings_path
        self.store.on_location_changed = self._on_journal_location_changed

        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.resize(1100, 760)

        self._build_ui()
        self._apply_typewriter_mode()
        self._apply_styles()
        self._bind_hotkeys()
        self._connect_state()
        self.exit_coordinator = ExitCoordinator(self.state, self, self._ask_quit, app)
        self._refresh_ui()

    def _build_ui(self) -> None:
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 18, 24, 12)
        layout.setSpacing(12)

        header = QWidget()
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(0, 0, 0, 0)
        self.prompt_label = QLabel()
        self.prompt_label.setObjectName("promptTitle")
        self.time_label = QLabel()
        self.time_label.setObjectName("timerLabel")
        header_layout.addWidget(self.prompt_label, 1)
        header_layout.addWidget(self.time_label)

        self.editor = QPlainTextEdit()
        self.editor.setObjectName("editor")
        self.editor.setPlaceholderText("Your words go here once the timer is running.")
        self.editor.textChanged.connect(self._on_editor_text_changed)
        self.editor.cursorPositionChanged.connect(self._keep_cursor_centred)

        self.mode_label = QLabel()
        self.mode_label.setObjectName("mutedText")

        self.controls_widget = ControlsWidget(hotkeys=self.settings.get("hotkeys", {}))
        self.controls_widget.primary_requested.connect(self.state.primary_action)
        self.controls_widget.save_requested.connect(self.save_work)
        self.controls_widget.export_requested.connect(self.export_work)
        self.controls_widget.reset_requested.connect(self.start_over)
        self.controls_widget.duration_selected.connect(self._on_duration_selected)
        self.controls_widget.typewriter_toggled.connect(self.toggle_typewriter_mode)
        self.controls_widget.theme_toggled.connect(self.toggle_dark_mode)
        self.controls_widget.fullscreen_toggled.connect(self.toggle_fullscreen_mode)
        self.controls_widget.settings_requested.connect(self.open_settings_dialog)
        self.controls_widget.set_selected_duration(self.state.selected_duration_seconds)

        layout.addWidget(header)
        layout.addWidget(self.editor, 1)
        layout.addWidget(self.mode_label)
        layout.addWidget(self.controls_widget)
        self.setCentralWidget(central)
        self.statusBar()

    def _apply_styles(self) -> None:
        colors = _THEMES[bool(self.settings["appearance"]["dark_mode"])]
        self.setStyleSheet(
            """
            QMainWindow, QWidget {{
                background: {background};
                color: {text};
                font-family: "Segoe UI", "Noto Sans", sans-serif;
                font-size: 13px;
            }}
            QLabel#promptTitle {{
                font-size: 20px;
                font-weight: 700;
            }}
            QLabel#timerLabel {{
                font-size: 20px;
                font-weight: 700;
                color: {accent};
            }}
            QLabel#mutedText {{
                color: {muted};
            }}
            QPlainTextEdit#editor {{
                background: {surface};
                border: 1px solid {border};
                border-radius: 10px;
                padding: 12px;
                font-family: "Georgia", "Noto Serif", serif;
                font-size: 16px;
            }}
            QPushButton {{
                background: {surface};
                border: 1px solid {border};
                border-radius: 8px;
                padding: 6px 12px;
            }}
            QPushButton#primaryButton {{
                background: {accent};
                color: {accent_text};
                border: none;
                font-weight: 700;
            }}
            QPushButton:disabled {{
                color: {muted};
            }}
            QComboBox {{
                background: {surface};
                border: 1px solid {border};
                border-radius: 8px;
                padding: 4px 8px;
            }}
            """.format(**colors)
        )

    def _bind_hotkeys(self) -> None:
        hotkeys = self.settings.get("hotkeys", {})
        bindings = [
            (hotkeys.get("primary"), self.state.primary_action),
            (hotkeys.get("save"), self.save_work),
            (hotkeys.get("reset"), self.start_over),
            (hotkeys.get("settings"), self.open_settings_dialog),
            (hotkeys.get("fullscreen"), self.toggle_fullscreen_mode),
            (hotkeys.get("quit"), self.request_quit),
        ]
        self._shortcuts: list[QShortcut] = []
        for sequence, handler in bindings:
            if not sequence:
                continue
            shortcut = QShortcut(QKeySequence(sequence), self)
            shortcut.activated.connect(handler)
            self._shortcuts.append(shortcut)
        exit_fullscreen_shortcut = QShortcut(QKeySequence(Qt.Key.Key_Escape), self)
        exit_fullscreen_shortcut.activated.connect(self.exit_fullscreen_mode)
        self._shortcuts.append(exit_fullscreen_shortcut)

    def _connect_state(self) -> None:
        self.state.phase_changed.connect(lambda _phase: self._refresh_ui())
        self.state.unsaved_changed.connect(lambda _unsaved: self._refresh_ui())
        self.state.saving_changed.connect(lambda _saving: self._refresh_ui())
        self.state.remaining_changed.connect(lambda _seconds: self._refresh_header())
        self.state.prompt_changed.connect(lambda _prompt: self._refresh_header())
        self.state.text_replaced.connect(self._on_text_replaced)
        self.state.status_message.connect(self._show_status)
        self.state.expired.connect(self._on_expired)

    # -- refresh --------------------------------------------------------

    def _refresh_ui(self) -> None:
        state = self.state
        self.editor.setReadOnly(state.phase is not SessionPhase.RUNNING)
        self.controls_widget.set_session_state(
            primary_label=state.primary_action_label(),
            started=state.started,
            save_visible=not state.restricted_mode,
            can_save=state.can_save(),
            can_reset=state.started or bool(state.text),
            saving=state.is_saving,
        )
        self.controls_widget.set_toggle_labels(
            typewriter=self._typewriter_enabled(),
            dark_mode=bool(self.settings["appearance"]["dark_mode"]),
            fullscreen=self.isFullScreen(),
        )
        self._refresh_header()
        self._refresh_mode_label()

    def _refresh_header(self) -> None:
        if self.state.started:
            self.prompt_label.setText(f"Prompt: {self.state.prompt}")
            self.time_label.setText(format_clock(self.state.remaining_seconds))
        else:
            self.prompt_label.setText("Select duration, then click 'Start Writing'.")
            self.time_label.setText(format_clock(self.state.selected_duration_seconds))

    def _refresh_mode_label(self) -> None:
        typewriter = "ON" if self._typewriter_enabled() else "OFF"
        if self.state.restricted_mode:
            mandala = "ON (Saving Disabled)"
        else:
            mandala = "OFF"
        self.mode_label.setText(f"Typewriter Mode: {typewriter} | Mandala Mode: {mandala}")

    def _show_status(self, message: str) -> None:
        if message:
            self.statusBar().showMessage(message, STATUS_MESSAGE_TIMEOUT_MS)
        else:
            self.statusBar().clearMessage()

    # -- editor ---------------------------------------------------------

    def _on_editor_text_changed(self) -> None:
        self.state.set_text(self.editor.toPlainText())
        self._refresh_ui()

    def _on_text_replaced(self, text: str) -> None:
        self.editor.blockSignals(True)
        try:
            self.editor.setPlainText(text)
        finally:
            self.editor.blockSignals(False)
        self._refresh_ui()

    def _typewriter_enabled(self) -> bool:
        return bool(self.settings["modes"]["typewriter"])

    def _keep_cursor_centred(self) -> None:
        if self._typewriter_enabled():
            self.editor.centerCursor()

    def _apply_typewriter_mode(self) -> None:
        enabled = self._typewriter_enabled()
        self.editor.setCenterOnScroll(enabled)
        if enabled:
            self.editor.centerCursor()

    # -- actions --------------------------------------------------------

    def save_work(self) -> None:
        try:
            self.state.request_save()
        except SaveInProgressError:
            logger.debug("Save ignored: another save is running")

    def export_work(self) -> None:
        try:
            self.state.request_export()
        except SaveInProgressError:
            logger.debug("Export ignored: another save is running")

    def start_over(self) -> None:
        if self.state.is_saving:
            return
        decision = self.state.request_reset()
        if decision.performed:
            return
        text = "Unsaved writing will be lost." if self.state.text else "End this session?"
        if self.state.restricted_mode:
            text = "Mandala Mode: saving is disabled. " + text
        choice = self._ask_choice("Start Over?", text, decision.choices, _RESET_LABELS, ResetChoice.CANCEL)
        self.state.resolve_reset(choice)

    def request_quit(self) -> None:
        self.exit_coordinator.request_app_quit()

    def _on_expired(self) -> None:
        # Emitted from inside the clock tick; the modal loop must not nest there.
        QTimer.singleShot(0, self._ask_expiry)

    def _ask_expiry(self) -> None:
        if self.state.phase is not SessionPhase.EXPIRED:
            return
        choices = self.state.expiry_choices()
        text = f"Time's up for \"{self.state.prompt}\". What would you like to do?"
        choice = self._ask_choice("Time's up!", text, choices, _EXPIRY_LABELS, ExpiryChoice.CANCEL)
        try:
            self.state.resolve_expiry(choice)
        except SessionError as exc:
            logger.warning("Expiry choice %s rejected: %s", choice.value, exc)

    def _ask_quit(self, choices: tuple[QuitChoice, ...], restricted: bool) -> QuitChoice:
        text = "You have unsaved writing."
        if restricted:
            text += " Mandala Mode is on, so it cannot be saved."
        return self._ask_choice(f"Quit {APP_NAME}?", text, choices, _QUIT_LABELS, QuitChoice.CANCEL)

    def _ask_choice(
        self,
        title: str,
        text: str,
        choices: tuple[ChoiceT, ...],
        labels: dict[Any, str],
        cancel: ChoiceT,
    ) -> ChoiceT:
        box = QMessageBox(self)
        box.setWindowTitle(title)
        box.setText(text)
        buttons = {}
        for choice in choices:
            role = (
                QMessageBox.ButtonRole.RejectRole
                if choice is cancel
                else QMessageBox.ButtonRole.AcceptRole
            )
            buttons[box.addButton(labels[choice], role)] = choice
        box.exec()
        return buttons.get(box.clickedButton(), cancel)

    def _on_duration_selected(self, seconds: int) -> None:
        try:
            self.state.select_duration(seconds)
        except (SessionError, ValueError) as exc:
            logger.warning("Duration change rejected: %s", exc)
            self.controls_widget.set_selected_duration(self.state.selected_duration_seconds)
        self._refresh_header()

    # -- settings and display -------------------------------------------

    def open_settings_dialog(self) -> None:
        """Pause the sprint, edit settings and persist changes."""
        self.state.pause()
        dialog = SettingsDialog(self.settings, self.state.activity, self.chooser, self)
        if dialog.exec():
            self.settings = dialog.get_settings()
            self._apply_settings()
            self._persist_settings()

    def _apply_settings(self) -> None:
        journal = self.settings["journal"]
        self.store.set_location(JournalLocation.from_setting(journal["path"]))
        self.store.always_prompt = bool(journal["always_prompt"])
        try:
            self.state.set_restricted_mode(bool(self.settings["modes"]["mandala"]))
        except SessionError as exc:
            logger.warning("Mandala Mode unchanged: %s", exc)
            self.settings["modes"]["mandala"] = self.state.restricted_mode
        self.state.set_filename_options(self.settings["filename"])
        self._apply_typewriter_mode()
        self._apply_styles()
        self._refresh_ui()

    def _persist_settings(self) -> None:
        try:
            save_config(self.settings, self._settings_path)
        except (ConfigError, OSError) as exc:
            logger.error("Could not save settings: %s", exc)
            self._show_status(f"Could not save settings: {exc}")

    def _on_journal_location_changed(self, location: JournalLocation) -> None:
        self.settings["journal"]["path"] = location.to_setting()
        self._persist_settings()
        logger.info("Journal location now %s", location.reference)

    def toggle_typewriter_mode(self) -> None:
        self.settings["modes"]["typewriter"] = not self._typewriter_enabled()
        self._apply_typewriter_mode()
        self._persist_settings()
        self._refresh_ui()

    def toggle_dark_mode(self) -> None:
        appearance = self.settings["appearance"]
        appearance["dark_mode"] = not bool(appearance["dark_mode"])
        self._apply_styles()
        self._persist_settings()
        self._refresh_ui()

    def toggle_fullscreen_mode(self) -> None:
        if self.isFullScreen():
            self.showNormal()
        else:
            self.showFullScreen()
        self._refresh_ui()

    def exit_fullscreen_mode(self) -> None:
        if not self.isFullScreen():
            return
        self.showNormal()
        self._refresh_ui()

    def closeEvent(self, event: QCloseEvent) -> None:  # type: ignore[override]
        self.exit_coordinator.handle_close_event(event)
