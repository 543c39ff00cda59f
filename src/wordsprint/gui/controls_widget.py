# -*- coding: utf-8 -*-
"""Bottom control bar of the writing window."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QComboBox, QHBoxLayout, QPushButton, QWidget

from wordsprint.constants import TIMER_DURATIONS
from wordsprint.core.clock import format_clock


class ControlsWidget(QWidget):
    """Buttons for the sprint, saving and display toggles."""

    primary_requested = pyqtSignal()
    save_requested = pyqtSignal()
    export_requested = pyqtSignal()
    reset_requested = pyqtSignal()
    duration_selected = pyqtSignal(int)
    typewriter_toggled = pyqtSignal()
    theme_toggled = pyqtSignal()
    fullscreen_toggled = pyqtSignal()
    settings_requested = pyqtSignal()

    def __init__(self, hotkeys: dict[str, str] | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        hotkeys = hotkeys or {}
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(12)

        self.primary_button = self._make_button(
            "Start Writing", hotkeys.get("primary", ""), self.primary_requested.emit, primary=True
        )
        self.save_button = self._make_button("Save Work", hotkeys.get("save", ""), self.save_requested.emit)
        self.export_button = self._make_button("Export As...", "", self.export_requested.emit)
        self.duration_combo = QComboBox()
        self.duration_combo.setObjectName("durationCombo")
        for seconds in TIMER_DURATIONS:
            self.duration_combo.addItem(format_clock(seconds), seconds)
        self.duration_combo.setToolTip("Sprint length. Locked once a session has started.")
        self.duration_combo.activated.connect(self._on_duration_activated)
        self.typewriter_button = self._make_button("Typewriter", "", self.typewriter_toggled.emit)
        self.theme_button = self._make_button("Dark", "", self.theme_toggled.emit)
        self.fullscreen_button = self._make_button("Fullscreen", hotkeys.get("fullscreen", ""), self.fullscreen_toggled.emit)
        self.reset_button = self._make_button("Start Over", hotkeys.get("reset", ""), self.reset_requested.emit)
        self.settings_button = self._make_button("Settings", hotkeys.get("settings", ""), self.settings_requested.emit)

        self.save_button.setToolTip(
            "Append this writing to your journal. " + self.save_button.toolTip()
        )
        self.export_button.setToolTip("Save this writing to a separate file.")
        self.reset_button.setToolTip(
            "End the current session. You will be asked before unsaved writing is discarded."
        )

        layout.addWidget(self.primary_button)
        layout.addWidget(self.save_button)
        layout.addWidget(self.export_button)
        layout.addStretch(1)
        for widget in (
            self.duration_combo,
            self.typewriter_button,
            self.theme_button,
            self.fullscreen_button,
            self.reset_button,
            self.settings_button,
        ):
            layout.addWidget(widget)

    def _make_button(self, text: str, hotkey: str, handler, primary: bool = False) -> QPushButton:
        button = QPushButton(text)
        button.setObjectName("primaryButton" if primary else "secondaryButton")
        if hotkey:
            button.setToolTip(f"Shortcut: {hotkey}")
        button.clicked.connect(handler)
        return button

    def _on_duration_activated(self, index: int) -> None:
        self.duration_selected.emit(int(self.duration_combo.itemData(index)))

    def set_selected_duration(self, seconds: int) -> None:
        index = self.duration_combo.findData(seconds)
        if index >= 0:
            self.duration_combo.setCurrentIndex(index)

    def set_session_state(
        self,
        primary_label: str,
        started: bool,
        save_visible: bool,
        can_save: bool,
        can_reset: bool,
        saving: bool = False,
    ) -> None:
        """Update button labels and availability.

        Save buttons are hidden entirely while saving is disabled by Mandala Mode.
        """
        self.primary_button.setText(primary_label)
        self.primary_button.setEnabled(not saving)
        self.save_button.setVisible(save_visible)
        self.export_button.setVisible(save_visible)
        self.save_button.setEnabled(can_save and not saving)
        self.export_button.setEnabled(can_save and not saving)
        self.duration_combo.setEnabled(not started)
        self.reset_button.setEnabled(can_reset and not saving)

    def set_toggle_labels(self, typewriter: bool, dark_mode: bool, fullscreen: bool) -> None:
        self.typewriter_button.setText("Typewriter: On" if typewriter else "Typewriter: Off")
        self.theme_button.setText("Light" if dark_mode else "Dark")
        self.fullscreen_button.setText("Exit Fullscreen" if fullscreen else "Fullscreen")
