# -*- coding: utf-8 -*-
"""Settings dialog for journal, modes and filename structure."""

from __future__ import annotations

from copy import deepcopy
from datetime import datetime
from pathlib import Path
from typing import Any

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QPushButton,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from wordsprint.core.activity import SessionActivity
from wordsprint.core.filename import build_filename
from wordsprint.core.journal_store import FileChooser

_COMPONENT_LABELS = {
    "app_prefix": "App prefix",
    "custom_prefix": "Custom prefix",
    "prompt": "Prompt word",
    "date": "Date (YYYY-MM-DD)",
    "time": "Time (HH-MM-SS)",
}


class SettingsDialog(QDialog):
    """Edit persisted preferences.

    Mandala Mode is locked while ``activity`` reports a running session.
    """

    def __init__(
        self,
        settings: dict[str, Any],
        activity: SessionActivity,
        chooser: FileChooser | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.resize(560, 420)
        self._settings = deepcopy(settings)
        self._activity = activity
        self._chooser = chooser
        self._fields: dict[str, QWidget] = {}

        self.tab_widget = QTabWidget()
        self.tab_widget.addTab(self._create_journal_tab(), "Journal")
        self.tab_widget.addTab(self._create_modes_tab(), "Modes")
        self.tab_widget.addTab(self._create_filename_tab(), "Filenames")

        self.button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addWidget(self.tab_widget, 1)
        layout.addWidget(self.button_box)

        self._activity.changed.connect(self._apply_activity_lock)
        self._apply_activity_lock(self._activity.active)
        self._refresh_filename_controls()

    # -- tabs -----------------------------------------------------------

    def _create_journal_tab(self) -> QWidget:
        tab = QWidget()
        form = QFormLayout(tab)
        journal = self._settings["journal"]

        path_edit = QLineEdit(journal.get("path", ""))
        path_edit.setReadOnly(True)
        path_edit.setPlaceholderText("No journal selected")
        self._fields["journal_path"] = path_edit
        choose_button = QPushButton("Choose...")
        choose_button.clicked.connect(self._choose_journal)
        choose_button.setEnabled(self._chooser is not None)
        row = QHBoxLayout()
        row.addWidget(path_edit, 1)
        row.addWidget(choose_button)
        form.addRow("Writing journal", row)

        always_prompt = QCheckBox("Always ask where to save (even with a journal selected)")
        always_prompt.setChecked(bool(journal.get("always_prompt", True)))
        self._fields["always_prompt"] = always_prompt
        form.addRow(always_prompt)

        note = QLabel("Entries are appended to the journal with the date and prompt word.")
        note.setObjectName("mutedText")
        note.setWordWrap(True)
        form.addRow(note)
        return tab

    def _create_modes_tab(self) -> QWidget:
        tab = QWidget()
        form = QFormLayout(tab)
        modes = self._settings["modes"]

        mandala = QCheckBox("Mandala Mode (saving disabled)")
        mandala.setChecked(bool(modes.get("mandala", False)))
        self._fields["mandala"] = mandala
        form.addRow(mandala)
        self.mandala_lock_label = QLabel("Mandala Mode can only change while no session is active.")
        self.mandala_lock_label.setObjectName("mutedText")
        self.mandala_lock_label.setWordWrap(True)
        form.addRow(self.mandala_lock_label)

        typewriter = QCheckBox("Typewriter Mode (keep the current line centred)")
        typewriter.setChecked(bool(modes.get("typewriter", False)))
        self._fields["typewriter"] = typewriter
        form.addRow(typewriter)

        dark_mode = QCheckBox("Dark appearance")
        dark_mode.setChecked(bool(self._settings["appearance"].get("dark_mode", False)))
        self._fields["dark_mode"] = dark_mode
        form.addRow(dark_mode)
        return tab

    def _create_filename_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        options = self._settings["filename"]

        use_default = QCheckBox("Use default structure (WordSprint_Prompt_Date_Time.txt)")
        use_default.setChecked(bool(options.get("use_default_structure", True)))
        use_default.toggled.connect(self._refresh_filename_controls)
        self._fields["use_default_structure"] = use_default
        layout.addWidget(use_default)

        for key, label in (
            ("include_app_prefix", "Include app prefix"),
            ("include_prompt", "Include prompt word"),
            ("include_date", "Include date"),
            ("include_time", "Include time"),
            ("include_custom_prefix", "Include custom prefix"),
        ):
            box = QCheckBox(label)
            box.setChecked(bool(options.get(key, False)))
            box.toggled.connect(self._refresh_filename_controls)
            self._fields[key] = box
            layout.addWidget(box)

        custom_prefix = QLineEdit(str(options.get("custom_prefix", "")))
        custom_prefix.setPlaceholderText("Custom prefix")
        custom_prefix.textChanged.connect(self._refresh_filename_controls)
        self._fields["custom_prefix"] = custom_prefix
        layout.addWidget(custom_prefix)

        order_list = QListWidget()
        for component in options.get("order", []):
            order_list.addItem(_COMPONENT_LABELS.get(component, component))
            order_list.item(order_list.count() - 1).setData(Qt.ItemDataRole.UserRole, component)
        self._fields["order"] = order_list
        layout.addWidget(order_list)

        move_row = QHBoxLayout()
        self.move_up_button = QPushButton("Move Up")
        self.move_up_button.clicked.connect(lambda: self._move_component(-1))
        self.move_down_button = QPushButton("Move Down")
        self.move_down_button.clicked.connect(lambda: self._move_component(1))
        move_row.addWidget(self.move_up_button)
        move_row.addWidget(self.move_down_button)
        move_row.addStretch(1)
        layout.addLayout(move_row)

        self.filename_preview_label = QLabel()
        self.filename_preview_label.setObjectName("mutedText")
        layout.addWidget(self.filename_preview_label)
        return tab

    # -- behaviour ------------------------------------------------------

    def _apply_activity_lock(self, active: bool) -> None:
        self._check("mandala").setEnabled(not active)
        self.mandala_lock_label.setVisible(active)

    def _choose_journal(self) -> None:
        if self._chooser is None:
            return
        current = self._line("journal_path").text().strip()
        chosen = self._chooser.choose_journal_file(Path(current) if current else None)
        if chosen is not None:
            self._line("journal_path").setText(str(chosen))

    def _move_component(self, step: int) -> None:
        order_list: QListWidget = self._fields["order"]  # type: ignore[assignment]
        row = order_list.currentRow()
        target = row + step
        if row < 0 or not (0 <= target < order_list.count()):
            return
        item = order_list.takeItem(row)
        order_list.insertItem(target, item)
        order_list.setCurrentRow(target)
        self._refresh_filename_controls()

    def _refresh_filename_controls(self) -> None:
        custom = not self._check("use_default_structure").isChecked()
        for key in ("include_app_prefix", "include_prompt", "include_date", "include_time", "include_custom_prefix"):
            self._check(key).setEnabled(custom)
        self._line("custom_prefix").setEnabled(custom and self._check("include_custom_prefix").isChecked())
        self._fields["order"].setEnabled(custom)
        self.move_up_button.setEnabled(custom)
        self.move_down_button.setEnabled(custom)
        preview = build_filename("lantern", datetime.now(), self._filename_options())
        self.filename_preview_label.setText(f"Preview: {preview}")

    def _filename_options(self) -> dict[str, Any]:
        order_list: QListWidget = self._fields["order"]  # type: ignore[assignment]
        options = {
            key: self._check(key).isChecked()
            for key in (
                "use_default_structure",
                "include_app_prefix",
                "include_prompt",
                "include_date",
                "include_time",
                "include_custom_prefix",
            )
        }
        options["custom_prefix"] = self._line("custom_prefix").text()
        options["order"] = [order_list.item(i).data(Qt.ItemDataRole.UserRole) for i in range(order_list.count())]
        return options

    def get_settings(self) -> dict[str, Any]:
        """Return the updated settings."""
        return deepcopy(self._settings)

    def accept(self) -> None:  # type: ignore[override]
        self._apply_into_state()
        super().accept()

    def _apply_into_state(self) -> None:
        self._settings["journal"]["path"] = self._line("journal_path").text().strip()
        self._settings["journal"]["always_prompt"] = self._check("always_prompt").isChecked()
        if self._check("mandala").isEnabled():
            self._settings["modes"]["mandala"] = self._check("mandala").isChecked()
        self._settings["modes"]["typewriter"] = self._check("typewriter").isChecked()
        self._settings["appearance"]["dark_mode"] = self._check("dark_mode").isChecked()
        self._settings["filename"].update(self._filename_options())

    def _line(self, key: str) -> QLineEdit:
        return self._fields[key]  # type: ignore[return-value]

    def _check(self, key: str) -> QCheckBox:
        return self._fields[key]  # type: ignore[return-value]
