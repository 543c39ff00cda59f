# -*- coding: utf-8 -*-
"""QFileDialog-backed chooser used by the journal store."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtWidgets import QFileDialog, QWidget

from wordsprint.constants import DEFAULT_JOURNAL_FILENAME

logger = logging.getLogger(__name__)

_TEXT_FILTER = "Text files (*.txt);;All files (*)"


class QtFileChooser:
    """Ask the user for journal and export locations."""

    def __init__(self, parent: QWidget | None = None) -> None:
        self.parent = parent

    def choose_journal_file(self, current: Path | None) -> Path | None:
        start = str(current) if current is not None else str(Path.home() / DEFAULT_JOURNAL_FILENAME)
        # Appending to an existing journal is the normal case, not an overwrite.
        selected, _ = QFileDialog.getSaveFileName(
            self.parent,
            "Choose Writing Journal",
            start,
            _TEXT_FILTER,
            options=QFileDialog.Option.DontConfirmOverwrite,
        )
        if not selected:
            logger.info("Journal chooser dismissed")
            return None
        return Path(selected)

    def choose_export_path(self, suggested_name: str, directory: Path | None) -> Path | None:
        start_dir = directory if directory is not None else Path.home()
        selected, _ = QFileDialog.getSaveFileName(
            self.parent,
            "Save Your Writing As...",
            str(start_dir / suggested_name),
            _TEXT_FILTER,
        )
        if not selected:
            logger.info("Export chooser dismissed")
            return None
        return Path(selected)
