# -*- coding: utf-8 -*-
"""Application entry point."""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

from PyQt6.QtWidgets import QApplication, QMessageBox

from wordsprint.config import ConfigError, get_default_config, load_config
from wordsprint.constants import APP_NAME
from wordsprint.core.journal_store import JournalLocation, JournalStore
from wordsprint.core.prompts import PromptSource
from wordsprint.core.session_state import SessionState
from wordsprint.gui.file_chooser import QtFileChooser
from wordsprint.gui.main_window import MainWindow
from wordsprint.utils.logger import setup_session_logging


def global_exception_handler(exc_type, exc_value, exc_traceback):
    """Log fatal errors and keep a copy in logs/LAST_CRASH.log."""
    error_msg = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    logging.getLogger().critical("FATAL CRASH:\n%s", error_msg)

    crash_path = Path.cwd() / "logs" / "LAST_CRASH.log"
    try:
        crash_path.parent.mkdir(parents=True, exist_ok=True)
        crash_path.write_text(error_msg, encoding="utf-8")
    except OSError:
        logging.getLogger().exception("Could not write crash report")

    if QApplication.instance() is not None:
        QMessageBox.critical(None, "Application Crash", f"A fatal error occurred.\nDetails saved to: {crash_path}")

    sys.__excepthook__(exc_type, exc_value, exc_traceback)


def main() -> int:
    """Start the GUI application."""
    sys.excepthook = global_exception_handler
    session_log_path = setup_session_logging(Path.cwd(), APP_NAME.lower())
    logger = logging.getLogger(__name__)
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    if session_log_path is not None:
        logger.info("Session log file: %s", session_log_path)

    try:
        settings = load_config()
    except ConfigError as exc:
        logger.error("Invalid settings, falling back to defaults: %s", exc)
        QMessageBox.warning(None, APP_NAME, f"Settings could not be loaded:\n{exc}\n\nDefaults are used.")
        settings = get_default_config()

    chooser = QtFileChooser()
    store = JournalStore(
        location=JournalLocation.from_setting(settings["journal"]["path"]),
        chooser=chooser,
        always_prompt=bool(settings["journal"]["always_prompt"]),
    )
    state = SessionState(
        store=store,
        prompts=PromptSource(),
        restricted_mode=bool(settings["modes"]["mandala"]),
        filename_options=settings["filename"],
    )
    window = MainWindow(settings=settings, state=state, store=store, chooser=chooser, app=app)
    chooser.parent = window
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
