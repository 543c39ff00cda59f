# -*- coding: utf-8 -*-
"""Application constants."""

APP_NAME = "WordSprint"
APP_VERSION = "0.1.0"

DEFAULT_SETTINGS_FILE = "settings.json"
DEFAULT_JOURNAL_FILENAME = "WordSprint_Journal.txt"

TIMER_DURATIONS = (60, 120, 300, 600, 900, 1800)
DEFAULT_DURATION_SECONDS = 120
TICK_INTERVAL_MS = 1000

STATUS_MESSAGE_TIMEOUT_MS = 7000
STATUS_DETAIL_MAX_CHARS = 100

FILENAME_COMPONENTS = ("app_prefix", "custom_prefix", "prompt", "date", "time")

DEFAULT_HOTKEYS = {
    "primary": "Ctrl+Return",
    "save": "Ctrl+S",
    "reset": "Ctrl+R",
    "settings": "Ctrl+,",
    "fullscreen": "F11",
    "quit": "Ctrl+Q",
}
