# -*- coding: utf-8 -*-
"""Process-wide logging setup for console and per-run log file."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def setup_session_logging(base_dir: str | Path, app_name: str) -> Path | None:
    """Configure root logging once per process.

    Level is INFO unless WORDSPRINT_DEBUG is set, in which case clock ticks and
    other DEBUG traces are written too. Returns the per-run log file path, or
    None when the file could not be opened.
    """
    root = logging.getLogger()
    if getattr(root, "_wordsprint_logging_configured", False):
        return getattr(root, "_wordsprint_session_log", None)

    level = logging.DEBUG if _env_bool("WORDSPRINT_DEBUG") else logging.INFO
    root.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s [%(threadName)s] %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    if not any(isinstance(handler, logging.StreamHandler) for handler in root.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    logs_dir = Path(base_dir) / "logs"
    safe_app_name = app_name.lower().replace(" ", "-")
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    session_log_path: Path | None = logs_dir / f"{safe_app_name}-{timestamp}.log"
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(session_log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        root.info("=== %s starting (level=%s) ===", app_name, logging.getLevelName(level))
        root.info("Session log file established: %s", session_log_path)
    except OSError as e:
        root.error("Failed to establish session log file: %s", e)
        session_log_path = None

    root._wordsprint_logging_configured = True  # type: ignore[attr-defined]
    root._wordsprint_session_log = session_log_path  # type: ignore[attr-defined]
    return session_log_path
