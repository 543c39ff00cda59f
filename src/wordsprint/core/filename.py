# -*- coding: utf-8 -*-
"""Suggested filenames for exported writing."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from wordsprint.constants import APP_NAME, FILENAME_COMPONENTS

_CUSTOM_PREFIX_DISALLOWED = re.compile(r"[^A-Za-z0-9_-]")
_PROMPT_DISALLOWED = re.compile(r"[^A-Za-z0-9_]")


def sanitize_custom_prefix(prefix: str) -> str:
    return _CUSTOM_PREFIX_DISALLOWED.sub("", prefix.strip())


def sanitize_prompt(prompt: str) -> str:
    safe = _PROMPT_DISALLOWED.sub("_", prompt)
    return safe or "Writing"


def _component_order(options: dict[str, Any]) -> list[str]:
    # Stored order may predate a component; append anything missing.
    order = [c for c in options.get("order", []) if c in FILENAME_COMPONENTS]
    order.extend(c for c in FILENAME_COMPONENTS if c not in order)
    return order


def build_filename(prompt: str, when: datetime, options: dict[str, Any] | None = None) -> str:
    """Join the enabled filename components in their configured order.

    ``options`` is the ``filename`` settings section. With
    ``use_default_structure`` the app prefix, prompt, date and time are used in
    default order and the custom prefix is ignored.
    """
    options = options or {}
    use_default = bool(options.get("use_default_structure", True))
    if use_default:
        enabled = {"app_prefix", "prompt", "date", "time"}
        order = list(FILENAME_COMPONENTS)
    else:
        enabled = {
            name
            for name, key in (
                ("app_prefix", "include_app_prefix"),
                ("custom_prefix", "include_custom_prefix"),
                ("prompt", "include_prompt"),
                ("date", "include_date"),
                ("time", "include_time"),
            )
            if options.get(key, False)
        }
        order = _component_order(options)

    values = {
        "app_prefix": APP_NAME,
        "custom_prefix": sanitize_custom_prefix(str(options.get("custom_prefix", ""))),
        "prompt": sanitize_prompt(prompt),
        "date": when.strftime("%Y-%m-%d"),
        "time": when.strftime("%H-%M-%S"),
    }
    parts = [values[name] for name in order if name in enabled and values[name]]
    base_name = "_".join(parts) or f"{APP_NAME}_Save"
    return base_name + ".txt"
