"""JSON-based settings persistence for the mini date picker."""

import json
import logging
import os

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".mini-date-picker-settings.json")

_DEFAULTS = {
    "show_today": True,
    "padding_confirmable": False,
    "copy_format": "%Y-%m-%d",
    "window_x": None,
    "window_y": None,
}


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(_SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", _SETTINGS_PATH, exc)
        return settings

    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", _SETTINGS_PATH)
        return settings
    for key in ("show_today", "padding_confirmable"):
        if key in stored and isinstance(stored[key], bool):
            settings[key] = stored[key]
    if "copy_format" in stored and isinstance(stored["copy_format"], str) and stored["copy_format"]:
        settings["copy_format"] = stored["copy_format"]
    for key in ("window_x", "window_y"):
        # bool is an int subclass
        if key in stored and isinstance(stored[key], int) and not isinstance(stored[key], bool):
            settings[key] = stored[key]
    return settings


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    with open(_SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
