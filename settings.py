"""JSON-based settings persistence for the planner."""

import json
import os

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".lunar-planner-settings.json")

_DEFAULTS = {
    "data_dir": os.path.join(os.path.expanduser("~"), ".lunar-planner"),
    "window_width": None,
    "window_height": None,
    "yearly_view": False,
    "log_level": "INFO",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(path or _SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
        if not isinstance(stored, dict):
            return settings
        if isinstance(stored.get("data_dir"), str) and stored["data_dir"]:
            settings["data_dir"] = os.path.expanduser(stored["data_dir"])
        for key in ("window_width", "window_height"):
            if key in stored and isinstance(stored[key], int) and not isinstance(stored[key], bool):
                settings[key] = stored[key]
        if "yearly_view" in stored and isinstance(stored["yearly_view"], bool):
            settings["yearly_view"] = stored["yearly_view"]
        level = stored.get("log_level")
        if isinstance(level, str) and level.upper() in _LOG_LEVELS:
            settings["log_level"] = level.upper()
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        pass
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    with open(path or _SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
