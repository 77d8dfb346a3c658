"""JSON-based settings persistence for the month grid."""

import json
import os
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".month-grid-settings.json")

_DEFAULTS = {
    "holidays": [],
    "holiday_colors": {"CH": "#FF0000", "DE": "#FFD700", "CN": "#4CAF50"},
    "timezone": "local",
    "lead_padding_days": 7,
    "trail_padding_days": 43,
    "max_event_span_days": 732,
    "log_level": "INFO",
    "log_file": None,
}

_INT_KEYS = ("lead_padding_days", "trail_padding_days", "max_event_span_days")


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    settings["holidays"] = list(_DEFAULTS["holidays"])
    settings["holiday_colors"] = dict(_DEFAULTS["holiday_colors"])
    try:
        with open(path or _SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning(f"Ignoring unreadable settings file: {exc}")
        return settings
    if not isinstance(stored, dict):
        return settings

    if "holidays" in stored and isinstance(stored["holidays"], list):
        settings["holidays"] = [k for k in stored["holidays"] if isinstance(k, str)]
    if "holiday_colors" in stored and isinstance(stored["holiday_colors"], dict):
        settings["holiday_colors"] = dict(stored["holiday_colors"])
    for key in _INT_KEYS:
        value = stored.get(key)
        # bool is an int subclass
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            settings[key] = value
    for key in ("timezone", "log_level"):
        if isinstance(stored.get(key), str) and stored[key]:
            settings[key] = stored[key]
    if "log_file" in stored and (stored["log_file"] is None or isinstance(stored["log_file"], str)):
        settings["log_file"] = stored["log_file"]
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    with open(path or _SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Turn the "timezone" setting into a tzinfo.

    "local" (or empty) returns None, meaning the machine's local timezone.
    Raises ValueError for unknown zone names.
    """
    if not name or name.lower() in ("local", "system"):
        return None
    if name.upper() in ("UTC", "Z", "GMT"):
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {name!r}") from exc
