"""JSON-based settings persistence for the market-day calendar."""

import json
import logging
import os
from datetime import date

from calendar_logic import ANCHOR_DATE

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".market-day-calendar.json")

_DEFAULTS = {
    "anchor_date": ANCHOR_DATE,
    "clamp_days": True,
    "show_week_numbers": True,
}


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing or invalid keys."""
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

    if "anchor_date" in stored:
        try:
            settings["anchor_date"] = date.fromisoformat(stored["anchor_date"])
        except (TypeError, ValueError):
            logger.warning("Invalid anchor_date %r, using %s",
                           stored["anchor_date"], ANCHOR_DATE.isoformat())
    for key in ("clamp_days", "show_week_numbers"):
        if key in stored and isinstance(stored[key], bool):
            settings[key] = stored[key]
    return settings


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    data = dict(settings)
    if isinstance(data.get("anchor_date"), date):
        data["anchor_date"] = data["anchor_date"].isoformat()
    with open(_SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
