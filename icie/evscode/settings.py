"""User overrides for declared options (.icie/settings.json).

Stands in for the host editor's settings store: a flat JSON object keyed by
option name. Keys no declared option knows about are preserved untouched.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from icie.evscode.config import ConfigEntry, find_entry, parse_value, to_json_value
from icie.utils import PROJECT_ROOT, safe_write_text

SETTINGS_FILE = PROJECT_ROOT / ".icie" / "settings.json"
logger = logging.getLogger(__name__)


def load_settings(path: Path | None = None) -> dict[str, Any]:
    """Load overrides from disk; a missing or unreadable file yields ``{}``."""
    p = path or SETTINGS_FILE
    if not p.exists():
        return {}
    try:
        settings = json.loads(p.read_text())
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        logger.debug("Could not read settings from %s: %s", p, exc)
        return {}
    if not isinstance(settings, dict):
        logger.debug("Settings file %s is not a JSON object; ignoring", p)
        return {}
    return settings


def save_settings(settings: dict[str, Any], path: Path | None = None) -> None:
    """Save overrides to disk atomically."""
    p = path or SETTINGS_FILE
    safe_write_text(p, json.dumps(settings, indent=2) + "\n")


def set_setting_value(
    settings: dict[str, Any],
    entries: tuple[ConfigEntry, ...],
    key: str,
    raw: str,
) -> Any:
    """Parse ``raw`` per the option's type and store it; returns the stored value."""
    entry = find_entry(entries, key)
    try:
        value = parse_value(entry.python_type, raw, entry.minimum)
    except ValueError as exc:
        raise ValueError(f"Invalid value for {key}: {exc}") from exc
    settings[key] = to_json_value(value)
    return settings[key]


def unset_setting_value(
    settings: dict[str, Any],
    entries: tuple[ConfigEntry, ...],
    key: str,
) -> None:
    """Drop the override for ``key`` so the declared default applies again."""
    find_entry(entries, key)
    settings.pop(key, None)


__all__ = [
    "SETTINGS_FILE",
    "load_settings",
    "save_settings",
    "set_setting_value",
    "unset_setting_value",
]
