"""Extension activation: run the declaration phase, collect options once, bind them."""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from icie.evscode.config import ConfigEntry, bind, collect_entries
from icie.evscode.manifest import DEFAULT_TITLE, build_schema
from icie.evscode.settings import SETTINGS_FILE, load_settings

logger = logging.getLogger(__name__)

# Imported in this order; option declaration order follows it.
DECLARING_MODULES = (
    "icie.dir",
    "icie.test.view.render",
)


@dataclass(frozen=True)
class Extension:
    """Activated extension state shared by command handlers."""

    entries: tuple[ConfigEntry, ...]
    settings: dict[str, Any]
    settings_path: Path
    schema: dict[str, Any]


def load_declarations() -> None:
    """Import every declaring module so its options are registered."""
    for module_name in DECLARING_MODULES:
        importlib.import_module(module_name)


def activate(settings_path: Path | None = None, *, title: str = DEFAULT_TITLE) -> Extension:
    load_declarations()
    entries = collect_entries()
    path = settings_path or SETTINGS_FILE
    settings = load_settings(path)
    bind(entries, settings)
    logger.debug("Activated with %d options, %d overrides", len(entries), len(settings))
    return Extension(
        entries=entries,
        settings=settings,
        settings_path=path,
        schema=build_schema(entries, title),
    )


__all__ = ["DECLARING_MODULES", "Extension", "activate", "load_declarations"]
