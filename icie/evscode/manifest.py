"""Settings schema for the host editor's extension manifest."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from icie.evscode.config import ConfigEntry
from icie.utils import safe_write_text

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "ICIE"


def build_schema(entries: tuple[ConfigEntry, ...], title: str = DEFAULT_TITLE) -> dict[str, Any]:
    """Return a ``contributes.configuration`` object listing every option in order."""
    properties: dict[str, Any] = {}
    for entry in entries:
        prop: dict[str, Any] = {
            "type": entry.type_tag,
            "default": entry.json_default,
            "description": entry.description,
        }
        if entry.enum_values:
            prop["enum"] = list(entry.enum_values)
        if entry.minimum is not None:
            prop["minimum"] = entry.minimum
        properties[entry.name] = prop
    return {"type": "object", "title": title, "properties": properties}


def write_manifest(path: Path, schema: dict[str, Any]) -> dict[str, Any]:
    """Merge ``schema`` into ``path`` under ``contributes.configuration``.

    Creates the manifest when absent. Other manifest keys are left alone.
    """
    manifest: dict[str, Any] = {}
    if path.exists():
        try:
            loaded = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            raise ValueError(f"{path} is not valid JSON: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ValueError(f"{path} must contain a JSON object")
        manifest = loaded
    contributes = manifest.setdefault("contributes", {})
    contributes["configuration"] = schema
    safe_write_text(path, json.dumps(manifest, indent=2) + "\n")
    logger.debug("Wrote %d options to %s", len(schema["properties"]), path)
    return manifest


__all__ = ["DEFAULT_TITLE", "build_schema", "write_manifest"]
