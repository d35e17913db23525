"""manifest command: emit the settings schema for the editor manifest."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from icie.commands.runtime import command_runtime
from icie.evscode.manifest import build_schema, write_manifest
from icie.utils import colorize, print_error


def cmd_manifest(args: argparse.Namespace) -> None:
    ext = command_runtime(args)
    title = getattr(args, "title", None)
    schema = build_schema(ext.entries, title) if title else ext.schema

    output = getattr(args, "output", None)
    if not output:
        print(json.dumps(schema, indent=2))
        return

    try:
        write_manifest(Path(output), schema)
    except (OSError, ValueError) as e:
        print_error(f"could not write manifest: {e}")
        sys.exit(1)
    count = len(schema["properties"])
    print(colorize(f"  Wrote {count} options to {output}", "green"))
