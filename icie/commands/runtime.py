"""Runtime context helpers for command handlers."""

from __future__ import annotations

import argparse
from pathlib import Path

from icie.extension import Extension, activate


def command_runtime(args: argparse.Namespace) -> Extension:
    """Return the activated extension from ``args.runtime`` or activate one."""
    runtime = getattr(args, "runtime", None)
    if isinstance(runtime, Extension):
        return runtime
    settings = getattr(args, "settings", None)
    return activate(Path(settings) if settings else None)


__all__ = ["command_runtime"]
