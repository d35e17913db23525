"""paths command: show where the solution and tests are expected."""

from __future__ import annotations

import argparse

from icie import dir as icie_dir
from icie.commands.runtime import command_runtime


def cmd_paths(args: argparse.Namespace) -> None:
    command_runtime(args)
    print(f"  solution  {icie_dir.solution()}")
    print(f"  tests     {icie_dir.tests()}")
