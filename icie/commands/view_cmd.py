"""view command: render a results file as the HTML test view."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from icie.commands.runtime import command_runtime
from icie.test.verdict import load_runs
from icie.test.view.render import render
from icie.utils import colorize, print_error, safe_write_text

logger = logging.getLogger(__name__)


def cmd_view(args: argparse.Namespace) -> None:
    command_runtime(args)
    try:
        runs = load_runs(Path(args.results))
        html = render(runs)
    except (OSError, KeyError, ValueError, json.JSONDecodeError) as e:
        logger.debug("Rendering %s failed", args.results, exc_info=True)
        print_error(f"could not render {args.results}: {e}")
        sys.exit(1)

    output = getattr(args, "output", None)
    if not output:
        print(html)
        return
    try:
        safe_write_text(output, html)
    except OSError as e:
        print_error(f"could not write {output}: {e}")
        sys.exit(1)
    failed = sum(1 for run in runs if not run.success())
    print(colorize(f"  Rendered {len(runs)} tests ({failed} failing) to {output}", "green"))
