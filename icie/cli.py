"""CLI entry point: argparse, subcommand routing."""

from __future__ import annotations

import argparse
import logging
import sys

USAGE_EXAMPLES = """
examples:
  icie config show
  icie config set icie.test.view.hideAc "If any test failed"
  icie config unset icie.dir.solutionStem
  icie manifest --output package.json
  icie paths
  icie view results.json --output view.html
"""


class _NoAbbrevArgumentParser(argparse.ArgumentParser):
    """Argparse parser variant that disables long-option abbreviation."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("allow_abbrev", False)
        super().__init__(*args, **kwargs)


def _add_config_parser(sub) -> None:
    p_config = sub.add_parser("config", help="Show/set/unset option overrides")
    config_sub = p_config.add_subparsers(dest="config_action")
    config_sub.add_parser("show", help="Show all options in declaration order")
    c_set = config_sub.add_parser("set", help="Override an option")
    c_set.add_argument("config_key", type=str, help="Option name")
    c_set.add_argument("config_value", type=str, help="Value to set")
    c_unset = config_sub.add_parser("unset", help="Reset an option to its default")
    c_unset.add_argument("config_key", type=str, help="Option name")


def _add_manifest_parser(sub) -> None:
    p_manifest = sub.add_parser("manifest", help="Emit the settings schema")
    p_manifest.add_argument("--output", type=str, metavar="FILE",
                            help="Merge into this package.json instead of printing")
    p_manifest.add_argument("--title", type=str, default=None, help="Schema title")


def _add_view_parser(sub) -> None:
    p_view = sub.add_parser("view", help="Render test results as HTML")
    p_view.add_argument("results", type=str, help="JSON list of test run records")
    p_view.add_argument("--output", type=str, metavar="FILE", help="Write HTML to file")


def create_parser() -> argparse.ArgumentParser:
    parser = _NoAbbrevArgumentParser(
        prog="icie",
        description="ICIE: competitive programming editor extension",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--settings", type=str, default=None,
                        help="Settings file (default: .icie/settings.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(
        dest="command",
        required=True,
        parser_class=_NoAbbrevArgumentParser,
    )
    _add_config_parser(sub)
    _add_manifest_parser(sub)
    sub.add_parser("paths", help="Show solution and tests paths")
    _add_view_parser(sub)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # Lazy-load command handlers
    from icie.commands.config_cmd import cmd_config
    from icie.commands.manifest_cmd import cmd_manifest
    from icie.commands.paths_cmd import cmd_paths
    from icie.commands.view_cmd import cmd_view

    commands = {
        "config": cmd_config,
        "manifest": cmd_manifest,
        "paths": cmd_paths,
        "view": cmd_view,
    }

    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)


if __name__ == "__main__":
    main()
