"""config command: show/set/unset option overrides."""

from __future__ import annotations

import argparse
import sys

from icie.commands.runtime import command_runtime
from icie.evscode.config import find_entry, to_json_value
from icie.evscode.settings import save_settings, set_setting_value, unset_setting_value
from icie.utils import colorize, print_error


def cmd_config(args: argparse.Namespace) -> None:
    """Handle config subcommands: show, set, unset."""
    action = getattr(args, "config_action", None)
    if action == "set":
        _config_set(args)
    elif action == "unset":
        _config_unset(args)
    else:
        _config_show(args)


def _config_show(args):
    """Print every declared option in declaration order with its current value."""
    ext = command_runtime(args)

    print(colorize("\n  ICIE Configuration\n", "bold"))
    if not ext.entries:
        print(colorize("  (no options declared)", "dim"))
    for entry in ext.entries:
        value = to_json_value(entry.handle.get())
        is_default = value == entry.json_default
        default_tag = colorize(" (default)", "dim") if is_default else ""
        print(f"  {entry.name:<32} {value}{default_tag}")
        print(colorize(f"  {'':32} {entry.description}", "dim"))
        if entry.enum_values:
            print(colorize(f"  {'':32} one of: {', '.join(entry.enum_values)}", "dim"))
    print()


def _config_set(args):
    """Set an option override."""
    ext = command_runtime(args)
    key = args.config_key

    try:
        value = set_setting_value(ext.settings, ext.entries, key, args.config_value)
    except (KeyError, ValueError) as e:
        print_error(str(e).strip("'\""))
        sys.exit(1)

    try:
        save_settings(ext.settings, ext.settings_path)
    except OSError as e:
        print_error(f"could not save settings: {e}")
        sys.exit(1)
    print(colorize(f"  Set {key} = {value}", "green"))


def _config_unset(args):
    """Drop an option override so its declared default applies."""
    ext = command_runtime(args)
    key = args.config_key

    try:
        unset_setting_value(ext.settings, ext.entries, key)
    except KeyError as e:
        print_error(str(e).strip("'\""))
        sys.exit(1)

    try:
        save_settings(ext.settings, ext.settings_path)
    except OSError as e:
        print_error(f"could not save settings: {e}")
        sys.exit(1)
    default = find_entry(ext.entries, key).json_default
    print(colorize(f"  Reset {key} to default ({default})", "green"))
