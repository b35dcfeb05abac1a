"""
bpmninject.commands.config_cmd - Show configuration.
"""

from __future__ import annotations

import argparse
import sys

from bpmninject.commands import load_configuration
from bpmninject.config import dump_toml


def run(args: argparse.Namespace) -> int:
    """Run the config command.

    ``show`` prints the merged configuration as TOML, ``path`` prints the
    location of the config file in use.
    """
    config = load_configuration(args)

    if args.action == "path":
        if config.path is None:
            print("No configuration file found (using defaults).", file=sys.stderr)
            return 1
        print(config.path)
        return 0

    print(dump_toml(config.get_raw()), end="")
    return 0
