"""
bpmninject.commands.insert_cmd - Insert a custom service task between two nodes.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from bpmninject.commands import load_configuration
from bpmninject.injector import ServiceTaskInjector


def parse_attributes(pairs: list[str]) -> dict[str, str] | None:
    """Parse ``KEY=VALUE`` strings; returns None on the first malformed pair."""
    attributes: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            print(f"Error: Invalid attribute '{pair}', expected KEY=VALUE", file=sys.stderr)
            return None
        attributes[key] = value
    return attributes


def run(args: argparse.Namespace) -> int:
    """Run the insert command.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    extra = parse_attributes(args.attr or [])
    if extra is None:
        return 1

    attributes = {"name": args.name}
    if args.type:
        attributes["type"] = args.type
    if args.topic:
        attributes["topic"] = args.topic
    attributes.update(extra)

    config = load_configuration(args)
    xml_text = Path(args.input).read_text(encoding="utf-8")
    injector = ServiceTaskInjector.from_config(xml_text, config)

    task_id = injector.insert_between(args.after, args.before, attributes, strict=args.strict)
    injector.save_to_file(args.output)

    for broken in injector.broken_references():
        print(f"Warning: {broken}", file=sys.stderr)

    if not args.quiet:
        print(task_id)
    return 0
