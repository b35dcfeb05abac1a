"""
bpmninject.cli - Command-line interface.

Main entry point for the bpmninject CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from bpmninject import __version__
from bpmninject.commands import config_cmd, inject_cmd, insert_cmd


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="bpmninject",
        description="Inject service tasks into BPMN process diagrams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bpmninject inject in.bpmn out.bpmn                  # Pre- and post-process tasks
  bpmninject inject in.bpmn out.bpmn --no-post        # Only after start events
  bpmninject inject in.bpmn out.bpmn --pre-name Init  # Custom task name
  bpmninject insert in.bpmn out.bpmn --after Task_A --before EndEvent_1 \\
      --name Audit --type external --topic audit-topic

Configuration:
  bpmninject config show        # View merged settings
  bpmninject config path        # Show config file location

For detailed command help: bpmninject <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"bpmninject {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # inject command
    inject_parser = subparsers.add_parser(
        "inject",
        help="Add service tasks after start events and before end events",
    )
    inject_parser.add_argument("input", type=Path, help="BPMN file to read")
    inject_parser.add_argument("output", type=Path, help="Where to write the result")
    inject_parser.add_argument(
        "--no-pre",
        action="store_true",
        help="Skip the task after each start event",
    )
    inject_parser.add_argument(
        "--no-post",
        action="store_true",
        help="Skip the task before each end event",
    )
    inject_parser.add_argument(
        "--pre-name",
        help="Name of the pre-process task",
        metavar="NAME",
    )
    inject_parser.add_argument(
        "--post-name",
        help="Name of the post-process task",
        metavar="NAME",
    )

    # insert command
    insert_parser = subparsers.add_parser(
        "insert",
        help="Insert a custom service task between two nodes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Unknown node ids are accepted and reported as warnings unless --strict
is given, in which case nothing is written.
""",
    )
    insert_parser.add_argument("input", type=Path, help="BPMN file to read")
    insert_parser.add_argument("output", type=Path, help="Where to write the result")
    insert_parser.add_argument("--after", required=True, help="Node the task follows", metavar="ID")
    insert_parser.add_argument("--before", required=True, help="Node the task precedes", metavar="ID")
    insert_parser.add_argument("--name", required=True, help="Task display name")
    insert_parser.add_argument("--type", help="Execution type (camunda:type)")
    insert_parser.add_argument("--topic", help="Routing topic (camunda:topic)")
    insert_parser.add_argument(
        "--attr",
        action="append",
        help="Extra attribute, repeatable (e.g. camunda:asyncBefore=true)",
        metavar="KEY=VALUE",
    )
    insert_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail if --after or --before names no node",
    )

    # config command
    config_parser = subparsers.add_parser("config", help="Show configuration")
    config_parser.add_argument(
        "action",
        nargs="?",
        choices=["show", "path"],
        default="show",
        help="What to show (default: show)",
    )

    return parser


def configure_logging(args: argparse.Namespace) -> None:
    """Set the root log level from -v / -q."""
    if args.verbose:
        level = logging.INFO
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install bpmninject[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args)

    try:
        if args.command == "inject":
            return inject_cmd.run(args)
        elif args.command == "insert":
            return insert_cmd.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
