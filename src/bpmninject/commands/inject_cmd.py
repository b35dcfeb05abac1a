"""
bpmninject.commands.inject_cmd - Inject pre/post-process service tasks.
"""

from __future__ import annotations

import argparse

from bpmninject.commands import load_configuration
from bpmninject.injector import InjectOptions, inject_service_tasks


def run(args: argparse.Namespace) -> int:
    """Run the inject command.

    Command-line flags override the ``[inject]`` table of the config.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    config = load_configuration(args)
    options = InjectOptions.from_config(config)

    if args.no_pre:
        options.add_pre_process_task = False
    if args.no_post:
        options.add_post_process_task = False
    if args.pre_name:
        options.pre_process_task_name = args.pre_name
    if args.post_name:
        options.post_process_task_name = args.post_name

    injector = inject_service_tasks(args.input, args.output, options, config=config)

    if not args.quiet:
        created = injector.mutation_log.count("add_node")
        print(f"Injected {created} service task(s). Output saved to: {args.output}")
    return 0
