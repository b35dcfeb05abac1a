"""
bpmninject.commands - CLI command implementations
"""

from __future__ import annotations

import argparse

from bpmninject.config import ConfigLoader, load_config


def load_configuration(args: argparse.Namespace) -> ConfigLoader:
    """Load configuration from ``--config`` or by searching upward from cwd."""
    return load_config(getattr(args, "config", None))


__all__ = ["load_configuration"]
