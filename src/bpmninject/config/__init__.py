"""
bpmninject.config - Configuration loading and defaults
"""

from bpmninject.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG
from bpmninject.config.loader import (
    ConfigLoader,
    _apply_env_overrides,
    _try_parse_env_value,
    dump_toml,
    find_config_file,
    load_config,
    merge_configs,
    parse_toml,
    parse_toml_document,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "ConfigLoader",
    "dump_toml",
    "find_config_file",
    "load_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
]
