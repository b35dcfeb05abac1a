"""
bpmninject.config.loader - Locate, parse and merge TOML configuration.

Precedence, lowest to highest: DEFAULT_CONFIG, ``.bpmninject.toml``,
``.bpmninject.local.toml`` beside it, ``BPMNINJECT_<SECTION>_<KEY>``
environment variables.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import tomlkit
from tomlkit import TOMLDocument

from bpmninject.config.defaults import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    ENV_PREFIX,
    LOCAL_CONFIG_FILENAME,
)


class ConfigLoader:
    """Read-only view over a merged configuration dict.

    Keys are addressed with dots: ``loader.get("inject.pre_process_task_name")``.
    """

    def __init__(self, data: Dict[str, Any], path: Optional[Path] = None) -> None:
        self._data = data
        self.path = path

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ConfigLoader:
        """Create a loader over an existing dict (no defaults merged)."""
        return cls(copy.deepcopy(data))

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key, returning ``default`` when absent."""
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def section(self, name: str) -> Dict[str, Any]:
        """Return a copy of one top-level table, or an empty dict."""
        value = self._data.get(name, {})
        return dict(value) if isinstance(value, dict) else {}

    def get_raw(self) -> Dict[str, Any]:
        """Return a copy of the full configuration dict."""
        return copy.deepcopy(self._data)


def parse_toml_document(content: str) -> TOMLDocument:
    """Parse TOML text, keeping formatting for round-trip edits."""
    return tomlkit.parse(content)


def parse_toml(content: str) -> Dict[str, Any]:
    """Parse TOML text into plain Python values."""
    return parse_toml_document(content).unwrap()


def dump_toml(data: Dict[str, Any]) -> str:
    """Render a configuration dict as TOML text."""
    return tomlkit.dumps(data)


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Walk up from ``start`` looking for ``.bpmninject.toml``.

    Args:
        start: Directory to start from (defaults to the working directory).

    Returns:
        Path to the config file, or None if none is found.
    """
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


_TRUE_STRINGS = frozenset({"true", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "no", "off"})


def _try_parse_env_value(value: str) -> Any:
    """Convert an environment string to a typed value.

    ``true``/``yes``/``on`` and ``false``/``no``/``off`` (any case) become
    booleans, digit strings become ints, JSON arrays and objects are
    decoded. Anything else, including malformed JSON, is returned unchanged.
    """
    lowered = value.lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    if value.lstrip("-").isdigit():
        return int(value)
    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply ``BPMNINJECT_<SECTION>_<KEY>`` variables to a config dict.

    The longest existing section name that prefixes the remainder wins
    (``BPMNINJECT_SERVICE_TASK_TOPIC`` -> ``service_task.topic``); otherwise
    the first segment names the section:
    ``BPMNINJECT_IDS_SEED`` -> ``ids.seed``.
    """
    result = copy.deepcopy(config)
    sections = sorted(result, key=len, reverse=True)
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        remainder = name[len(ENV_PREFIX):].lower()
        if "_" not in remainder:
            continue
        for candidate in sections:
            if remainder.startswith(candidate + "_"):
                section, key = candidate, remainder[len(candidate) + 1:]
                break
        else:
            section, key = remainder.split("_", 1)
        table = result.setdefault(section, {})
        if isinstance(table, dict):
            table[key] = _try_parse_env_value(raw)
    return result


def load_config(config_path: Optional[Path] = None) -> ConfigLoader:
    """Load configuration with defaults, local overrides and env overrides.

    Args:
        config_path: Explicit config file. When None, ``find_config_file()``
            is used; with no file found only defaults and env apply.

    Returns:
        ConfigLoader over the merged configuration.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
    """
    data = copy.deepcopy(DEFAULT_CONFIG)

    path = config_path or find_config_file()
    if config_path is not None and not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    if path is not None:
        data = merge_configs(data, parse_toml(path.read_text(encoding="utf-8")))
        local = path.parent / LOCAL_CONFIG_FILENAME
        if local.is_file():
            data = merge_configs(data, parse_toml(local.read_text(encoding="utf-8")))

    return ConfigLoader(_apply_env_overrides(data), path=path)
