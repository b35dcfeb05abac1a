"""
bpmninject.config.defaults - Built-in configuration values.
"""

from __future__ import annotations

from typing import Any, Dict

CONFIG_FILENAME = ".bpmninject.toml"
LOCAL_CONFIG_FILENAME = ".bpmninject.local.toml"
ENV_PREFIX = "BPMNINJECT_"

DEFAULT_CONFIG: Dict[str, Any] = {
    "inject": {
        "add_pre_process_task": True,
        "add_post_process_task": True,
        "pre_process_task_name": "Pre-Process Service Task",
        "post_process_task_name": "Post-Process Service Task",
    },
    "service_task": {
        "type": "external",
        "topic": "service-task-topic",
    },
    "ids": {
        "seed": 1000,
    },
}
