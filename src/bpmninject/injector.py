"""
bpmninject.injector - Public facade over one BPMN document.

ServiceTaskInjector owns a parsed document together with its identifier
counters, so two injectors never share sequence numbers. One injector must
not be used from several threads at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from bpmninject.document import BpmnDocument
from bpmninject.graph.mutations import BrokenReference, MutationLog
from bpmninject.graph.query import GraphQuery
from bpmninject.graph.rewriter import (
    DEFAULT_SERVICE_TASK_TOPIC,
    DEFAULT_SERVICE_TASK_TYPE,
    GraphRewriter,
)
from bpmninject.ids import DEFAULT_SEED, IdGenerator

if TYPE_CHECKING:
    from bpmninject.config import ConfigLoader

logger = logging.getLogger(__name__)

DEFAULT_PRE_PROCESS_TASK_NAME = "Pre-Process Service Task"
DEFAULT_POST_PROCESS_TASK_NAME = "Post-Process Service Task"

PathLike = Union[str, Path]

# Option names as written by JavaScript-style callers.
_CAMEL_CASE_OPTIONS = {
    "addPreProcessTask": "add_pre_process_task",
    "addPostProcessTask": "add_post_process_task",
    "preProcessTaskName": "pre_process_task_name",
    "postProcessTaskName": "post_process_task_name",
}


@dataclass
class InjectOptions:
    """Which anchored rewrites ``inject_service_tasks`` runs, and task names."""

    add_pre_process_task: bool = True
    add_post_process_task: bool = True
    pre_process_task_name: str = DEFAULT_PRE_PROCESS_TASK_NAME
    post_process_task_name: str = DEFAULT_POST_PROCESS_TASK_NAME

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> InjectOptions:
        """Build options from snake_case or camelCase keys; others are ignored."""
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in options.items():
            key = _CAMEL_CASE_OPTIONS.get(key, key)
            if key in known and value is not None:
                values[key] = value
        return cls(**values)

    @classmethod
    def from_config(cls, config: ConfigLoader) -> InjectOptions:
        """Build options from the ``[inject]`` table."""
        return cls.from_mapping(config.section("inject"))


class ServiceTaskInjector:
    """Splices service tasks into the process of one BPMN document.

    Example:
        >>> injector = ServiceTaskInjector(xml_text)
        >>> injector.inject_after_each_start("Init")
        ['ServiceTask_1000']
        >>> xml = injector.serialize()

    Raises:
        DocumentParseError: If the XML is malformed.
        ProcessNotFoundError: If the document has no process element.
    """

    def __init__(
        self,
        xml_text: str,
        *,
        seed: int = DEFAULT_SEED,
        service_task_type: str = DEFAULT_SERVICE_TASK_TYPE,
        service_task_topic: str = DEFAULT_SERVICE_TASK_TOPIC,
    ) -> None:
        self.document = BpmnDocument.from_string(xml_text)
        self.mutation_log = MutationLog()
        self._rewriter = GraphRewriter(
            self.document,
            node_ids=IdGenerator(seed),
            flow_ids=IdGenerator(seed),
            mutation_log=self.mutation_log,
            service_task_type=service_task_type,
            service_task_topic=service_task_topic,
        )

    @classmethod
    def from_file(cls, path: PathLike, **kwargs: Any) -> ServiceTaskInjector:
        """Read and parse a BPMN file."""
        return cls(Path(path).read_text(encoding="utf-8"), **kwargs)

    @classmethod
    def from_config(cls, xml_text: str, config: ConfigLoader) -> ServiceTaskInjector:
        """Construct with seed and task attributes taken from configuration."""
        return cls(
            xml_text,
            seed=int(config.get("ids.seed", DEFAULT_SEED)),
            service_task_type=config.get("service_task.type", DEFAULT_SERVICE_TASK_TYPE),
            service_task_topic=config.get("service_task.topic", DEFAULT_SERVICE_TASK_TOPIC),
        )

    @property
    def query(self) -> GraphQuery:
        return self._rewriter.query

    def inject_after_each_start(self, name: str = DEFAULT_PRE_PROCESS_TASK_NAME) -> list[str]:
        """Insert a service task after every start event."""
        return self._rewriter.inject_after_each_start(name)

    def inject_before_each_end(self, name: str = DEFAULT_POST_PROCESS_TASK_NAME) -> list[str]:
        """Insert a service task before every end event."""
        return self._rewriter.inject_before_each_end(name)

    def insert_between(
        self,
        after_id: str,
        before_id: str,
        attributes: Mapping[str, str],
        strict: bool = False,
    ) -> str:
        """Insert a custom service task between two nodes.

        Unknown node ids are accepted unless ``strict`` is set; see
        ``bpmninject.graph.splice.insert_between``.

        Returns:
            Identifier of the new task.
        """
        return self._rewriter.insert_between(after_id, before_id, attributes, strict=strict)

    def broken_references(self) -> list[BrokenReference]:
        """Dangling flow endpoints created by permissive inserts."""
        return self._rewriter.broken_references()

    def serialize(self) -> str:
        """Return the rewritten document as XML text."""
        return self.document.serialize()

    def save_to_file(self, path: PathLike) -> None:
        """Write the rewritten document to ``path`` as UTF-8."""
        Path(path).write_text(self.serialize(), encoding="utf-8")


def inject_service_tasks(
    input_path: PathLike,
    output_path: PathLike,
    options: Optional[Union[InjectOptions, Mapping[str, Any]]] = None,
    config: Optional[ConfigLoader] = None,
) -> ServiceTaskInjector:
    """Read a BPMN file, run the configured rewrites and write the result.

    Pre-process injection runs before post-process injection. Empty task
    names fall back to the defaults.

    Args:
        input_path: BPMN file to read.
        output_path: Destination for the rewritten XML.
        options: InjectOptions or a mapping of option names. When None,
            options come from ``config`` (or the defaults).
        config: Optional configuration supplying options, seed and
            service task attributes.

    Returns:
        The injector used, for inspecting created ids or the mutation log.

    Raises:
        OSError: If reading or writing fails.
        DocumentParseError: If the input is not well-formed XML.
        ProcessNotFoundError: If the input has no process element.
    """
    if options is None:
        options = InjectOptions.from_config(config) if config is not None else InjectOptions()
    elif not isinstance(options, InjectOptions):
        options = InjectOptions.from_mapping(options)

    try:
        xml_text = Path(input_path).read_text(encoding="utf-8")
        if config is not None:
            injector = ServiceTaskInjector.from_config(xml_text, config)
        else:
            injector = ServiceTaskInjector(xml_text)

        if options.add_pre_process_task:
            injector.inject_after_each_start(
                options.pre_process_task_name or DEFAULT_PRE_PROCESS_TASK_NAME
            )
        if options.add_post_process_task:
            injector.inject_before_each_end(
                options.post_process_task_name or DEFAULT_POST_PROCESS_TASK_NAME
            )

        injector.save_to_file(output_path)
    except Exception as e:
        logger.exception("Error injecting service tasks: %s", e)
        raise

    logger.info("Successfully injected service tasks. Output saved to: %s", output_path)
    return injector


__all__ = [
    "DEFAULT_POST_PROCESS_TASK_NAME",
    "DEFAULT_PRE_PROCESS_TASK_NAME",
    "InjectOptions",
    "ServiceTaskInjector",
    "inject_service_tasks",
]
