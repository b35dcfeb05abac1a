"""Graph rewriter - splices service tasks into a process.

The two anchored rewrites behave differently on purpose:

- After a start event, the start event's original outgoing flows are
  removed and re-created from the new task, so successor flows get new ids.
- Before an end event, the end event's incoming flows are retargeted in
  place, so predecessor flows keep their ids.

Both snapshot the anchor's flows before creating any flow that touches the
anchor.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping

from bpmninject.graph.FlowNode import EXECUTION_TYPE_ATTR, TOPIC_ATTR, FlowNode, NodeRole
from bpmninject.graph.mutations import BrokenReference, MutationEntry, MutationLog
from bpmninject.graph.query import GraphQuery
from bpmninject.graph.relations import SEQUENCE_FLOW_TAG, SequenceFlow
from bpmninject.ids import IdGenerator

if TYPE_CHECKING:
    from bpmninject.document import BpmnDocument

logger = logging.getLogger(__name__)

SERVICE_TASK_PREFIX = "ServiceTask"
FLOW_PREFIX = "Flow"
DEFAULT_SERVICE_TASK_TYPE = "external"
DEFAULT_SERVICE_TASK_TOPIC = "service-task-topic"


class GraphRewriter:
    """Mutating operations over one document's process.

    Node identifiers and flow identifiers come from separate generators;
    each generator advances by one per identifier it hands out.

    Attributes:
        document: The document being rewritten.
        query: Snapshot queries over the same document.
        mutation_log: Record of every change made through this rewriter.
    """

    def __init__(
        self,
        document: BpmnDocument,
        node_ids: IdGenerator | None = None,
        flow_ids: IdGenerator | None = None,
        mutation_log: MutationLog | None = None,
        service_task_type: str = DEFAULT_SERVICE_TASK_TYPE,
        service_task_topic: str = DEFAULT_SERVICE_TASK_TOPIC,
    ) -> None:
        self.document = document
        self.query = GraphQuery(document)
        self.node_ids = node_ids or IdGenerator()
        self.flow_ids = flow_ids or IdGenerator()
        self.mutation_log = mutation_log if mutation_log is not None else MutationLog()
        self.service_task_type = service_task_type
        self.service_task_topic = service_task_topic
        self._broken_references: list[BrokenReference] = []

    # Primitive mutations

    def add_service_task(self, name: str, prefix: str = SERVICE_TASK_PREFIX) -> FlowNode:
        """Create a service task and append it to the process.

        The task carries the configured execution type and topic.

        Args:
            name: Display name of the task.
            prefix: Identifier prefix.

        Returns:
            The new node.
        """
        task_id = self.node_ids.next_id(prefix)
        element = self.document.create_element(
            NodeRole.SERVICE_TASK.value,
            {
                "id": task_id,
                "name": name,
                EXECUTION_TYPE_ATTR: self.service_task_type,
                TOPIC_ATTR: self.service_task_topic,
            },
        )
        self.document.append(element)
        self.mutation_log.append(
            MutationEntry(
                operation="add_node",
                target_id=task_id,
                before_state={},
                after_state={"role": NodeRole.SERVICE_TASK.value, "name": name},
            )
        )
        return FlowNode(element, self.document)

    def add_flow(self, source_id: str, target_id: str) -> SequenceFlow:
        """Create a sequence flow and append it to the process.

        Endpoints are not checked against the process.
        """
        flow_id = self.flow_ids.next_id(FLOW_PREFIX)
        element = self.document.create_element(
            SEQUENCE_FLOW_TAG,
            {"id": flow_id, "sourceRef": source_id, "targetRef": target_id},
        )
        self.document.append(element)
        self.mutation_log.append(
            MutationEntry(
                operation="add_flow",
                target_id=flow_id,
                before_state={},
                after_state={"source_id": source_id, "target_id": target_id},
            )
        )
        return SequenceFlow(element)

    def remove_flow(self, flow: SequenceFlow) -> None:
        """Remove a sequence flow from the process."""
        self.document.remove(flow.element)
        self.mutation_log.append(
            MutationEntry(
                operation="remove_flow",
                target_id=flow.id,
                before_state={"source_id": flow.source_ref, "target_id": flow.target_ref},
                after_state={},
            )
        )

    def retarget_flow(self, flow: SequenceFlow, target_id: str) -> None:
        """Point an existing flow at a new target, keeping its id."""
        old_target = flow.target_ref
        flow.target_ref = target_id
        self.mutation_log.append(
            MutationEntry(
                operation="retarget_flow",
                target_id=flow.id,
                before_state={"target_id": old_target},
                after_state={"target_id": target_id},
            )
        )

    # Anchored rewrites

    def inject_after_each_start(self, name: str) -> list[str]:
        """Insert a service task directly after every start event.

        ``S -> X`` becomes ``S -> T -> X`` for each original successor
        ``X``. A start event with no outgoing flows ends up as ``S -> T``.

        Args:
            name: Display name for each new task.

        Returns:
            Identifiers of the created tasks, in start-event order.
        """
        created: list[str] = []
        for start in self.query.find_by_role(NodeRole.START_EVENT):
            task = self.add_service_task(name)
            outgoing = self.query.find_outgoing(start.id)

            self.add_flow(start.id, task.id)
            for flow in outgoing:
                self.add_flow(task.id, flow.target_ref)
                self.remove_flow(flow)

            logger.debug(
                "Injected %s after %s (%d successor flows moved)",
                task.id,
                start.id,
                len(outgoing),
            )
            created.append(task.id)
        return created

    def inject_before_each_end(self, name: str) -> list[str]:
        """Insert a service task directly before every end event.

        ``X -> E`` becomes ``X -> T -> E``; the ``X -> E`` flow itself is
        retargeted to ``T``.

        Args:
            name: Display name for each new task.

        Returns:
            Identifiers of the created tasks, in end-event order.
        """
        created: list[str] = []
        for end in self.query.find_by_role(NodeRole.END_EVENT):
            task = self.add_service_task(name)
            incoming = self.query.find_incoming(end.id)

            self.add_flow(task.id, end.id)
            for flow in incoming:
                self.retarget_flow(flow, task.id)

            logger.debug(
                "Injected %s before %s (%d predecessor flows retargeted)",
                task.id,
                end.id,
                len(incoming),
            )
            created.append(task.id)
        return created

    def insert_between(
        self,
        after_id: str,
        before_id: str,
        attributes: Mapping[str, str],
        strict: bool = False,
    ) -> str:
        """Insert a custom service task between two nodes.

        See ``bpmninject.graph.splice.insert_between``.
        """
        from bpmninject.graph.splice import insert_between

        return insert_between(self, after_id, before_id, attributes, strict=strict)

    # Broken references

    def record_broken_reference(self, reference: BrokenReference) -> None:
        """Remember a flow endpoint that names no node."""
        self._broken_references.append(reference)

    def broken_references(self) -> list[BrokenReference]:
        """Dangling endpoints created by permissive splices."""
        return list(self._broken_references)


__all__ = [
    "DEFAULT_SERVICE_TASK_TOPIC",
    "DEFAULT_SERVICE_TASK_TYPE",
    "FLOW_PREFIX",
    "SERVICE_TASK_PREFIX",
    "GraphRewriter",
]
