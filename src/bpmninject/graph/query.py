"""Read-only queries over the process graph.

Every query walks the direct children of the process at call time and
returns a new list. Later mutations do not change a list already returned,
which lets the rewriter snapshot a node's flows and then mutate freely.
"""

from __future__ import annotations

from typing import Iterator

from bpmninject.document import BpmnDocument, local_name
from bpmninject.graph.FlowNode import FlowNode, NodeRole
from bpmninject.graph.relations import SEQUENCE_FLOW_TAG, SequenceFlow


class GraphQuery:
    """Node and flow lookups for one document's process."""

    def __init__(self, document: BpmnDocument) -> None:
        self._document = document

    def iter_nodes(self) -> Iterator[FlowNode]:
        """Iterate non-flow process children in document order."""
        for element in self._document.iter_children():
            name = local_name(element.tag)
            if name and name != SEQUENCE_FLOW_TAG:
                yield FlowNode(element, self._document)

    def iter_flows(self) -> Iterator[SequenceFlow]:
        """Iterate sequence flows in document order."""
        for element in self._document.iter_children():
            if local_name(element.tag) == SEQUENCE_FLOW_TAG:
                yield SequenceFlow(element)

    def find_by_role(self, role: NodeRole) -> list[FlowNode]:
        """Return all nodes with the given role, in document order."""
        return [node for node in self.iter_nodes() if node.role == role]

    def find_by_id(self, node_id: str) -> FlowNode | None:
        """Return the node with this id, or None."""
        for node in self.iter_nodes():
            if node.id == node_id:
                return node
        return None

    def has_node(self, node_id: str) -> bool:
        """True if a node with this id is a child of the process."""
        return self.find_by_id(node_id) is not None

    def find_flow(self, flow_id: str) -> SequenceFlow | None:
        """Return the sequence flow with this id, or None."""
        for flow in self.iter_flows():
            if flow.id == flow_id:
                return flow
        return None

    def find_outgoing(self, node_id: str) -> list[SequenceFlow]:
        """Return flows whose ``sourceRef`` is ``node_id``."""
        return [flow for flow in self.iter_flows() if flow.source_ref == node_id]

    def find_incoming(self, node_id: str) -> list[SequenceFlow]:
        """Return flows whose ``targetRef`` is ``node_id``."""
        return [flow for flow in self.iter_flows() if flow.target_ref == node_id]


__all__ = ["GraphQuery"]
