"""Relations - Sequence flows between process nodes.

A SequenceFlow is a directed edge identified by its own ``id`` and naming
its endpoints through ``sourceRef``/``targetRef``. Endpoints are plain
identifiers, so a flow can reference a node that does not exist.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

SEQUENCE_FLOW_TAG = "sequenceFlow"


class SequenceFlow:
    """A directed edge in the process graph.

    Setting ``source_ref`` or ``target_ref`` rewrites the underlying
    element in place; the flow keeps its identifier.

    Attributes:
        element: The wrapped ``sequenceFlow`` element.
    """

    def __init__(self, element: ET.Element) -> None:
        self.element = element

    @property
    def id(self) -> str:
        return self.element.get("id", "")

    @property
    def source_ref(self) -> str:
        return self.element.get("sourceRef", "")

    @source_ref.setter
    def source_ref(self, node_id: str) -> None:
        self.element.set("sourceRef", node_id)

    @property
    def target_ref(self) -> str:
        return self.element.get("targetRef", "")

    @target_ref.setter
    def target_ref(self, node_id: str) -> None:
        self.element.set("targetRef", node_id)

    def __eq__(self, other: object) -> bool:
        """Check equality based on the flow identifier."""
        if not isinstance(other, SequenceFlow):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"SequenceFlow(id={self.id!r}, {self.source_ref} -> {self.target_ref})"


__all__ = ["SEQUENCE_FLOW_TAG", "SequenceFlow"]
