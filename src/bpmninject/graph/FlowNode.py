"""FlowNode - Node view over BPMN process elements.

This module provides the node side of the process graph:
- NodeRole: Enum of structural roles the rewriter cares about
- FlowNode: Identifier-addressed view of a process child element
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from enum import Enum
from typing import TYPE_CHECKING

from bpmninject.document import local_name

if TYPE_CHECKING:
    from bpmninject.document import BpmnDocument

EXECUTION_TYPE_ATTR = "camunda:type"
TOPIC_ATTR = "camunda:topic"

_CORE_ATTRIBUTES = frozenset({"id", "name"})


class NodeRole(Enum):
    """Structural role of a node in the process graph."""

    START_EVENT = "startEvent"
    END_EVENT = "endEvent"
    SERVICE_TASK = "serviceTask"
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: object) -> NodeRole:
        """Map an element tag to its role; unknown tags are OTHER."""
        name = local_name(tag)
        for role in cls:
            if role.value == name:
                return role
        return cls.OTHER


class FlowNode:
    """A node in the process graph.

    Wraps the underlying element, so reads always reflect the current
    document state. Two nodes are equal when their identifiers are equal,
    regardless of attribute content.

    Attributes:
        element: The wrapped process child element.
        role: Structural role derived from the element tag.
    """

    def __init__(self, element: ET.Element, document: BpmnDocument) -> None:
        self.element = element
        self.role = NodeRole.from_tag(element.tag)
        self._document = document

    @property
    def id(self) -> str:
        return self.element.get("id", "")

    @property
    def name(self) -> str:
        return self.element.get("name", "")

    @property
    def attributes(self) -> dict[str, str]:
        """Extension attributes keyed by prefixed name (``camunda:topic``)."""
        return {
            self._document.prefixed(key): value
            for key, value in self.element.attrib.items()
            if key not in _CORE_ATTRIBUTES
        }

    def get_attribute(self, key: str, default: str | None = None) -> str | None:
        """Read an attribute by plain or prefixed name."""
        return self.element.get(self._document.qualify(key), default)

    def set_attribute(self, key: str, value: str) -> None:
        """Write an attribute by plain or prefixed name."""
        self.element.set(self._document.qualify(key), value)

    @property
    def execution_type(self) -> str | None:
        """Vendor execution-type marker (``camunda:type``)."""
        return self.get_attribute(EXECUTION_TYPE_ATTR)

    @property
    def topic(self) -> str | None:
        """Vendor routing-topic marker (``camunda:topic``)."""
        return self.get_attribute(TOPIC_ATTR)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlowNode):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"FlowNode(id={self.id!r}, role={self.role.name}, name={self.name!r})"


__all__ = ["EXECUTION_TYPE_ATTR", "TOPIC_ATTR", "FlowNode", "NodeRole"]
