"""
bpmninject.errors - Exception hierarchy.
"""

from __future__ import annotations


class BpmnInjectError(Exception):
    """Base class for errors raised by bpmninject."""


class DocumentParseError(BpmnInjectError):
    """The input text is not well-formed XML."""


class ProcessNotFoundError(BpmnInjectError):
    """The document contains no process element."""


class UnknownNodeError(KeyError):
    """A strict splice referenced a node that is not in the process."""

    def __init__(self, node_id: str) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"Node '{self.node_id}' not found in process"


__all__ = [
    "BpmnInjectError",
    "DocumentParseError",
    "ProcessNotFoundError",
    "UnknownNodeError",
]
