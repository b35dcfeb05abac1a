"""Audit records for process graph rewrites.

Every primitive change a splice makes (node added, flow added, flow
removed, flow retargeted) is appended to a MutationLog, and flow endpoints
that name no node are kept as BrokenReference records.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

OPERATIONS = ("add_node", "add_flow", "remove_flow", "retarget_flow")


@dataclass(frozen=True)
class BrokenReference:
    """A sequence flow endpoint that names no node in the process.

    Attributes:
        flow_id: ID of the flow holding the reference.
        node_id: ID that was referenced but doesn't exist.
        end: Which endpoint is dangling ("sourceRef" or "targetRef").
    """

    flow_id: str
    node_id: str
    end: str

    def __str__(self) -> str:
        return f"{self.flow_id}.{self.end} -> {self.node_id} (missing)"


@dataclass(frozen=True)
class MutationEntry:
    """One primitive change to the process.

    ``target_id`` is the node or flow that changed; ``before_state`` and
    ``after_state`` hold the endpoint or name values on either side.
    """

    operation: str
    target_id: str
    before_state: dict[str, Any]
    after_state: dict[str, Any]

    def __str__(self) -> str:
        return f"{self.operation}({self.target_id})"


class MutationLog:
    """Chronological record of the changes made through one rewriter."""

    def __init__(self) -> None:
        self._entries: list[MutationEntry] = []

    def append(self, entry: MutationEntry) -> None:
        if entry.operation not in OPERATIONS:
            raise ValueError(f"Unknown mutation operation: {entry.operation}")
        self._entries.append(entry)

    def iter_entries(self) -> Iterator[MutationEntry]:
        yield from self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def last(self) -> MutationEntry | None:
        """Return the most recent entry, or None if empty."""
        return self._entries[-1] if self._entries else None

    def operations(self) -> list[str]:
        """Operation names in chronological order."""
        return [entry.operation for entry in self._entries]

    def count(self, operation: str) -> int:
        """Number of entries for one operation, e.g. created nodes."""
        return sum(1 for entry in self._entries if entry.operation == operation)


__all__ = ["OPERATIONS", "BrokenReference", "MutationEntry", "MutationLog"]
