"""Identifier generation for newly created process elements."""

from __future__ import annotations

DEFAULT_SEED = 1000


class IdGenerator:
    """Monotonic, prefix-qualified identifier source.

    Every call consumes one number from a single counter, whatever the
    prefix. Generated identifiers are not checked against identifiers that
    already exist in a loaded document.

    Example:
        >>> ids = IdGenerator()
        >>> ids.next_id("ServiceTask")
        'ServiceTask_1000'
        >>> ids.next_id("Flow")
        'Flow_1001'
    """

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self._next = seed

    def next_id(self, prefix: str) -> str:
        """Return ``{prefix}_{n}`` and advance the counter."""
        value = self._next
        self._next += 1
        return f"{prefix}_{value}"

    def peek(self) -> int:
        """Return the number the next call will use."""
        return self._next


__all__ = ["DEFAULT_SEED", "IdGenerator"]
