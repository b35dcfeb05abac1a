"""Caller-directed splices that are not tied to start or end events."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping

from bpmninject.errors import UnknownNodeError
from bpmninject.graph.FlowNode import EXECUTION_TYPE_ATTR, TOPIC_ATTR
from bpmninject.graph.mutations import BrokenReference

if TYPE_CHECKING:
    from bpmninject.graph.rewriter import GraphRewriter

logger = logging.getLogger(__name__)

CUSTOM_SERVICE_TASK_PREFIX = "CustomServiceTask"

# Shorthand keys mapped onto the vendor execution attributes.
RESERVED_KEYS: dict[str, str] = {
    "type": EXECUTION_TYPE_ATTR,
    "topic": TOPIC_ATTR,
}

# The generated identifier is never overridden by a caller.
FORBIDDEN_KEYS = frozenset({"id"})


def insert_between(
    rewriter: GraphRewriter,
    after_id: str,
    before_id: str,
    attributes: Mapping[str, str],
    *,
    strict: bool = False,
) -> str:
    """Insert a service task with flows ``after_id -> T -> before_id``.

    No existing flow is touched, so ``after_id`` may end up with several
    outgoing flows.

    ``attributes["name"]`` becomes the display name. ``type`` and ``topic``
    set ``camunda:type`` and ``camunda:topic``; ``id`` is rejected. Every
    other key is applied verbatim, and prefixed keys such as
    ``camunda:class`` use the document's binding for that prefix. A key
    whose prefix the document does not bind (``foo:bar``) is written under
    its literal name, so the serialized XML cannot be parsed again until the
    caller declares the prefix.

    Endpoint ids are not required to exist. In the default permissive mode
    an unknown id still gets its flow and is recorded as a
    ``BrokenReference`` on the rewriter; keeping the process consistent is
    then the caller's job. With ``strict=True`` unknown ids and unbound
    prefixes raise before anything is created.

    Args:
        rewriter: Rewriter owning the document and identifier counters.
        after_id: Node the new task follows.
        before_id: Node the new task precedes.
        attributes: Task attributes; must include ``name``.
        strict: Reject unknown endpoints and unbound attribute prefixes.

    Returns:
        Identifier of the new task.

    Raises:
        ValueError: If ``attributes`` has no ``name``, has an ``id``, or (in
            strict mode) uses an unbound prefix.
        UnknownNodeError: In strict mode, if an endpoint is not in the process.
    """
    name = attributes.get("name")
    if name is None:
        raise ValueError("Custom service task requires a 'name' attribute")
    forbidden = FORBIDDEN_KEYS.intersection(attributes)
    if forbidden:
        raise ValueError(f"Custom service task attribute(s) not allowed: {', '.join(sorted(forbidden))}")

    document = rewriter.document
    unbound = [key for key in attributes if not document.is_bound(RESERVED_KEYS.get(key, key))]

    missing = [node_id for node_id in (after_id, before_id) if not rewriter.query.has_node(node_id)]
    if strict and missing:
        raise UnknownNodeError(missing[0])
    if strict and unbound:
        raise ValueError(f"Unbound namespace prefix in attribute(s): {', '.join(unbound)}")

    task = rewriter.add_service_task(str(name), prefix=CUSTOM_SERVICE_TASK_PREFIX)
    for key, value in attributes.items():
        if key == "name":
            continue
        task.set_attribute(RESERVED_KEYS.get(key, key), str(value))

    inbound = rewriter.add_flow(after_id, task.id)
    outbound = rewriter.add_flow(task.id, before_id)

    if after_id in missing:
        rewriter.record_broken_reference(BrokenReference(inbound.id, after_id, "sourceRef"))
    if before_id in missing:
        rewriter.record_broken_reference(BrokenReference(outbound.id, before_id, "targetRef"))
    if missing:
        logger.warning("%s references unknown node(s): %s", task.id, ", ".join(missing))
    if unbound:
        logger.warning("%s has attribute(s) with unbound prefix: %s", task.id, ", ".join(unbound))

    logger.debug("Inserted %s between %s and %s", task.id, after_id, before_id)
    return task.id


__all__ = ["CUSTOM_SERVICE_TASK_PREFIX", "FORBIDDEN_KEYS", "RESERVED_KEYS", "insert_between"]
