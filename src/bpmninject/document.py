"""Document - XML adapter for BPMN process documents.

This module wraps ``xml.etree.ElementTree`` so the graph layer can work in
terms of prefixed names (``bpmn:serviceTask``, ``camunda:topic``) instead of
Clark notation:
- BpmnDocument: parsed tree, namespace bookkeeping, element creation
- split_tag / local_name: helpers for ``{uri}local`` tags
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Iterator

from bpmninject.errors import DocumentParseError, ProcessNotFoundError

BPMN_MODEL_NS = "http://www.omg.org/spec/BPMN/20100524/MODEL"
CAMUNDA_NS = "http://camunda.org/schema/1.0/bpmn"

# Bindings used when the document itself does not declare the prefix.
DEFAULT_PREFIXES: dict[str, str] = {
    "bpmn": BPMN_MODEL_NS,
    "camunda": CAMUNDA_NS,
}

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_RESERVED_PREFIX = re.compile(r"ns\d+$")


def split_tag(tag: object) -> tuple[str | None, str]:
    """Split a Clark-notation name into (namespace, local name).

    Comments and processing instructions have non-string tags and yield
    ``(None, "")``.
    """
    if not isinstance(tag, str):
        return None, ""
    if tag.startswith("{"):
        uri, local = tag[1:].split("}", 1)
        return uri, local
    return None, tag


def local_name(tag: object) -> str:
    """Return the local part of an element tag."""
    return split_tag(tag)[1]


class BpmnDocument:
    """A parsed BPMN document with its single process element.

    The first ``process`` element in document order is the one every
    query and mutation targets. Namespace prefixes declared anywhere in the
    input are remembered so prefixed attribute names can be resolved and
    the same prefixes are used again on output.

    Attributes:
        root: Root element of the parsed tree.
        process: The process container element.
    """

    def __init__(
        self,
        root: ET.Element,
        namespaces: dict[str, str] | None = None,
        has_declaration: bool = False,
    ) -> None:
        self.root = root
        self._prefix_to_uri: dict[str, str] = dict(namespaces or {})
        self._has_declaration = has_declaration

        process = None
        for element in root.iter():
            if local_name(element.tag) == "process":
                process = element
                break
        if process is None:
            raise ProcessNotFoundError("No BPMN process found in the XML")
        self.process = process
        self.model_namespace, _ = split_tag(process.tag)

    @classmethod
    def from_string(cls, text: str) -> BpmnDocument:
        """Parse XML text into a document.

        Args:
            text: Raw XML content.

        Returns:
            The parsed BpmnDocument.

        Raises:
            DocumentParseError: If the text is not well-formed XML.
            ProcessNotFoundError: If no process element is present.
        """
        builder = ET.TreeBuilder(insert_comments=True, insert_pis=True)
        parser = ET.XMLParser(target=builder)
        try:
            parser.feed(text)
            root = parser.close()
        except ET.ParseError as e:
            raise DocumentParseError(f"Invalid BPMN XML: {e}") from e

        return cls(
            root,
            namespaces=_collect_namespaces(text),
            has_declaration=text.lstrip().startswith("<?xml"),
        )

    # Namespace handling

    @property
    def namespaces(self) -> dict[str, str]:
        """Prefix to URI bindings declared by the document."""
        return dict(self._prefix_to_uri)

    def resolve_prefix(self, prefix: str) -> str | None:
        """Return the URI bound to ``prefix``, falling back to well-known ones."""
        if prefix in self._prefix_to_uri:
            return self._prefix_to_uri[prefix]
        return DEFAULT_PREFIXES.get(prefix)

    def qualify(self, name: str) -> str:
        """Convert ``prefix:local`` to Clark notation.

        Unprefixed names, names already in Clark notation and names whose
        prefix is unknown are returned unchanged.
        """
        if name.startswith("{") or ":" not in name:
            return name
        prefix, local = name.split(":", 1)
        uri = self.resolve_prefix(prefix)
        if uri is None:
            return name
        return f"{{{uri}}}{local}"

    def is_bound(self, name: str) -> bool:
        """False only for a ``prefix:local`` name whose prefix has no URI."""
        if name.startswith("{") or ":" not in name:
            return True
        return self.resolve_prefix(name.split(":", 1)[0]) is not None

    def prefixed(self, name: str) -> str:
        """Convert a Clark-notation name back to ``prefix:local``."""
        uri, local = split_tag(name)
        if uri is None:
            return name
        for prefix, bound in self._prefix_to_uri.items():
            if bound == uri and prefix:
                return f"{prefix}:{local}"
        for prefix, bound in DEFAULT_PREFIXES.items():
            if bound == uri:
                return f"{prefix}:{local}"
        return name

    def model_tag(self, name: str) -> str:
        """Tag for a model element in the same namespace as the process."""
        if self.model_namespace is None:
            return name
        return f"{{{self.model_namespace}}}{name}"

    # Process children

    def iter_children(self) -> Iterator[ET.Element]:
        """Iterate direct children of the process in document order."""
        yield from self.process

    def create_element(self, name: str, attributes: dict[str, str]) -> ET.Element:
        """Create a detached model element.

        Args:
            name: Local element name, e.g. ``serviceTask``.
            attributes: Attribute values; prefixed keys are qualified.

        Returns:
            The new element. Callers append it with ``append()``.
        """
        element = ET.Element(self.model_tag(name))
        for key, value in attributes.items():
            element.set(self.qualify(key), value)
        return element

    def append(self, element: ET.Element) -> None:
        """Append an element as the last child of the process."""
        self.process.append(element)

    def remove(self, element: ET.Element) -> None:
        """Remove a direct child of the process."""
        self.process.remove(element)

    # Output

    def serialize(self) -> str:
        """Serialize the document back to XML text."""
        self._register_prefixes()
        body = ET.tostring(self.root, encoding="unicode")
        if self._has_declaration:
            return f"{XML_DECLARATION}\n{body}"
        return body

    def _register_prefixes(self) -> None:
        # ElementTree keeps one global prefix map; refresh it with this
        # document's bindings so output reuses the input prefixes.
        bindings = dict(self._prefix_to_uri)
        for prefix, uri in DEFAULT_PREFIXES.items():
            if prefix not in bindings and uri not in bindings.values():
                bindings[prefix] = uri
        for prefix, uri in bindings.items():
            if _RESERVED_PREFIX.match(prefix):
                continue
            ET.register_namespace(prefix, uri)


def _collect_namespaces(text: str) -> dict[str, str]:
    """Collect prefix bindings in declaration order; the first binding wins."""
    pull = ET.XMLPullParser(events=("start-ns",))
    pull.feed(text)
    pull.close()
    namespaces: dict[str, str] = {}
    for _event, (prefix, uri) in pull.read_events():
        namespaces.setdefault(prefix, uri)
    return namespaces


__all__ = [
    "BPMN_MODEL_NS",
    "CAMUNDA_NS",
    "DEFAULT_PREFIXES",
    "BpmnDocument",
    "local_name",
    "split_tag",
]
