"""
bpmninject - Service task injection for BPMN process diagrams

bpmninject parses a BPMN 2.0 document, finds the start and end events of
its process, and splices new service tasks into the sequence-flow graph
while keeping every flow connected.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bpmninject")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from bpmninject.errors import (
    BpmnInjectError,
    DocumentParseError,
    ProcessNotFoundError,
    UnknownNodeError,
)
from bpmninject.ids import IdGenerator
from bpmninject.injector import InjectOptions, ServiceTaskInjector, inject_service_tasks

__all__ = [
    "__version__",
    "BpmnInjectError",
    "DocumentParseError",
    "IdGenerator",
    "InjectOptions",
    "ProcessNotFoundError",
    "ServiceTaskInjector",
    "UnknownNodeError",
    "inject_service_tasks",
]
