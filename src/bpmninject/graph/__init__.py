"""
bpmninject.graph - Process graph model, queries and rewrites.
"""

from bpmninject.graph.FlowNode import FlowNode, NodeRole
from bpmninject.graph.mutations import BrokenReference, MutationEntry, MutationLog
from bpmninject.graph.query import GraphQuery
from bpmninject.graph.relations import SequenceFlow
from bpmninject.graph.rewriter import GraphRewriter
from bpmninject.graph.splice import insert_between

__all__ = [
    "BrokenReference",
    "FlowNode",
    "GraphQuery",
    "GraphRewriter",
    "MutationEntry",
    "MutationLog",
    "NodeRole",
    "SequenceFlow",
    "insert_between",
]
