# core/__init__.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Core module public API for causal graph construction

"""Core components for reconstructing causal order from vector-clock logs.

This module turns parsed log events into a causal graph: every event gets
its immediate happened-before predecessor (the previous event on its host,
or an event on another host whose clock snapshot it observed) and a
vertical rank that respects those edges. The result is what a rendering
layer needs to lay out one column per host with cross-host edges.

Primary Components:
    CausalGraphBuilder: Happened-before resolution and rank assignment
    GraphNode: An event together with its edge and rank annotations
    HappenedBefore, EdgeKind: The incoming edge of an event
    Node: Generic doubly-linked node with per-host parent/child links
    ModelGraph: Per-host node chains built from a causal graph

Example:
    >>> from parser import parse_log
    >>> from core import CausalGraphBuilder
    >>> log = parse_log(raw_text, pattern)
    >>> graph = CausalGraphBuilder(log.get_log_events(""))
    >>> [(node.host, node.pos) for node in graph.nodes]
"""

from .causal_graph import CausalGraphBuilder, EdgeKind, GraphNode, HappenedBefore
from .exceptions import (
    CausalCycleError,
    CausalSourceMissingError,
    GraphError,
    NodeStructureError,
)
from .graph_events import (
    AddFamilyEvent,
    AddNodeEvent,
    GraphEvent,
    RemoveFamilyEvent,
    RemoveNodeEvent,
)
from .model_graph import ModelGraph
from .node import Node

__all__ = [
    "CausalGraphBuilder",
    "EdgeKind",
    "GraphNode",
    "HappenedBefore",
    "Node",
    "ModelGraph",
    "GraphEvent",
    "AddNodeEvent",
    "RemoveNodeEvent",
    "AddFamilyEvent",
    "RemoveFamilyEvent",
    "GraphError",
    "CausalSourceMissingError",
    "CausalCycleError",
    "NodeStructureError",
]

__version__ = "1.0.0"
__description__ = "Causal graph construction for vector-clock annotated logs"
