# core/model_graph.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Linked per-host node chains built from a causal graph

"""ModelGraph: the causal graph as linked nodes.

Every host owns a chain head <-> n1 <-> n2 <-> ... <-> tail of Nodes whose
payloads are the GraphNodes of that host, in input order. Each external
happened-before edge becomes a parent/child family link between the nodes
of the two events. The graph is the observer of its nodes: every
structural change is logged and forwarded to registered listeners, so
views built on top of it can react to insertions and removals.
"""

from __future__ import annotations
from typing import Callable, Dict, Iterator, List, Optional

from model.log_event import IdAllocator
from utils.logger import get_logger

from .causal_graph import CausalGraphBuilder, GraphNode
from .exceptions import NodeStructureError
from .graph_events import GraphEvent
from .node import Node

Listener = Callable[[GraphEvent], None]


class ModelGraph:
    """Per-host chains of nodes with head and tail sentinels."""

    def __init__(self, allocator: Optional[IdAllocator] = None):
        self._allocator = allocator if allocator is not None else IdAllocator()
        self._hosts: List[str] = []
        self._heads: Dict[str, Node[GraphNode]] = {}
        self._tails: Dict[str, Node[GraphNode]] = {}
        self._listeners: List[Listener] = []

    @classmethod
    def from_causal_graph(cls, builder: CausalGraphBuilder) -> ModelGraph:
        """Link the nodes of `builder` host by host and add external edges as family."""
        logger = get_logger()
        graph = cls()
        linked: Dict[int, Node[GraphNode]] = {}

        for host in builder.hosts:
            tail = graph.add_host(host)
            for graph_node in builder.get_events(host):
                node = graph.create_node(graph_node)
                tail.insert_prev(node)
                linked[id(graph_node)] = node

        for graph_node in builder.edges:
            source = linked[id(graph_node.happened_before.target)]
            source.add_child(linked[id(graph_node)])

        logger.debug(
            f"Model graph linked {len(linked)} nodes on {len(graph.hosts)} hosts"
        )
        return graph

    # --- Structure ---------------------------------------------------------

    def add_host(self, host: str) -> Node[GraphNode]:
        """Create the empty chain for `host` and return its tail."""
        if host in self._heads:
            raise NodeStructureError(f"Host {host!r} already exists in the graph")
        head: Node[GraphNode] = Node.head(self._allocator.next_id(), host, self)
        tail: Node[GraphNode] = Node.tail(self._allocator.next_id(), host, self)
        Node.link_sentinels(head, tail)
        self._hosts.append(host)
        self._heads[host] = head
        self._tails[host] = tail
        return tail

    def create_node(self, payload: GraphNode) -> Node[GraphNode]:
        """A detached node carrying `payload`, with an id from this graph."""
        return Node(self._allocator.next_id(), payload)

    @property
    def hosts(self) -> List[str]:
        return list(self._hosts)

    def get_head(self, host: str) -> Node[GraphNode]:
        return self._heads[host]

    def get_tail(self, host: str) -> Node[GraphNode]:
        return self._tails[host]

    def iter_host(self, host: str) -> Iterator[Node[GraphNode]]:
        """Non-sentinel nodes of `host`, head to tail."""
        node = self._heads[host].get_next()
        while node is not None and not node.is_tail():
            yield node
            node = node.get_next()

    def get_nodes(self) -> List[Node[GraphNode]]:
        return [node for host in self._hosts for node in self.iter_host(host)]

    # --- Observation -------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self, event: GraphEvent) -> None:
        """Receive a structural change from one of this graph's nodes."""
        get_logger().structure_changed(event.describe())
        for listener in list(self._listeners):
            listener(event)
