# core/node.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Doubly-linked, multi-parent graph node with per-host family constraints

"""Generic node for causally structured graphs.

A Node sits in the sequence of nodes of one host (prev/next) and may be
linked to nodes of other hosts as parents and children. For nodes x and y:

    parent:  x is a parent of y if x happens before y, their hosts differ,
             and no node on x's host lies between x and y
    child:   x is a child of y if and only if y is a parent of x
    family:  x is family of y if x is y's parent or child
    next:    x is the next node of y if both share a host and x directly
             follows y; prev is the inverse

Pictorially:

    |  |  |     -- C is a parent of X, X is a child of C
    A  C  E     -- A is the previous node of X, not a parent
    | /|  |     -- B is the next node of X, not a child
    |/ |  |     -- C is not a parent of G
    X  D  F
    |  |\\ |
    |  | \\|
    B  |  G

Guarantees, held after every public operation:
  •  node.get_next().get_prev() is node whenever get_next() is not None
  •  x is a child of y if and only if y is a parent of x
  •  all children of a node have distinct hosts; so do all parents
  •  head and tail sentinels have no family
  •  no node is family of a node on its own host

Nodes hold an arbitrary payload and report every structural change to the
graph that owns them (see core.graph_events).
"""

from __future__ import annotations
from typing import Dict, Generic, List, Optional, TypeVar

from .exceptions import NodeStructureError
from .graph_events import (
    AddFamilyEvent,
    AddNodeEvent,
    GraphEvent,
    GraphObserver,
    RemoveFamilyEvent,
    RemoveNodeEvent,
)

T = TypeVar("T")


class Node(Generic[T]):
    """A graph node carrying `payload`.

    Attributes:
        node_id: Identifier, unique within the allocator that produced it
        payload: Data carried by the node (None for sentinels)
    """

    def __init__(self, node_id: int, payload: Optional[T] = None):
        self.node_id = node_id
        self.payload = payload

        self._prev: Optional[Node[T]] = None
        self._next: Optional[Node[T]] = None
        self._host_to_child: Dict[str, Node[T]] = {}
        self._host_to_parent: Dict[str, Node[T]] = {}
        self._host: Optional[str] = None
        self._is_head = False
        self._is_tail = False
        self._graph: Optional[GraphObserver] = None

    @classmethod
    def head(cls, node_id: int, host: str, graph: Optional[GraphObserver] = None) -> Node[T]:
        """Create a head sentinel for `host`."""
        node: Node[T] = cls(node_id)
        node._is_head = True
        node._host = host
        node._graph = graph
        return node

    @classmethod
    def tail(cls, node_id: int, host: str, graph: Optional[GraphObserver] = None) -> Node[T]:
        """Create a tail sentinel for `host`."""
        node: Node[T] = cls(node_id)
        node._is_tail = True
        node._host = host
        node._graph = graph
        return node

    @staticmethod
    def link_sentinels(head: Node[T], tail: Node[T]) -> None:
        """Join a fresh head and tail into an empty host sequence."""
        if not head.is_head() or not tail.is_tail():
            raise NodeStructureError("link_sentinels expects a head and a tail node")
        head._next = tail
        tail._prev = head

    # --- Accessors ---------------------------------------------------------

    @property
    def host(self) -> Optional[str]:
        return self._host

    @property
    def graph(self) -> Optional[GraphObserver]:
        return self._graph

    def is_head(self) -> bool:
        return self._is_head

    def is_tail(self) -> bool:
        return self._is_tail

    def is_dummy(self) -> bool:
        """True for head and tail sentinels."""
        return self._is_head or self._is_tail

    def is_linked(self) -> bool:
        return self._prev is not None and self._next is not None

    def get_next(self) -> Optional[Node[T]]:
        return self._next

    def get_prev(self) -> Optional[Node[T]]:
        return self._prev

    def get_parents(self) -> List[Node[T]]:
        return list(self._host_to_parent.values())

    def get_children(self) -> List[Node[T]]:
        return list(self._host_to_child.values())

    def get_family(self) -> List[Node[T]]:
        return self.get_parents() + self.get_children()

    def get_connections(self) -> List[Optional[Node[T]]]:
        """Prev, next (possibly sentinels or None), then all family."""
        return [self._prev, self._next] + self.get_family()

    def get_parent_by_host(self, host: str) -> Optional[Node[T]]:
        return self._host_to_parent.get(host)

    def get_child_by_host(self, host: str) -> Optional[Node[T]]:
        return self._host_to_child.get(host)

    def has_parents(self) -> bool:
        return bool(self._host_to_parent)

    def has_children(self) -> bool:
        return bool(self._host_to_child)

    def has_family(self) -> bool:
        return self.has_parents() or self.has_children()

    # --- Sequence mutation -------------------------------------------------

    def insert_next(self, node: Node[T]) -> None:
        """Move `node` to directly after this one.

        The node is first removed from wherever it was, then takes over this
        node's host and graph.

        Raises:
            NodeStructureError: This is a tail, this node is not linked, or
                `node` is a sentinel
        """
        if node.is_dummy():
            raise NodeStructureError("Head and tail nodes cannot be inserted")
        if self._next is node:
            return
        if self._is_tail:
            raise NodeStructureError("You cannot insert a node after a tail node")
        if self._next is None:
            raise NodeStructureError("You cannot insert a node next to a detached node")
        if node is self:
            raise NodeStructureError("A node cannot be inserted next to itself")

        node.remove()
        node._prev = self
        node._next = self._next
        node._prev._next = node
        node._next._prev = node

        node._graph = self._graph
        node._host = self._host

        self._notify_graph(AddNodeEvent(node, node._prev, node._next))

    def insert_prev(self, node: Node[T]) -> None:
        """Move `node` to directly before this one.

        Raises:
            NodeStructureError: This is a head, this node is not linked, or
                `node` is a sentinel
        """
        if node.is_dummy():
            raise NodeStructureError("Head and tail nodes cannot be inserted")
        if self._prev is node:
            return
        if self._is_head:
            raise NodeStructureError("You cannot insert a node before a head node")
        if self._prev is None:
            raise NodeStructureError("You cannot insert a node next to a detached node")
        if node is self:
            raise NodeStructureError("A node cannot be inserted next to itself")

        node.remove()
        node._next = self
        node._prev = self._prev
        node._next._prev = node
        node._prev._next = node

        node._graph = self._graph
        node._host = self._host

        self._notify_graph(AddNodeEvent(node, node._prev, node._next))

    def remove(self) -> None:
        """Unlink this node and sever all of its family links.

        Does nothing for a node that is already detached. Each severed family
        link is reported before the removal of the node itself.

        Raises:
            NodeStructureError: This is a head or tail sentinel
        """
        if self.is_dummy():
            raise NodeStructureError("Head and tail nodes cannot be removed")

        if self._prev is None or self._next is None:
            return

        prev, nxt = self._prev, self._next
        prev._next = nxt
        nxt._prev = prev
        self._prev = None
        self._next = None

        for parent in list(self._host_to_parent.values()):
            del parent._host_to_child[self._host]
            self._notify_graph(RemoveFamilyEvent(parent, self))

        for child in list(self._host_to_child.values()):
            del child._host_to_parent[self._host]
            self._notify_graph(RemoveFamilyEvent(self, child))

        self._host_to_parent = {}
        self._host_to_child = {}

        self._notify_graph(RemoveNodeEvent(self, prev, nxt))

        self._host = None
        self._graph = None

    # --- Family mutation ---------------------------------------------------

    def _check_family_target(self, node: Node[T], relation: str) -> None:
        if node.is_dummy() or self.is_dummy():
            raise NodeStructureError(f"Cannot add {relation} to or from a head or tail node")
        if node._host == self._host:
            raise NodeStructureError(
                f"A node cannot be the {relation} of another node who has the same host"
            )

    def add_child(self, node: Node[T]) -> None:
        """Make `node` a child of this node.

        Any existing child on `node`'s host, and any existing parent of
        `node` on this node's host, is unlinked first.

        Raises:
            NodeStructureError: Either node is a sentinel, or both share a host
        """
        self._check_family_target(node, "child")

        if self._host_to_child.get(node._host) is node:
            return

        self.remove_child_by_host(node._host)
        self._host_to_child[node._host] = node

        node.remove_parent_by_host(self._host)
        node._host_to_parent[self._host] = self

        self._notify_graph(AddFamilyEvent(self, node))

    def add_parent(self, node: Node[T]) -> None:
        """Make `node` a parent of this node.

        Raises:
            NodeStructureError: Either node is a sentinel, or both share a host
        """
        self._check_family_target(node, "parent")

        if self._host_to_parent.get(node._host) is node:
            return

        self.remove_parent_by_host(node._host)
        self._host_to_parent[node._host] = node

        node.remove_child_by_host(self._host)
        node._host_to_child[self._host] = self

        self._notify_graph(AddFamilyEvent(node, self))

    def remove_child(self, node: Node[T]) -> None:
        """Unlink `node` if it is a child of this node."""
        if self._host_to_child.get(node._host) is not node:
            return

        del self._host_to_child[node._host]
        del node._host_to_parent[self._host]

        self._notify_graph(RemoveFamilyEvent(self, node))

    def remove_parent(self, node: Node[T]) -> None:
        """Unlink `node` if it is a parent of this node."""
        if self._host_to_parent.get(node._host) is not node:
            return

        del self._host_to_parent[node._host]
        del node._host_to_child[self._host]

        self._notify_graph(RemoveFamilyEvent(node, self))

    def remove_family(self, node: Node[T]) -> None:
        self.remove_child(node)
        self.remove_parent(node)

    def remove_child_by_host(self, host: Optional[str]) -> None:
        child = self._host_to_child.get(host)
        if child is not None:
            self.remove_child(child)

    def remove_parent_by_host(self, host: Optional[str]) -> None:
        parent = self._host_to_parent.get(host)
        if parent is not None:
            self.remove_parent(parent)

    def clear_children(self) -> None:
        for child in list(self._host_to_child.values()):
            self.remove_child(child)

    def clear_parents(self) -> None:
        for parent in list(self._host_to_parent.values()):
            self.remove_parent(parent)

    def clear_family(self) -> None:
        self.clear_children()
        self.clear_parents()

    def _notify_graph(self, event: GraphEvent) -> None:
        if self._graph is not None:
            self._graph.notify(event)

    def __repr__(self) -> str:
        kind = "head" if self._is_head else "tail" if self._is_tail else "node"
        return f"Node({kind} {self.node_id} @ {self._host})"
