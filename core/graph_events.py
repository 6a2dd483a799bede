# core/graph_events.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Structural change notifications emitted by graph nodes

"""Events describing structural changes to a linked node graph.

Nodes report every change to the graph that owns them. The owner is free
to react (for example by discarding a cached layout) or to ignore them.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .node import Node


class GraphObserver(Protocol):
    """Anything a node can report structural changes to."""

    def notify(self, event: GraphEvent) -> None: ...


@dataclass(frozen=True, eq=False)
class GraphEvent(ABC):
    """Base class for structural change events."""

    @abstractmethod
    def describe(self) -> str:
        """One-line description of the change."""


@dataclass(frozen=True, eq=False)
class AddNodeEvent(GraphEvent):
    """`node` was spliced in between `prev` and `next`."""

    node: Node[Any]
    prev: Node[Any]
    next: Node[Any]

    def describe(self) -> str:
        return f"added node {self.node.node_id} between {self.prev.node_id} and {self.next.node_id}"


@dataclass(frozen=True, eq=False)
class RemoveNodeEvent(GraphEvent):
    """`node` was unlinked from between `prev` and `next`."""

    node: Node[Any]
    prev: Node[Any]
    next: Node[Any]

    def describe(self) -> str:
        return f"removed node {self.node.node_id} from between {self.prev.node_id} and {self.next.node_id}"


@dataclass(frozen=True, eq=False)
class AddFamilyEvent(GraphEvent):
    """`parent` became a parent of `child`."""

    parent: Node[Any]
    child: Node[Any]

    def describe(self) -> str:
        return f"linked parent {self.parent.node_id} to child {self.child.node_id}"


@dataclass(frozen=True, eq=False)
class RemoveFamilyEvent(GraphEvent):
    """`parent` is no longer a parent of `child`."""

    parent: Node[Any]
    child: Node[Any]

    def describe(self) -> str:
        return f"unlinked parent {self.parent.node_id} from child {self.child.node_id}"
