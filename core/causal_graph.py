# core/causal_graph.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Happened-before resolution and vertical ranking of logged events

"""Causal graph construction from vector-clock annotated events.

Given the events of one execution, the builder groups them by host (in
input order, which is taken to be each host's local causal order), gives
every event its immediate happened-before predecessor, and assigns every
event a vertical rank that is a valid topological numbering of those edges.

Happened-before resolution, per host and in input order:

    1. The first event of a host has no predecessor unless its clock already
       mentions other hosts. In that case it is resolved against a genesis
       event on the same host whose own clock is 0.
    2. Every other event e is compared with its predecessor p on the same
       host. For each other host h whose entry changed between p and e, the
       event on h whose own clock equals e[h] is looked up. If that event
       agrees with e on every changed host, e gets an external edge from it.
       Otherwise e gets a child edge from p.

The exact-agreement test means an external edge is only drawn when the
clock update can be traced to a single snapshot on another host. With
concurrent updates from several hosts no single event may agree on every
changed host, and the edge falls back to a child edge.

Ranking walks each host's sequence with a cursor and a running rank. A
child edge gives running rank + 1; an external edge from x gives
max(running rank + 1, rank(x) + 1) and first ranks x's host up to and
including x. The walk uses an explicit stack of (host, stop index) frames
so arbitrarily deep cross-host chains do not exhaust the interpreter stack.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from model.log_event import LogEvent
from model.vector_timestamp import VectorTimestamp
from utils.logger import get_logger

from .exceptions import CausalCycleError, CausalSourceMissingError


class EdgeKind(Enum):
    """Kind of happened-before edge leading into an event.

    Values:
        CHILD: The predecessor is the previous event on the same host
        EXTERNAL: The predecessor is an event on another host
    """

    CHILD = "child"
    EXTERNAL = "external"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class HappenedBefore:
    kind: EdgeKind
    target: GraphNode

    @property
    def is_external(self) -> bool:
        return self.kind is EdgeKind.EXTERNAL


@dataclass(eq=False)
class GraphNode:
    """An event in the causal graph and the annotations derived for it.

    The LogEvent itself stays immutable; `happened_before` and `pos` are
    written by CausalGraphBuilder only.

    Attributes:
        event: The logged event
        index: Position of the event in its host's sequence
        genesis: True for the synthesized start event of a host
        happened_before: Incoming edge, or None for an origin event
        pos: Vertical rank (1-based), None until ranked
    """

    event: LogEvent
    index: int
    genesis: bool = False
    happened_before: Optional[HappenedBefore] = None
    pos: Optional[int] = None

    @property
    def host(self) -> str:
        return self.event.host

    @property
    def timestamp(self) -> VectorTimestamp:
        return self.event.timestamp

    def is_external(self) -> bool:
        return self.happened_before is not None and self.happened_before.is_external

    def __str__(self) -> str:
        if self.genesis:
            return f"genesis@{self.host}"
        return f"#{self.event.event_id}@{self.host}:{self.timestamp.own_time}"


class CausalGraphBuilder:
    """Builds happened-before edges and ranks for a flat list of events.

    Attributes:
        hosts: Hosts in first-seen order
        nodes: Every event as a GraphNode, grouped by host
        edges: Nodes whose happened-before edge is external
    """

    def __init__(self, events: Iterable[LogEvent]):
        """Group `events` by host, resolve edges and assign ranks.

        Raises:
            CausalSourceMissingError: A clock refers to an own-clock value
                that no event on that host carries
            CausalCycleError: Edges between hosts form a cycle
        """
        logger = get_logger()

        self._events: Dict[str, List[GraphNode]] = {}
        self._by_clock: Dict[str, Dict[int, GraphNode]] = {}

        for event in events:
            sequence = self._events.setdefault(event.host, [])
            node = GraphNode(event, len(sequence))
            sequence.append(node)
            self._by_clock.setdefault(event.host, {}).setdefault(event.own_time, node)

        self._hosts: List[str] = list(self._events)

        self._resolve_happened_before()
        self._assign_ranks()

        self._nodes: List[GraphNode] = [
            node for host in self._hosts for node in self._events[host]
        ]
        self._edges: List[GraphNode] = [node for node in self._nodes if node.is_external()]

        logger.graph_built(len(self._nodes), len(self._edges), len(self._hosts), self.max_rank)

    # --- Results -----------------------------------------------------------

    @property
    def hosts(self) -> List[str]:
        return list(self._hosts)

    @property
    def nodes(self) -> List[GraphNode]:
        return list(self._nodes)

    @property
    def edges(self) -> List[GraphNode]:
        return list(self._edges)

    def get_nodes(self) -> List[GraphNode]:
        return self.nodes

    def get_edges(self) -> List[GraphNode]:
        return self.edges

    def get_events(self, host: str) -> List[GraphNode]:
        """Nodes of `host` in input order (empty for unknown hosts)."""
        return list(self._events.get(host, []))

    @property
    def max_rank(self) -> int:
        return max((node.pos or 0 for node in self._nodes), default=0)

    def host_event_counts(self) -> Dict[str, int]:
        return {host: len(self._events[host]) for host in self._hosts}

    def filter_edges(self, selection: Iterable[GraphNode]) -> List[GraphNode]:
        """External edges induced by a subset of the nodes.

        Returns, in selection order, the selected nodes whose external
        predecessor is selected as well. Ranks are not recomputed.
        """
        selected = list(selection)
        members = set(map(id, selected))
        edge_ids = set(map(id, self._edges))
        return [
            node
            for node in selected
            if id(node) in edge_ids and id(node.happened_before.target) in members
        ]

    def get_event_by_clock_value(self, host: str, clock_value: int) -> Optional[GraphNode]:
        """First event on `host` whose own clock equals `clock_value`."""
        return self._by_clock.get(host, {}).get(clock_value)

    # --- Happened-before ---------------------------------------------------

    def _resolve_happened_before(self) -> None:
        logger = get_logger()

        for host in self._hosts:
            sequence = self._events[host]
            for index, node in enumerate(sequence):
                if index > 0:
                    node.happened_before = self._happened_before(node, sequence[index - 1])
                elif any(name != host for name in node.timestamp.hosts()):
                    node.happened_before = self._happened_before(node, self._genesis(node))

                hb = node.happened_before
                if hb is None:
                    logger.edge_resolved(str(node), "origin")
                else:
                    logger.edge_resolved(str(node), str(hb.kind), str(hb.target))

    def _genesis(self, first: GraphNode) -> GraphNode:
        event = LogEvent(
            event_id=-1,
            text="",
            timestamp=VectorTimestamp({first.host: 0}, first.host),
            line_number=first.event.line_number,
        )
        return GraphNode(event, -1, genesis=True, pos=0)

    def _happened_before(self, node: GraphNode, prev: GraphNode) -> HappenedBefore:
        timestamp = node.timestamp
        updated_hosts = timestamp.compare_updated_hosts(prev.timestamp)

        for host in updated_hosts:
            clock_value = timestamp.get(host)
            source = self.get_event_by_clock_value(host, clock_value)
            if source is None:
                raise CausalSourceMissingError(
                    f"No event on host {host!r} has clock value {clock_value} "
                    f"(referenced on line {node.event.line_number})",
                    host,
                    clock_value,
                    node.event.line_number,
                )
            if timestamp.compare_hosts(source.timestamp, updated_hosts):
                return HappenedBefore(EdgeKind.EXTERNAL, source)

        return HappenedBefore(EdgeKind.CHILD, prev)

    # --- Ranking -----------------------------------------------------------

    def _assign_ranks(self) -> None:
        logger = get_logger()

        cursor = {host: 0 for host in self._hosts}
        running = {host: 0 for host in self._hosts}

        for start_host in self._hosts:
            stack: List[Tuple[str, int]] = [(start_host, len(self._events[start_host]) - 1)]

            while stack:
                host, stop = stack[-1]
                index = cursor[host]
                if index > stop:
                    stack.pop()
                    continue

                node = self._events[host][index]
                hb = node.happened_before

                if hb is not None and hb.is_external:
                    target = hb.target
                    if target.pos is None:
                        if any(frame_host == target.host for frame_host, _ in stack):
                            cycle = [frame_host for frame_host, _ in stack]
                            raise CausalCycleError(
                                f"Happened-before edges form a cycle through hosts {cycle}",
                                cycle,
                            )
                        # rank the source host up to the target first
                        stack.append((target.host, target.index))
                        continue
                    running[host] = max(running[host] + 1, target.pos + 1)
                    reason = f"after {target}"
                else:
                    running[host] += 1
                    reason = "local"

                node.pos = running[host]
                cursor[host] = index + 1
                logger.rank_assigned(str(node), node.pos, reason)
