# tests/core_tests/test_node_scenarios.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Scenarios for the linked node primitive

"""Node – sequence splicing, family links, sentinels and change reporting."""

import pytest
from core.exceptions import NodeStructureError
from core.graph_events import (
    AddFamilyEvent,
    AddNodeEvent,
    GraphEvent,
    RemoveFamilyEvent,
    RemoveNodeEvent,
)
from core.node import Node


class RecordingGraph:
    """Collects every event reported by nodes."""

    def __init__(self):
        self.events = []

    def notify(self, event):
        self.events.append(event)

    def of_type(self, kind):
        return [e for e in self.events if isinstance(e, kind)]


def make_host(graph, host, ids):
    head = Node.head(next(ids), host, graph)
    tail = Node.tail(next(ids), host, graph)
    Node.link_sentinels(head, tail)
    return head, tail


def chain(head):
    """Node ids from head to tail inclusive."""
    ids = []
    node = head
    while node is not None:
        ids.append(node.node_id)
        node = node.get_next()
    return ids


class TestSequence:
    def setup_method(self):
        self.graph = RecordingGraph()
        self.ids = iter(range(1000))
        self.head, self.tail = make_host(self.graph, "a", self.ids)

    def node(self, payload=None):
        return Node(next(self.ids), payload)

    def test_sentinels_linked(self):
        assert self.head.get_next() is self.tail
        assert self.tail.get_prev() is self.head
        assert self.head.is_head() and self.head.is_dummy()
        assert self.tail.is_tail() and self.tail.is_dummy()

    def test_insert_takes_host_and_graph(self):
        n = self.node("x")
        assert n.host is None and n.graph is None
        self.head.insert_next(n)
        assert n.host == "a"
        assert n.graph is self.graph
        assert n.payload == "x"
        assert n.is_linked()

    def test_insert_prev_and_next_keep_order(self):
        n1, n2, n3 = self.node(), self.node(), self.node()
        self.tail.insert_prev(n1)
        self.tail.insert_prev(n3)
        n1.insert_next(n2)
        assert chain(self.head) == [self.head.node_id, n1.node_id, n2.node_id, n3.node_id, self.tail.node_id]
        assert n2.get_prev() is n1 and n2.get_next() is n3

    def test_insert_then_remove_restores_adjacency(self):
        n1, n2 = self.node(), self.node()
        self.tail.insert_prev(n1)
        before = chain(self.head)
        n1.insert_next(n2)
        n2.remove()
        assert chain(self.head) == before
        assert n2.get_prev() is None and n2.get_next() is None
        assert n2.host is None and n2.graph is None

    def test_insert_moves_existing_node(self):
        n1, n2 = self.node(), self.node()
        self.tail.insert_prev(n1)
        self.tail.insert_prev(n2)
        self.head.insert_next(n2)
        assert chain(self.head)[1:3] == [n2.node_id, n1.node_id]

    def test_insert_at_current_position_is_noop(self):
        n1 = self.node()
        self.head.insert_next(n1)
        count = len(self.graph.events)
        self.head.insert_next(n1)
        self.tail.insert_prev(n1)
        assert len(self.graph.events) == count

    def test_remove_detached_is_noop(self):
        n = self.node()
        n.remove()
        assert self.graph.events == []

    def test_events_reported(self):
        n = self.node()
        self.head.insert_next(n)
        n.remove()
        added = self.graph.of_type(AddNodeEvent)
        removed = self.graph.of_type(RemoveNodeEvent)
        assert len(added) == 1 and added[0].node is n
        assert added[0].prev is self.head and added[0].next is self.tail
        assert len(removed) == 1 and removed[0].prev is self.head
        assert "removed node" in removed[0].describe()

    @pytest.mark.parametrize("operation", ["insert_after_tail", "insert_before_head", "detached", "self"])
    def test_invalid_insertions(self, operation):
        n = self.node()
        with pytest.raises(NodeStructureError):
            if operation == "insert_after_tail":
                self.tail.insert_next(n)
            elif operation == "insert_before_head":
                self.head.insert_prev(n)
            elif operation == "detached":
                self.node().insert_next(n)
            else:
                self.head.insert_next(n)
                n.insert_next(n)

    @pytest.mark.parametrize("sentinel", ["head", "tail"])
    def test_sentinels_cannot_be_removed(self, sentinel):
        with pytest.raises(NodeStructureError):
            getattr(self, sentinel).remove()

    def test_link_sentinels_requires_head_and_tail(self):
        with pytest.raises(NodeStructureError):
            Node.link_sentinels(self.tail, self.head)

    def test_sentinel_in_place_is_not_reinserted(self):
        with pytest.raises(NodeStructureError):
            self.head.insert_next(self.tail)
        with pytest.raises(NodeStructureError):
            self.tail.insert_prev(self.head)
        assert self.head.get_next() is self.tail

    @pytest.mark.parametrize("sentinel", ["head", "tail"])
    def test_sentinel_cannot_be_inserted(self, sentinel):
        n = self.node()
        self.head.insert_next(n)
        with pytest.raises(NodeStructureError):
            n.insert_next(getattr(self, sentinel))
        with pytest.raises(NodeStructureError):
            n.insert_prev(getattr(self, sentinel))

    def test_graph_event_base_is_abstract(self):
        with pytest.raises(TypeError):
            GraphEvent()


class TestFamily:
    def setup_method(self):
        self.graph = RecordingGraph()
        ids = iter(range(1000))
        self.ids = ids
        self.hosts = {}
        for host in ("a", "b", "c"):
            self.hosts[host] = make_host(self.graph, host, ids)

    def add(self, host):
        node = Node(next(self.ids))
        self.hosts[host][1].insert_prev(node)
        return node

    def test_child_parent_symmetry(self):
        a1, b1 = self.add("a"), self.add("b")
        a1.add_child(b1)
        assert a1.get_children() == [b1]
        assert b1.get_parents() == [a1]
        assert a1.get_child_by_host("b") is b1
        assert b1.get_parent_by_host("a") is a1
        assert a1.has_children() and not a1.has_parents()
        assert b1.has_family()

    def test_add_parent_mirrors_add_child(self):
        a1, b1 = self.add("a"), self.add("b")
        b1.add_parent(a1)
        assert a1.get_children() == [b1]
        event = self.graph.of_type(AddFamilyEvent)[-1]
        assert event.parent is a1 and event.child is b1

    def test_add_child_evicts_same_host_child(self):
        a1, b1, b2 = self.add("a"), self.add("b"), self.add("b")
        a1.add_child(b1)
        a1.add_child(b2)
        assert a1.get_children() == [b2]
        assert b1.get_parents() == []
        removed = self.graph.of_type(RemoveFamilyEvent)
        assert len(removed) == 1 and removed[0].child is b1

    def test_add_child_evicts_existing_parent_of_target(self):
        a1, a2, b1 = self.add("a"), self.add("a"), self.add("b")
        a1.add_child(b1)
        a2.add_child(b1)
        assert b1.get_parents() == [a2]
        assert a1.get_children() == []

    def test_relink_is_noop(self):
        a1, b1 = self.add("a"), self.add("b")
        a1.add_child(b1)
        count = len(self.graph.events)
        a1.add_child(b1)
        b1.add_parent(a1)
        assert len(self.graph.events) == count

    def test_children_on_distinct_hosts(self):
        a1, b1, c1 = self.add("a"), self.add("b"), self.add("c")
        a1.add_child(b1)
        a1.add_child(c1)
        assert {n.host for n in a1.get_children()} == {"b", "c"}
        assert a1.get_family() == [b1, c1]

    def test_same_host_family_rejected(self):
        a1, a2 = self.add("a"), self.add("a")
        with pytest.raises(NodeStructureError):
            a1.add_child(a2)
        with pytest.raises(NodeStructureError):
            a1.add_parent(a2)

    @pytest.mark.parametrize("end", [0, 1])
    def test_sentinel_family_rejected(self, end):
        a1 = self.add("a")
        sentinel = self.hosts["b"][end]
        with pytest.raises(NodeStructureError):
            a1.add_child(sentinel)
        with pytest.raises(NodeStructureError):
            sentinel.add_child(a1)
        with pytest.raises(NodeStructureError):
            a1.add_parent(sentinel)

    def test_remove_severs_family(self):
        a1, b1, c1 = self.add("a"), self.add("b"), self.add("c")
        a1.add_child(b1)
        c1.add_child(a1)
        a1.remove()
        assert b1.get_parents() == []
        assert c1.get_children() == []
        assert not a1.has_family()
        kinds = [type(e) for e in self.graph.events[-3:]]
        assert kinds == [RemoveFamilyEvent, RemoveFamilyEvent, RemoveNodeEvent]

    def test_remove_child_and_parent(self):
        a1, b1, c1 = self.add("a"), self.add("b"), self.add("c")
        a1.add_child(b1)
        c1.add_child(b1)
        b1.remove_parent(a1)
        assert b1.get_parents() == [c1]
        c1.remove_child(b1)
        assert not b1.has_parents()
        # removing an unrelated node is a no-op
        c1.remove_child(a1)
        c1.remove_family(a1)

    def test_clear_family(self):
        a1, b1, c1 = self.add("a"), self.add("b"), self.add("c")
        a1.add_child(b1)
        c1.add_child(a1)
        a1.clear_family()
        assert not a1.has_family()
        assert not b1.has_parents()
        assert not c1.has_children()

    def test_remove_by_host(self):
        a1, b1, c1 = self.add("a"), self.add("b"), self.add("c")
        a1.add_child(b1)
        a1.add_parent(c1)
        a1.remove_child_by_host("b")
        a1.remove_parent_by_host("c")
        a1.remove_child_by_host("zz")
        assert not a1.has_family()

    def test_connections(self):
        a1, b1 = self.add("a"), self.add("b")
        a1.add_child(b1)
        head, tail = self.hosts["a"]
        assert a1.get_connections() == [head, tail, b1]
