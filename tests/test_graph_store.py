"""
Tests for the GraphStore: id allocation, edge rules, cascade delete and
change notifications.
"""

import pytest

from coordgraph.graph_store import ChangeKind, Edge, GraphChange, GraphStore, Vertex


@pytest.fixture
def store():
    return GraphStore()


@pytest.fixture
def triangle(store):
    a = store.add_vertex(0, 0)
    b = store.add_vertex(100, 0)
    c = store.add_vertex(50, 80)
    store.add_edge(a, b)
    store.add_edge(b, c)
    store.add_edge(c, a)
    return store


class TestVertices:

    def test_ids_start_at_zero_and_increase(self, store):
        assert store.add_vertex(1, 2) == 0
        assert store.add_vertex(3, 4) == 1
        assert store.vertex(1) == Vertex(1, 3.0, 4.0)
        assert store.vertex_count == 2

    def test_ids_are_never_reused(self, store):
        store.add_vertex(0, 0)
        store.add_vertex(0, 0)
        store.delete_vertex(1)
        assert store.add_vertex(5, 5) == 2

    def test_vertices_keep_insertion_order(self, store):
        for i in range(5):
            store.add_vertex(i, i)
        store.delete_vertex(2)
        assert [v.id for v in store.vertices()] == [0, 1, 3, 4]

    def test_move_vertex(self, store):
        vid = store.add_vertex(0, 0)
        assert store.move_vertex(vid, 12.5, -3) is True
        assert store.vertex(vid) == Vertex(vid, 12.5, -3.0)
        assert store.move_vertex(99, 1, 1) is False

    def test_delete_unknown_is_noop(self, store):
        store.add_vertex(0, 0)
        assert store.delete_vertex(42) is False
        assert store.vertex_count == 1


class TestEdges:

    def test_add_edge(self, store):
        a = store.add_vertex(0, 0)
        b = store.add_vertex(10, 0)
        assert store.add_edge(a, b) == 0
        assert store.edges() == [Edge(0, a, b)]
        assert store.has_edge_between(b, a)

    def test_duplicate_in_either_order_is_rejected(self, store):
        a = store.add_vertex(0, 0)
        b = store.add_vertex(10, 0)
        store.add_edge(a, b)
        assert store.add_edge(a, b) is None
        assert store.add_edge(b, a) is None
        assert store.edge_count == 1
        assert store.next_edge_id == 1

    def test_self_loop_is_rejected(self, store):
        a = store.add_vertex(0, 0)
        assert store.add_edge(a, a) is None
        assert store.edge_count == 0

    def test_missing_endpoint_is_rejected(self, store):
        a = store.add_vertex(0, 0)
        assert store.add_edge(a, 7) is None

    def test_delete_edge(self, triangle):
        assert triangle.delete_edge(1) is True
        assert [e.id for e in triangle.edges()] == [0, 2]
        assert not triangle.has_edge_between(1, 2)
        assert triangle.delete_edge(1) is False

    def test_delete_vertex_cascades(self, triangle):
        triangle.delete_vertex(0)
        assert triangle.edges() == [Edge(1, 1, 2)]
        for e in triangle.edges():
            assert triangle.has_vertex(e.v1) and triangle.has_vertex(e.v2)

    def test_neighbors_and_incident_edges(self, triangle):
        assert sorted(triangle.neighbors(0)) == [1, 2]
        assert [e.id for e in triangle.edges_of(1)] == [0, 1]
        assert triangle.neighbors(99) == []


class TestClearAndNotifications:

    def test_clear_resets_counters(self, triangle):
        triangle.clear()
        assert triangle.vertex_count == 0
        assert triangle.edge_count == 0
        assert triangle.add_vertex(0, 0) == 0

    def test_cascade_notifies_edges_before_vertex(self, triangle):
        seen = []
        triangle.add_listener(seen.append)
        triangle.delete_vertex(1)
        assert seen == [
            GraphChange(ChangeKind.EDGE_REMOVED, 0),
            GraphChange(ChangeKind.EDGE_REMOVED, 1),
            GraphChange(ChangeKind.VERTEX_REMOVED, 1),
        ]

    def test_rejected_mutations_are_silent(self, store):
        seen = []
        store.add_listener(seen.append)
        a = store.add_vertex(0, 0)
        store.add_edge(a, a)
        store.delete_vertex(5)
        assert seen == [GraphChange(ChangeKind.VERTEX_ADDED, a)]

    def test_remove_listener(self, store):
        seen = []
        store.add_listener(seen.append)
        store.remove_listener(seen.append)
        store.add_vertex(0, 0)
        assert seen == []
