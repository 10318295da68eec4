import pytest

from coordgraph.coords import CoordSystem
from coordgraph.workspace import (
    EdgeRow,
    EditMode,
    InteractionState,
    Phase,
    Topic,
    Workspace,
)


def test_initial_state():
    ws = Workspace()
    assert ws.mode is EditMode.VERTEX
    assert ws.coord_system is CoordSystem.CG
    assert ws.pending_source is None
    assert ws.selected_vertex is None
    assert ws.zoom_percent == 100


def test_layout_captures_math_origin_once():
    ws = Workspace(coord_system=CoordSystem.MATH)
    assert ws.layout(1000, 500) is True
    assert ws.layout(400, 400) is False
    assert ws.frame.math_origin == (500, 250)
    assert (ws.canvas_width, ws.canvas_height) == (400, 400)


def test_interaction_state_invariants():
    with pytest.raises(ValueError):
        InteractionState(phase=Phase.IDLE, vertex_id=3)
    with pytest.raises(ValueError):
        InteractionState(phase=Phase.DRAGGING)
    state = InteractionState(phase=Phase.EDGE_PENDING, vertex_id=2)
    assert state.pending_source == 2
    assert state.dragging_id is None


def test_graph_changes_notify_subscribers():
    ws = Workspace()
    topics = []
    ws.subscribe(topics.append)
    ws.store.add_vertex(1, 1)
    assert topics == [Topic.GRAPH]


def test_direct_store_delete_drops_references():
    ws = Workspace()
    a = ws.store.add_vertex(0, 0)
    ws.update_interaction(phase=Phase.DRAGGING, vertex_id=a, selected_id=a)
    ws.store.delete_vertex(a)
    assert ws.dragging_vertex is None
    assert ws.selected_vertex is None


def test_clear_keeps_pointer():
    ws = Workspace()
    a = ws.store.add_vertex(0, 0)
    ws.update_interaction(selected_id=a, pointer=(5, 5))
    ws.store.clear()
    assert ws.selected_vertex is None
    assert ws.pointer == (5, 5)


def test_edge_rows():
    ws = Workspace()
    a = ws.store.add_vertex(0, 0)
    b = ws.store.add_vertex(10, 0)
    ws.store.add_edge(a, b)
    assert ws.edge_rows() == [EdgeRow(0, a, b)]
    assert ws.edge_rows()[0].label == "e0: V0 ↔ V1"
