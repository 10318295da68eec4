"""
Tests for the InteractionController and EditActions.

Screen points are derived from world points through the default view
(zoom 1, pan (20, 20)) so the gestures read in world coordinates.
"""

import pytest

from coordgraph.constants import BUTTON_MIDDLE
from coordgraph.coords import CoordSystem, world_to_screen
from coordgraph.edit import InteractionController
from coordgraph.workspace import EditMode, Phase, Topic, Workspace


@pytest.fixture
def workspace():
    ws = Workspace()
    ws.layout(800, 600)
    return ws


@pytest.fixture
def controller(workspace):
    return InteractionController(workspace)


@pytest.fixture
def actions(controller):
    return controller.actions


def screen(ws, wx, wy):
    return world_to_screen(ws.view, wx, wy)


def click_world(controller, wx, wy):
    sx, sy = screen(controller.workspace, wx, wy)
    controller.pointer_down(sx, sy)
    controller.pointer_up(sx, sy)
    return controller.click(sx, sy)


class TestVertexMode:

    def test_click_adds_vertex_at_world_point(self, controller, workspace):
        outcome = click_world(controller, 120, 80)
        assert outcome.redraw
        assert outcome.message == "Vertex V0 added"
        v = workspace.store.vertex(0)
        assert (v.x, v.y) == (120, 80)

    def test_add_vertex_at_user_coords_in_math(self, actions, workspace):
        actions.set_coord_system(CoordSystem.MATH)
        result = actions.add_vertex_at_user(-50, 50)
        v = workspace.store.vertex(result.item_id)
        assert (v.x, v.y) == (350, 250)
        assert workspace.user_coords(v.x, v.y) == (-50, 50)


class TestEdgeMode:

    @pytest.fixture
    def two_vertices(self, workspace, actions):
        actions.set_mode(EditMode.EDGE)
        a = workspace.store.add_vertex(100, 100)
        b = workspace.store.add_vertex(300, 100)
        return a, b

    def test_empty_space_click(self, controller, workspace, two_vertices):
        outcome = click_world(controller, 200, 400)
        assert outcome.message == "Click an existing vertex"
        assert workspace.pending_source is None

    def test_same_vertex_twice_cancels(self, controller, workspace, two_vertices):
        a, _ = two_vertices
        assert click_world(controller, 100, 100).message == f"V{a} selected, click the second vertex"
        assert workspace.pending_source == a
        assert click_world(controller, 100, 100).message == "Selection cancelled"
        assert workspace.pending_source is None
        assert workspace.store.edge_count == 0

    def test_connect_then_duplicate(self, controller, workspace, two_vertices):
        a, b = two_vertices
        click_world(controller, 100, 100)
        assert click_world(controller, 300, 100).message == f"Edge e0: V{a} ↔ V{b}"
        assert workspace.pending_source is None

        click_world(controller, 300, 100)
        outcome = click_world(controller, 100, 100)
        assert outcome.message == "An edge already exists between these vertices"
        assert workspace.pending_source is None
        assert workspace.store.edge_count == 1

    def test_preview_needs_redraw_on_move(self, controller, workspace, two_vertices):
        click_world(controller, 100, 100)
        assert controller.pointer_move(*screen(workspace, 200, 200)).redraw
        assert workspace.pointer == (200, 200)

    def test_deleting_pending_source_clears_it(self, controller, workspace, actions, two_vertices):
        a, _ = two_vertices
        click_world(controller, 100, 100)
        actions.delete_vertex(a)
        assert workspace.pending_source is None
        assert workspace.interaction.phase is Phase.IDLE

    def test_mode_switch_clears_pending(self, controller, workspace, actions, two_vertices):
        click_world(controller, 100, 100)
        actions.set_mode(EditMode.SELECT)
        assert workspace.pending_source is None
        assert workspace.store.vertex_count == 2


class TestSelectMode:

    @pytest.fixture
    def vertex(self, workspace, actions):
        actions.set_mode(EditMode.SELECT)
        return workspace.store.add_vertex(100, 100)

    def test_drag_moves_vertex(self, controller, workspace, vertex):
        controller.pointer_down(*screen(workspace, 102, 99))
        assert workspace.dragging_vertex == vertex
        assert workspace.selected_vertex == vertex
        assert controller.cursor == "grabbing"

        assert controller.pointer_move(*screen(workspace, 250, 40)).redraw
        v = workspace.store.vertex(vertex)
        assert (v.x, v.y) == (250, 40)

        controller.pointer_up(*screen(workspace, 250, 40))
        assert workspace.dragging_vertex is None
        assert workspace.interaction.phase is Phase.IDLE

    def test_click_selects_and_reports_coords(self, controller, workspace, vertex):
        outcome = click_world(controller, 100, 100)
        assert outcome.message == "V0: coords (100, 100)"
        assert workspace.selected_vertex == vertex

    def test_click_empty_space_clears_selection(self, controller, workspace, vertex):
        click_world(controller, 100, 100)
        click_world(controller, 500, 500)
        assert workspace.selected_vertex is None

    def test_hover_cursor(self, controller, workspace, vertex):
        controller.pointer_move(*screen(workspace, 100, 100))
        assert controller.cursor == "grab"
        controller.pointer_move(*screen(workspace, 400, 400))
        assert controller.cursor == "default"

    def test_deleting_selected_vertex_clears_selection(self, controller, workspace, actions, vertex):
        click_world(controller, 100, 100)
        result = actions.delete_vertex(vertex)
        assert result.ok
        assert workspace.selected_vertex is None


class TestPanZoom:

    def test_middle_drag_pans(self, controller, workspace):
        controller.pointer_down(100, 100, BUTTON_MIDDLE)
        assert controller.cursor == "grabbing"
        controller.pointer_move(130, 90)
        assert (workspace.view.pan_x, workspace.view.pan_y) == (50, 10)
        controller.pointer_up(130, 90, BUTTON_MIDDLE)
        assert not workspace.interaction.is_panning

    def test_pan_does_not_add_vertex(self, controller, workspace):
        controller.pointer_down(100, 100, BUTTON_MIDDLE)
        controller.pointer_move(140, 140)
        controller.pointer_up(140, 140, BUTTON_MIDDLE)
        assert not controller.click(140, 140).redraw
        assert workspace.store.vertex_count == 0

        click_world(controller, 10, 10)
        assert workspace.store.vertex_count == 1

    def test_pan_does_not_update_pointer(self, controller, workspace):
        controller.pointer_move(50, 50)
        controller.pointer_down(50, 50, BUTTON_MIDDLE)
        controller.pointer_move(90, 90)
        assert workspace.pointer == (30, 30)

    def test_pointer_leave_ends_everything(self, controller, workspace, actions):
        actions.set_mode(EditMode.SELECT)
        workspace.store.add_vertex(100, 100)
        controller.pointer_down(*screen(workspace, 100, 100))
        controller.pointer_leave()
        assert workspace.pointer is None
        assert workspace.dragging_vertex is None
        assert not workspace.interaction.is_panning
        assert controller.pointer_user_coords() is None

    def test_wheel_zooms_and_notifies(self, controller, workspace):
        topics = []
        workspace.subscribe(topics.append)
        assert controller.wheel(400, 300, -100).redraw
        assert workspace.zoom_percent == 115
        assert Topic.VIEW in topics
        assert not controller.wheel(400, 300, 0).redraw

    def test_ctrl_zero_resets_view(self, controller, workspace):
        controller.wheel(10, 10, -1)
        workspace.view.set_pan(-300, 80)
        outcome = controller.key_down("0", ctrl=True)
        assert outcome.message == "Zoom and pan reset"
        assert workspace.view.as_tuple() == (1.0, 20.0, 20.0)
        assert controller.key_down("0").message is None


class TestActions:

    def test_clear_all_restarts_ids_and_drops_selection(self, workspace, actions):
        a = workspace.store.add_vertex(0, 0)
        b = workspace.store.add_vertex(50, 0)
        workspace.store.add_edge(a, b)
        actions.select_vertex(a)
        assert actions.clear_all().message == "Everything cleared"
        assert workspace.selected_vertex is None
        assert actions.add_vertex(1, 1).item_id == 0

    def test_unknown_ids_report_failure(self, actions):
        assert not actions.delete_vertex(7).ok
        assert not actions.delete_edge(7).ok
        assert not actions.select_vertex(7).ok

    def test_coord_system_messages(self, actions, workspace):
        assert actions.set_coord_system("math").message == "Math system: Y grows upward"
        assert workspace.coord_system is CoordSystem.MATH
        assert actions.set_coord_system(CoordSystem.CG).message == "CG system: Y grows downward"

    def test_unknown_mode_raises(self, actions):
        with pytest.raises(ValueError):
            actions.set_mode("lasso")

    def test_vertex_rows(self, workspace, actions):
        a = workspace.store.add_vertex(10.4, 20.6)
        actions.select_vertex(a)
        row = workspace.vertex_rows()[0]
        assert (row.id, row.ux, row.uy, row.selected, row.pending) == (a, 10, 21, True, False)
        assert row.label == "V0  (10, 21)"
