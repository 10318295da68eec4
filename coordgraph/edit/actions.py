"""
Edit Actions - command surface of the playground.

Every command applies fully or not at all and returns a CommandResult whose
message is meant for the status bar. Policy rejections (unknown ids,
duplicate edges) come back as ``ok=False`` instead of raising.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from coordgraph.coords import CoordSystem
from coordgraph.workspace import EditMode, Phase, Topic, Workspace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    message: str = ""
    item_id: Optional[int] = None


class EditActions:
    """
    Executes graph, mode and view commands against a Workspace.

    Used both by the sidebar buttons and by the pointer controller so the
    feedback wording is the same whichever way a command is triggered.
    """

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    # --- Mode / coordinate system ---

    def set_mode(self, mode: Union[EditMode, str]) -> CommandResult:
        ws = self.workspace
        ws.mode = EditMode(mode)
        ws.reset_interaction()
        ws.notify(Topic.MODE)
        ws.notify(Topic.SELECTION)
        return CommandResult(True, "")

    def set_coord_system(self, system: Union[CoordSystem, str]) -> CommandResult:
        ws = self.workspace
        ws.frame.system = CoordSystem(system)
        ws.notify(Topic.COORDS)
        if ws.frame.system is CoordSystem.CG:
            return CommandResult(True, "CG system: Y grows downward")
        return CommandResult(True, "Math system: Y grows upward")

    # --- Vertices ---

    def add_vertex(self, wx: float, wy: float) -> CommandResult:
        vertex_id = self.workspace.store.add_vertex(wx, wy)
        return CommandResult(True, f"Vertex V{vertex_id} added", vertex_id)

    def add_vertex_at_user(self, ux: float, uy: float) -> CommandResult:
        """Add a vertex at coordinates given in the active user system."""
        wx, wy = self.workspace.frame.user_to_world(ux, uy)
        return self.add_vertex(wx, wy)

    def delete_vertex(self, vertex_id: int) -> CommandResult:
        ws = self.workspace
        if not ws.store.delete_vertex(vertex_id):
            logger.info(f"Delete ignored: vertex V{vertex_id} does not exist")
            return CommandResult(False, f"Vertex V{vertex_id} does not exist")
        ws.notify(Topic.SELECTION)
        return CommandResult(True, f"Vertex V{vertex_id} removed", vertex_id)

    def select_vertex(self, vertex_id: int) -> CommandResult:
        ws = self.workspace
        v = ws.store.vertex(vertex_id)
        if v is None:
            return CommandResult(False, f"Vertex V{vertex_id} does not exist")
        ws.update_interaction(selected_id=vertex_id)
        ws.notify(Topic.SELECTION)
        ux, uy = ws.user_coords(v.x, v.y)
        return CommandResult(True, f"V{vertex_id} selected: ({ux}, {uy})", vertex_id)

    def clear_selection(self) -> CommandResult:
        ws = self.workspace
        if ws.selected_vertex is None:
            return CommandResult(True, "")
        ws.update_interaction(selected_id=None)
        ws.notify(Topic.SELECTION)
        return CommandResult(True, "")

    # --- Edges ---

    def connect(self, source_id: int, target_id: int) -> CommandResult:
        """
        Finish a two-click edge gesture.

        The pending source is cleared whatever happens; a repeated click on the
        source cancels the gesture and an existing pair is reported as a
        duplicate.
        """
        ws = self.workspace
        ws.update_interaction(phase=Phase.IDLE, vertex_id=None)
        ws.notify(Topic.SELECTION)

        if source_id == target_id:
            return CommandResult(False, "Selection cancelled")

        edge_id = ws.store.add_edge(source_id, target_id)
        if edge_id is None:
            logger.info(f"Edge V{source_id} <-> V{target_id} rejected")
            return CommandResult(False, "An edge already exists between these vertices")
        return CommandResult(True, f"Edge e{edge_id}: V{source_id} ↔ V{target_id}", edge_id)

    def delete_edge(self, edge_id: int) -> CommandResult:
        if not self.workspace.store.delete_edge(edge_id):
            logger.info(f"Delete ignored: edge e{edge_id} does not exist")
            return CommandResult(False, f"Edge e{edge_id} does not exist")
        return CommandResult(True, f"Edge e{edge_id} removed", edge_id)

    # --- Whole workspace ---

    def clear_all(self) -> CommandResult:
        """Empty the graph and restart ids; the view and math origin are kept."""
        ws = self.workspace
        ws.store.clear()
        ws.notify(Topic.SELECTION)
        return CommandResult(True, "Everything cleared")

    def reset_view(self) -> CommandResult:
        ws = self.workspace
        ws.view.reset()
        ws.notify(Topic.VIEW)
        return CommandResult(True, "Zoom and pan reset")
