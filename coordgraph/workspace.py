"""
Workspace - single source of truth for the playground.

Owns the graph store, the view transform, the coordinate frame and the
interaction state. The command surface (EditActions) and the pointer state
machine (InteractionController) both mutate this object in place; the page
only reads snapshots from it.

Every mutation finishes before control returns to the caller, so observers
never see a half-applied change.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Tuple

from coordgraph.coords import (
    Bounds,
    CoordinateFrame,
    CoordSystem,
    screen_to_world,
    visible_world_bounds,
)
from coordgraph.constants import DEFAULT_CANVAS_SIZE
from coordgraph.graph_store import ChangeKind, GraphChange, GraphStore
from coordgraph.view import ViewTransform

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class EditMode(str, Enum):
    SELECT = "select"
    VERTEX = "vertex"
    EDGE = "edge"


MODE_NAMES = {
    EditMode.SELECT: "Select / Move",
    EditMode.VERTEX: "Insert Vertex",
    EditMode.EDGE: "Insert Edge",
}


class Phase(str, Enum):
    """What the current pointer gesture is doing."""
    IDLE = "idle"
    DRAGGING = "dragging"
    EDGE_PENDING = "edge_pending"


class Topic(str, Enum):
    GRAPH = "graph"
    SELECTION = "selection"
    MODE = "mode"
    COORDS = "coords"
    VIEW = "view"


@dataclass(frozen=True)
class PanGesture:
    """Middle-button pan bookkeeping: where it started and the pan at that moment."""
    start_x: float
    start_y: float
    start_pan_x: float
    start_pan_y: float
    moved: bool = False


@dataclass(frozen=True)
class InteractionState:
    """
    Immutable snapshot of the interaction state.

    ``vertex_id`` is the drag target while DRAGGING and the pending edge
    source while EDGE_PENDING; it must be None while IDLE. A pan gesture can
    run on top of any phase.
    """
    phase: Phase = Phase.IDLE
    vertex_id: Optional[int] = None
    selected_id: Optional[int] = None
    pointer: Optional[Point] = None
    pan: Optional[PanGesture] = None

    def __post_init__(self):
        if self.phase is Phase.IDLE and self.vertex_id is not None:
            raise ValueError("idle interaction cannot reference a vertex")
        if self.phase is not Phase.IDLE and self.vertex_id is None:
            raise ValueError(f"{self.phase.value} interaction needs a vertex")

    @property
    def pending_source(self) -> Optional[int]:
        return self.vertex_id if self.phase is Phase.EDGE_PENDING else None

    @property
    def dragging_id(self) -> Optional[int]:
        return self.vertex_id if self.phase is Phase.DRAGGING else None

    @property
    def is_panning(self) -> bool:
        return self.pan is not None


@dataclass(frozen=True)
class VertexRow:
    """Read-only vertex snapshot for list rendering."""
    id: int
    x: float
    y: float
    ux: int
    uy: int
    selected: bool
    pending: bool

    @property
    def label(self) -> str:
        return f"V{self.id}  ({self.ux}, {self.uy})"


@dataclass(frozen=True)
class EdgeRow:
    id: int
    v1: int
    v2: int

    @property
    def label(self) -> str:
        return f"e{self.id}: V{self.v1} ↔ V{self.v2}"


WorkspaceListener = Callable[[Topic], None]


class Workspace:
    """Application state aggregate shared by the controller, actions and renderer."""

    def __init__(self,
                 mode: EditMode = EditMode.VERTEX,
                 coord_system: CoordSystem = CoordSystem.CG):
        self.store = GraphStore()
        self.view = ViewTransform()
        self.frame = CoordinateFrame(coord_system)
        self.mode = EditMode(mode)
        self.interaction = InteractionState()
        self.canvas_width, self.canvas_height = DEFAULT_CANVAS_SIZE
        self._listeners: List[WorkspaceListener] = []
        self.store.add_listener(self._on_graph_change)

    # --- Observers ---

    def subscribe(self, callback: WorkspaceListener) -> None:
        self._listeners.append(callback)

    def notify(self, topic: Topic) -> None:
        for callback in list(self._listeners):
            callback(topic)

    def _on_graph_change(self, change: GraphChange) -> None:
        # Interaction references must not outlive the vertex they point at
        if change.kind is ChangeKind.VERTEX_REMOVED:
            self.forget_vertex(change.item_id)
        elif change.kind is ChangeKind.CLEARED:
            self.reset_interaction()
        self.notify(Topic.GRAPH)

    # --- Layout ---

    def layout(self, width: float, height: float) -> bool:
        """
        Record the canvas size. The first call also pins the math origin at
        the canvas centre; returns True when that happened.
        """
        self.canvas_width = width
        self.canvas_height = height
        captured = self.frame.capture_math_origin(width, height)
        if captured:
            logger.info(f"Math origin fixed at world {self.frame.math_origin}")
        return captured

    # --- Queries ---

    @property
    def coord_system(self) -> CoordSystem:
        return self.frame.system

    @property
    def pending_source(self) -> Optional[int]:
        return self.interaction.pending_source

    @property
    def selected_vertex(self) -> Optional[int]:
        return self.interaction.selected_id

    @property
    def dragging_vertex(self) -> Optional[int]:
        return self.interaction.dragging_id

    @property
    def pointer(self) -> Optional[Point]:
        return self.interaction.pointer

    @property
    def zoom_percent(self) -> int:
        return self.view.zoom_percent

    def visible_bounds(self) -> Bounds:
        return visible_world_bounds(self.view, self.canvas_width, self.canvas_height)

    def screen_to_world(self, sx: float, sy: float) -> Point:
        return screen_to_world(self.view, sx, sy)

    def user_coords(self, wx: float, wy: float) -> Tuple[int, int]:
        return self.frame.world_to_user(wx, wy)

    def vertex_rows(self) -> List[VertexRow]:
        selected = self.selected_vertex
        pending = self.pending_source
        rows = []
        for v in self.store.vertices():
            ux, uy = self.frame.world_to_user(v.x, v.y)
            rows.append(VertexRow(v.id, v.x, v.y, ux, uy, v.id == selected, v.id == pending))
        return rows

    def edge_rows(self) -> List[EdgeRow]:
        return [EdgeRow(e.id, e.v1, e.v2) for e in self.store.edges()]

    # --- Interaction state updates ---

    def update_interaction(self, **changes) -> InteractionState:
        self.interaction = replace(self.interaction, **changes)
        return self.interaction

    def reset_interaction(self, keep_pointer: bool = True) -> None:
        """Drop the pending edge, the selection and any drag."""
        pointer = self.interaction.pointer if keep_pointer else None
        self.interaction = InteractionState(pointer=pointer, pan=self.interaction.pan)

    def forget_vertex(self, vertex_id: int) -> None:
        """Clear every interaction reference to a vertex that no longer exists."""
        state = self.interaction
        changes = {}
        if state.vertex_id == vertex_id:
            changes["phase"] = Phase.IDLE
            changes["vertex_id"] = None
        if state.selected_id == vertex_id:
            changes["selected_id"] = None
        if changes:
            self.update_interaction(**changes)
