"""
Interaction Controller - pointer/keyboard state machine for the canvas.

Translates raw canvas events (screen pixels, mouse buttons, wheel deltas,
keys) into workspace mutations:
- select mode: drag vertices, click to (de)select
- vertex mode: click to insert
- edge mode: two-click edge creation with a live dashed preview
- any mode: middle-button pan, wheel zoom anchored at the cursor

Handlers run synchronously and return an Outcome telling the page whether
to redraw and which status message to show. The controller never touches
the UI directly.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from coordgraph.edit.actions import CommandResult, EditActions
from coordgraph.constants import BUTTON_LEFT, BUTTON_MIDDLE
from coordgraph.hit_test import vertex_at
from coordgraph.graph_store import Vertex
from coordgraph.workspace import (
    EditMode,
    PanGesture,
    Phase,
    Topic,
    Workspace,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    """What the page has to do after an event was handled."""
    redraw: bool = False
    message: Optional[str] = None

    @classmethod
    def from_result(cls, result: CommandResult, redraw: bool = True) -> "Outcome":
        return cls(redraw=redraw, message=result.message)


NOTHING = Outcome()


class InteractionController:
    """Manages pointer gestures and decides which command an event triggers."""

    def __init__(self, workspace: Workspace, actions: Optional[EditActions] = None):
        self.workspace = workspace
        self.actions = actions or EditActions(workspace)
        self._hovering = False
        self._suppress_click = False

    # --- Derived state ---

    @property
    def cursor(self) -> str:
        """CSS cursor for the canvas in the current state."""
        state = self.workspace.interaction
        if state.is_panning or state.phase is Phase.DRAGGING:
            return "grabbing"
        mode = self.workspace.mode
        if mode is EditMode.SELECT:
            return "grab" if self._hovering else "default"
        if mode is EditMode.VERTEX:
            return "crosshair"
        return "pointer" if self._hovering else "crosshair"

    def pointer_user_coords(self):
        pointer = self.workspace.pointer
        if pointer is None:
            return None
        return self.workspace.user_coords(*pointer)

    def _hit(self, wx: float, wy: float) -> Optional[Vertex]:
        ws = self.workspace
        return vertex_at(ws.store, wx, wy, ws.view.zoom)

    # --- Pointer events ---

    def pointer_down(self, sx: float, sy: float, button: int = BUTTON_LEFT) -> Outcome:
        ws = self.workspace

        if button == BUTTON_MIDDLE:
            ws.update_interaction(pan=PanGesture(sx, sy, ws.view.pan_x, ws.view.pan_y))
            self._suppress_click = False
            return NOTHING

        if button != BUTTON_LEFT or ws.interaction.is_panning:
            return NOTHING

        self._suppress_click = False
        if ws.mode is not EditMode.SELECT:
            return NOTHING

        wx, wy = ws.screen_to_world(sx, sy)
        v = self._hit(wx, wy)
        if v is None:
            self.actions.clear_selection()
            return Outcome(redraw=True)

        ws.update_interaction(phase=Phase.DRAGGING, vertex_id=v.id, selected_id=v.id)
        ws.notify(Topic.SELECTION)
        return Outcome(redraw=True)

    def pointer_move(self, sx: float, sy: float) -> Outcome:
        ws = self.workspace
        pan = ws.interaction.pan

        if pan is not None:
            ws.view.set_pan(pan.start_pan_x + (sx - pan.start_x),
                            pan.start_pan_y + (sy - pan.start_y))
            if not pan.moved:
                ws.update_interaction(pan=PanGesture(pan.start_x, pan.start_y,
                                                     pan.start_pan_x, pan.start_pan_y,
                                                     moved=True))
            return Outcome(redraw=True)

        wx, wy = ws.screen_to_world(sx, sy)
        ws.update_interaction(pointer=(wx, wy))

        dragging = ws.dragging_vertex
        if dragging is not None:
            ws.store.move_vertex(dragging, wx, wy)
            return Outcome(redraw=True)

        self._hovering = self._hit(wx, wy) is not None
        if ws.mode is EditMode.EDGE and ws.pending_source is not None:
            return Outcome(redraw=True)
        return NOTHING

    def pointer_up(self, sx: float, sy: float, button: int = BUTTON_LEFT) -> Outcome:
        ws = self.workspace

        if button == BUTTON_MIDDLE:
            pan = ws.interaction.pan
            if pan is not None:
                # A pan gesture never turns into a click
                self._suppress_click = pan.moved
                ws.update_interaction(pan=None)
            return NOTHING

        dragging = ws.dragging_vertex
        if dragging is not None:
            ws.update_interaction(phase=Phase.IDLE, vertex_id=None)
            logger.debug(f"Dropped V{dragging} at world {ws.screen_to_world(sx, sy)}")
            return Outcome(redraw=True)
        return NOTHING

    def click(self, sx: float, sy: float, button: int = BUTTON_LEFT) -> Outcome:
        ws = self.workspace
        if button != BUTTON_LEFT:
            return NOTHING
        if self._suppress_click or ws.interaction.is_panning or ws.dragging_vertex is not None:
            self._suppress_click = False
            return NOTHING

        wx, wy = ws.screen_to_world(sx, sy)

        if ws.mode is EditMode.VERTEX:
            return Outcome.from_result(self.actions.add_vertex(wx, wy))

        if ws.mode is EditMode.EDGE:
            return self._edge_click(wx, wy)

        v = self._hit(wx, wy)
        if v is None:
            self.actions.clear_selection()
            return Outcome(redraw=True)
        result = self.actions.select_vertex(v.id)
        ux, uy = ws.user_coords(v.x, v.y)
        return Outcome(redraw=True, message=f"V{v.id}: coords ({ux}, {uy})" if result.ok else result.message)

    def _edge_click(self, wx: float, wy: float) -> Outcome:
        ws = self.workspace
        v = self._hit(wx, wy)
        if v is None:
            return Outcome(message="Click an existing vertex")

        pending = ws.pending_source
        if pending is None:
            ws.update_interaction(phase=Phase.EDGE_PENDING, vertex_id=v.id)
            ws.notify(Topic.SELECTION)
            return Outcome(redraw=True, message=f"V{v.id} selected, click the second vertex")

        return Outcome.from_result(self.actions.connect(pending, v.id))

    def pointer_leave(self) -> Outcome:
        ws = self.workspace
        had_preview = ws.mode is EditMode.EDGE and ws.pending_source is not None
        changes = {"pointer": None, "pan": None}
        if ws.dragging_vertex is not None:
            changes.update(phase=Phase.IDLE, vertex_id=None)
        ws.update_interaction(**changes)
        self._hovering = False
        return Outcome(redraw=had_preview)

    def wheel(self, sx: float, sy: float, delta_y: float) -> Outcome:
        ws = self.workspace
        if delta_y == 0:
            return NOTHING
        ws.view.wheel(sx, sy, delta_y)
        ws.notify(Topic.VIEW)
        return Outcome(redraw=True)

    # --- Keyboard ---

    def key_down(self, key: str, ctrl: bool = False) -> Outcome:
        if ctrl and key in ("0", "Numpad0"):
            return Outcome.from_result(self.actions.reset_view())
        return NOTHING
