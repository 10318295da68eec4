"""
Canvas Handlers - NiceGUI event handlers for the interactive canvas.

This module keeps the browser event plumbing out of app.py: it unpacks
NiceGUI event payloads, feeds them to the InteractionController and applies
the returned Outcome (redraw, status message, cursor).
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from nicegui import ui

from coordgraph.edit.controller import InteractionController, Outcome

logger = logging.getLogger(__name__)

MOUSE_EVENTS = ['mousedown', 'mousemove', 'mouseup', 'click', 'mouseleave']

# Reports the cursor position relative to the canvas and the wheel direction
WHEEL_JS_HANDLER = '''(e) => {
    e.preventDefault();
    const r = e.currentTarget.getBoundingClientRect();
    emit({x: e.clientX - r.left, y: e.clientY - r.top, deltaY: e.deltaY});
}'''


def normalize_event_payload(raw: Any) -> Dict[str, Any]:
    """
    Normalize an event payload into a dict.

    NiceGUI passes generic event args either as a dict or, when argument
    names were requested, as a list in that order.
    """
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (list, tuple)):
        keys = ('x', 'y', 'deltaY')
        return {k: v for k, v in zip(keys, raw)}
    return {}


def payload_point(payload: Dict[str, Any]) -> Optional[Tuple[float, float]]:
    """Extract an (x, y) screen point from a payload, or None if it has none."""
    x = payload.get('x', payload.get('offsetX', payload.get('image_x')))
    y = payload.get('y', payload.get('offsetY', payload.get('image_y')))
    if x is None or y is None:
        return None
    try:
        return float(x), float(y)
    except (TypeError, ValueError):
        return None


def setup_canvas_handlers(
    controller: InteractionController,
    redraw: Callable[[], None],
    show_message: Callable[[str], None],
    set_cursor: Callable[[str], None],
    update_pointer: Callable[[], None],
):
    """
    Set up all canvas event handlers.

    Args:
        controller: InteractionController instance
        redraw: Function re-rendering the canvas SVG
        show_message: Function showing a status bar message
        set_cursor: Function applying a CSS cursor to the canvas
        update_pointer: Function refreshing the pointer position readout

    Returns:
        Dict with handler functions for binding to UI events
    """
    last_cursor = {'value': None}

    def apply(outcome: Outcome):
        if outcome.redraw:
            redraw()
        if outcome.message is not None:
            show_message(outcome.message)
        cursor = controller.cursor
        if cursor != last_cursor['value']:
            last_cursor['value'] = cursor
            set_cursor(cursor)

    def run(action: Callable[[], Outcome]):
        try:
            apply(action())
        except Exception as e:
            logger.error(f"Canvas handler failed: {e}", exc_info=True)
            ui.notify(f'Canvas error: {e}', type='negative', position='bottom')

    def handle_mouse(e):
        """Dispatch interactive image mouse events to the controller."""
        kind = getattr(e, 'type', None)
        x = getattr(e, 'image_x', None)
        y = getattr(e, 'image_y', None)
        button = getattr(e, 'button', 0) or 0

        if kind in ('mouseleave', 'mouseout'):
            run(controller.pointer_leave)
            update_pointer()
            return
        if x is None or y is None:
            return

        if kind == 'mousedown':
            run(lambda: controller.pointer_down(x, y, button))
        elif kind == 'mousemove':
            run(lambda: controller.pointer_move(x, y))
            update_pointer()
        elif kind == 'mouseup':
            run(lambda: controller.pointer_up(x, y, button))
        elif kind == 'click':
            run(lambda: controller.click(x, y, button))

    def handle_wheel(e):
        """Zoom around the cursor."""
        payload = normalize_event_payload(e.args if hasattr(e, 'args') else e)
        point = payload_point(payload)
        if point is None:
            return
        try:
            delta = float(payload.get('deltaY', 0) or 0)
        except (TypeError, ValueError):
            return
        run(lambda: controller.wheel(point[0], point[1], delta))

    def handle_keyboard(e):
        """Ctrl+0 resets the view."""
        if not e.action.keydown:
            return
        key = getattr(e.key, 'name', str(e.key))
        run(lambda: controller.key_down(key, ctrl=e.modifiers.ctrl))

    return {
        'handle_mouse': handle_mouse,
        'handle_wheel': handle_wheel,
        'handle_keyboard': handle_keyboard,
    }
