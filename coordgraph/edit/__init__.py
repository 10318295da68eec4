"""
Canvas editing system for coordgraph.

This package provides the pointer-driven editing layer:
- InteractionController: gesture state machine and hit detection
- EditActions: command surface (graph, mode, coordinate and view commands)
- setup_canvas_handlers: NiceGUI event handlers for app.py integration

Usage:
    from coordgraph.edit import InteractionController, EditActions
    from coordgraph.edit.handlers import setup_canvas_handlers
"""

from coordgraph.constants import (
    VERTEX_RADIUS,
    HIT_MARGIN,
    GRID_BASE,
    ZOOM_FACTOR,
    ZOOM_MIN,
    ZOOM_MAX,
)
from coordgraph.edit.actions import CommandResult, EditActions
from coordgraph.edit.controller import InteractionController, Outcome

__all__ = [
    'InteractionController',
    'Outcome',
    'EditActions',
    'CommandResult',
    'VERTEX_RADIUS',
    'HIT_MARGIN',
    'GRID_BASE',
    'ZOOM_FACTOR',
    'ZOOM_MIN',
    'ZOOM_MAX',
]
