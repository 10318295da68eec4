"""
Shared constants for the canvas editing system.

These values are used by the core (controller, hit testing, renderer)
and by the page glue in app.py. Sizes are in screen pixels unless noted.
"""

# Vertex visual radius; divided by zoom before drawing
VERTEX_RADIUS = 8

# Extra screen pixels around a vertex that still count as a hit
HIT_MARGIN = 4

# Grid spacing in world pixels at zoom = 1
GRID_BASE = 50

# Adaptive grid keeps neighbouring lines this far apart on screen
GRID_MIN_SPACING = 25
GRID_MAX_SPACING = 250
GRID_STEP_FACTOR = 5

# Wheel zoom
ZOOM_FACTOR = 1.15
ZOOM_MIN = 0.05
ZOOM_MAX = 30.0

# Initial / reset view
DEFAULT_ZOOM = 1.0
DEFAULT_PAN = (20.0, 20.0)

# Canvas size used until the browser reports the real one
DEFAULT_CANVAS_SIZE = (1200, 800)

# Status bar messages clear after this many seconds
STATUS_TIMEOUT = 4.0

# Mouse buttons as reported by the browser
BUTTON_LEFT = 0
BUTTON_MIDDLE = 1
