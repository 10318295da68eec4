"""
View transform: zoom factor and pan offset.

Maps world pixels to screen pixels with ``sx = wx * zoom + pan_x`` (same for y).
Zoom is kept inside [ZOOM_MIN, ZOOM_MAX]; requests outside the range are clamped.
"""

from dataclasses import dataclass
from typing import Tuple

from coordgraph.constants import (
    DEFAULT_PAN,
    DEFAULT_ZOOM,
    ZOOM_FACTOR,
    ZOOM_MAX,
    ZOOM_MIN,
)


def clamp_zoom(zoom: float) -> float:
    return max(ZOOM_MIN, min(ZOOM_MAX, zoom))


@dataclass
class ViewTransform:
    """Mutable pan/zoom state shared by the controller and the renderer."""
    zoom: float = DEFAULT_ZOOM
    pan_x: float = DEFAULT_PAN[0]
    pan_y: float = DEFAULT_PAN[1]

    @property
    def zoom_percent(self) -> int:
        return int(round(self.zoom * 100))

    def reset(self) -> None:
        self.zoom = DEFAULT_ZOOM
        self.pan_x, self.pan_y = DEFAULT_PAN

    def set_pan(self, pan_x: float, pan_y: float) -> None:
        self.pan_x = pan_x
        self.pan_y = pan_y

    def zoom_at(self, sx: float, sy: float, factor: float) -> float:
        """
        Scale zoom by ``factor`` keeping the world point under (sx, sy) fixed.

        Returns the new zoom. When clamping leaves the zoom unchanged the pan
        is left alone as well.
        """
        old_zoom = self.zoom
        new_zoom = clamp_zoom(old_zoom * factor)
        ratio = new_zoom / old_zoom
        self.pan_x = sx - (sx - self.pan_x) * ratio
        self.pan_y = sy - (sy - self.pan_y) * ratio
        self.zoom = new_zoom
        return new_zoom

    def wheel(self, sx: float, sy: float, delta_y: float) -> float:
        """Apply one wheel notch. Negative delta (wheel up) zooms in."""
        factor = ZOOM_FACTOR if delta_y < 0 else 1 / ZOOM_FACTOR
        return self.zoom_at(sx, sy, factor)

    def as_tuple(self) -> Tuple[float, float, float]:
        return self.zoom, self.pan_x, self.pan_y
