"""
Coordinate system utilities.

Three spaces are used throughout the app:
    world  - internal pixel space where vertices are stored
             (identical to canvas pixels at zoom=1, pan=(0,0))
    screen - canvas pixels after the zoom/pan transform
    user   - integer coordinates shown to the user (CG or math system)

Switching the coordinate system only changes the user mapping; stored
vertex positions are never touched.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from coordgraph.view import ViewTransform

Point = Tuple[float, float]


class CoordSystem(str, Enum):
    CG = "cg"
    MATH = "math"


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned world rectangle; top < bottom because world Y grows downward."""
    left: float
    top: float
    right: float
    bottom: float

    def contains_x(self, x: float) -> bool:
        return self.left <= x <= self.right

    def contains_y(self, y: float) -> bool:
        return self.top <= y <= self.bottom

    def contains(self, x: float, y: float) -> bool:
        return self.contains_x(x) and self.contains_y(y)


def user_round(value: float) -> int:
    # Ties go toward +inf, matching how browsers round display values
    return int(math.floor(value + 0.5))


class CoordinateFrame:
    """
    Active coordinate system plus the world position of the math origin.

    The math origin is the canvas centre captured on the first layout and
    kept constant afterwards so labels stay stable when the window resizes.
    """

    def __init__(self, system: CoordSystem = CoordSystem.CG):
        self.system = CoordSystem(system)
        self._math_origin: Optional[Point] = None

    @property
    def math_origin(self) -> Optional[Point]:
        return self._math_origin

    def capture_math_origin(self, width: float, height: float) -> bool:
        """Fix the math origin at the canvas centre. Only the first call has an effect."""
        if self._math_origin is not None:
            return False
        self._math_origin = (width / 2, height / 2)
        return True

    def origin(self) -> Point:
        """World-px position of the active system's origin."""
        if self.system is CoordSystem.CG or self._math_origin is None:
            return (0.0, 0.0)
        return self._math_origin

    def world_to_user(self, wx: float, wy: float) -> Tuple[int, int]:
        if self.system is CoordSystem.CG:
            return user_round(wx), user_round(wy)
        ox, oy = self.origin()
        return user_round(wx - ox), user_round(oy - wy)

    def user_to_world(self, ux: float, uy: float) -> Point:
        if self.system is CoordSystem.CG:
            return float(ux), float(uy)
        ox, oy = self.origin()
        return ox + ux, oy - uy


def screen_to_world(view: ViewTransform, sx: float, sy: float) -> Point:
    return (sx - view.pan_x) / view.zoom, (sy - view.pan_y) / view.zoom


def world_to_screen(view: ViewTransform, wx: float, wy: float) -> Point:
    return wx * view.zoom + view.pan_x, wy * view.zoom + view.pan_y


def visible_world_bounds(view: ViewTransform, width: float, height: float) -> Bounds:
    """World rectangle covered by a ``width`` x ``height`` screen viewport."""
    left, top = screen_to_world(view, 0, 0)
    right, bottom = screen_to_world(view, width, height)
    return Bounds(left=left, top=top, right=right, bottom=bottom)
