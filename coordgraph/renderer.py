"""
Canvas renderer that produces an SVG frame from the workspace.

Drawing happens in world pixels: every primitive is placed inside a single
``matrix(zoom 0 0 zoom pan_x pan_y)`` group, so the browser applies zoom and
pan. Anything that should keep a constant on-screen size (stroke widths,
fonts, radii, arrowheads, dash lengths) is divided by the zoom before it is
emitted.

The frame is a plain list of primitives tagged with a layer name, which
keeps it easy to inspect in tests; ``Frame.to_svg()`` turns it into the
markup pushed to the NiceGUI interactive image.

Paint order:
    1. background
    2. adaptive grid + axis value labels
    3. axes, arrowheads and origin marker
    4. edges and their labels
    5. edge preview, glow rings, vertices and their labels
"""

import math
from dataclasses import dataclass, field
from html import escape
from typing import Iterator, List, Optional, Tuple

from coordgraph.coords import Bounds, CoordSystem
from coordgraph.constants import (
    GRID_BASE,
    GRID_MAX_SPACING,
    GRID_MIN_SPACING,
    GRID_STEP_FACTOR,
    VERTEX_RADIUS,
)
from coordgraph.theme import Palette
from coordgraph.workspace import EditMode, Workspace

FONT_FAMILY = "monospace"


def _num(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


# --- Primitives ---

@dataclass(frozen=True)
class Line:
    layer: str
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    width: float
    dash: Optional[Tuple[float, float]] = None

    def to_svg(self) -> str:
        dash = ""
        if self.dash:
            dash = f' stroke-dasharray="{_num(self.dash[0])},{_num(self.dash[1])}"'
        return (f'<line x1="{_num(self.x1)}" y1="{_num(self.y1)}" '
                f'x2="{_num(self.x2)}" y2="{_num(self.y2)}" '
                f'stroke="{self.stroke}" stroke-width="{_num(self.width)}"{dash} />')


@dataclass(frozen=True)
class Circle:
    layer: str
    cx: float
    cy: float
    r: float
    fill: str
    stroke: Optional[str] = None
    width: float = 0.0

    def to_svg(self) -> str:
        stroke = ""
        if self.stroke:
            stroke = f' stroke="{self.stroke}" stroke-width="{_num(self.width)}"'
        return (f'<circle cx="{_num(self.cx)}" cy="{_num(self.cy)}" r="{_num(self.r)}" '
                f'fill="{self.fill}"{stroke} />')


@dataclass(frozen=True)
class Polygon:
    layer: str
    points: Tuple[Tuple[float, float], ...]
    fill: str

    def to_svg(self) -> str:
        pts = " ".join(f"{_num(x)},{_num(y)}" for x, y in self.points)
        return f'<polygon points="{pts}" fill="{self.fill}" />'


@dataclass(frozen=True)
class Text:
    layer: str
    x: float
    y: float
    text: str
    fill: str
    size: float
    anchor: str = "start"
    bold: bool = False

    def to_svg(self) -> str:
        weight = ' font-weight="bold"' if self.bold else ""
        return (f'<text x="{_num(self.x)}" y="{_num(self.y)}" fill="{self.fill}" '
                f'font-size="{_num(self.size)}" font-family="{FONT_FAMILY}" '
                f'text-anchor="{self.anchor}"{weight}>{escape(self.text)}</text>')


@dataclass
class Frame:
    """One rendered frame: background in screen space, shapes in world space."""
    width: float
    height: float
    background: str
    zoom: float
    pan_x: float
    pan_y: float
    shapes: List[object] = field(default_factory=list)

    def add(self, shape) -> None:
        self.shapes.append(shape)

    def layer(self, name: str) -> List[object]:
        return [s for s in self.shapes if s.layer == name]

    def layers(self) -> List[str]:
        """Layer names in paint order, without repeats."""
        seen: List[str] = []
        for s in self.shapes:
            if s.layer not in seen:
                seen.append(s.layer)
        return seen

    def to_svg(self) -> str:
        body = "".join(s.to_svg() for s in self.shapes)
        transform = (f"matrix({_num(self.zoom)} 0 0 {_num(self.zoom)} "
                     f"{_num(self.pan_x)} {_num(self.pan_y)})")
        return (f'<rect x="0" y="0" width="{_num(self.width)}" height="{_num(self.height)}" '
                f'fill="{self.background}" />'
                f'<g transform="{transform}">{body}</g>')


# --- Grid helpers ---

def grid_step(zoom: float, base: float = GRID_BASE) -> float:
    """
    World spacing between grid lines for the given zoom.

    Starts from ``base`` and multiplies or divides by 5 until the on-screen
    spacing lies within [25, 250] px; never finer than one world unit.
    """
    step = float(base)
    while step * zoom < GRID_MIN_SPACING:
        step *= GRID_STEP_FACTOR
    while step * zoom > GRID_MAX_SPACING:
        step /= GRID_STEP_FACTOR
    return max(step, 1.0)


def grid_positions(low: float, high: float, origin: float, step: float) -> Iterator[float]:
    """Grid line positions aligned on ``origin`` covering [low, high + step]."""
    start = math.floor((low - origin) / step) * step + origin
    n = 0
    pos = start
    while pos <= high + step:
        yield pos
        n += 1
        pos = start + n * step


def arrow_head(tip_x: float, tip_y: float, angle: float, size: float) -> Tuple[Tuple[float, float], ...]:
    """Triangle with its tip at (tip_x, tip_y) pointing along ``angle`` radians."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    local = ((0.0, 0.0), (-size, -size / 2), (-size, size / 2))
    return tuple((tip_x + px * cos_a - py * sin_a, tip_y + px * sin_a + py * cos_a)
                 for px, py in local)


class CanvasRenderer:
    """Builds a Frame from the current workspace state and a palette."""

    def render(self, ws: Workspace, colors: Palette) -> Frame:
        view = ws.view
        frame = Frame(
            width=ws.canvas_width,
            height=ws.canvas_height,
            background=colors.canvas_bg,
            zoom=view.zoom,
            pan_x=view.pan_x,
            pan_y=view.pan_y,
        )
        bounds = ws.visible_bounds()
        self._draw_grid(frame, ws, bounds, colors)
        self._draw_axes(frame, ws, bounds, colors)
        self._draw_edges(frame, ws, colors)
        self._draw_vertices(frame, ws, colors)
        return frame

    def render_svg(self, ws: Workspace, colors: Palette) -> str:
        return self.render(ws, colors).to_svg()

    # --- Grid ---

    def _draw_grid(self, frame: Frame, ws: Workspace, b: Bounds, c: Palette) -> None:
        zoom = ws.view.zoom
        ox, oy = ws.frame.origin()
        step = grid_step(zoom)
        xs = list(grid_positions(b.left, b.right, ox, step))
        ys = list(grid_positions(b.top, b.bottom, oy, step))

        for x in xs:
            frame.add(Line("grid", x, b.top, x, b.bottom, c.grid, 1 / zoom))
        for y in ys:
            frame.add(Line("grid", b.left, y, b.right, y, c.grid, 1 / zoom))

        # Value labels hug the axis but stay inside the viewport
        size = 10 / zoom
        label_y = min(max(oy + 14 / zoom, b.top + 14 / zoom), b.bottom - 2 / zoom)
        for x in xs:
            ux = ws.frame.world_to_user(x, oy)[0]
            if ux == 0:
                continue
            frame.add(Text("grid_label", x, label_y, str(ux), c.grid_label, size, anchor="middle"))

        label_x = min(max(ox + 28 / zoom, b.left + 28 / zoom), b.right - 2 / zoom)
        for y in ys:
            uy = ws.frame.world_to_user(ox, y)[1]
            if uy == 0:
                continue
            frame.add(Text("grid_label", label_x, y + 4 / zoom, str(uy), c.grid_label, size, anchor="end"))

    # --- Axes ---

    def _draw_axes(self, frame: Frame, ws: Workspace, b: Bounds, c: Palette) -> None:
        zoom = ws.view.zoom
        ox, oy = ws.frame.origin()
        lw = 1.5 / zoom
        ah = 8 / zoom
        letter = 13 / zoom

        if b.contains_y(oy):
            frame.add(Line("axis", b.left, oy, b.right, oy, c.axis_x, lw))
            frame.add(Polygon("axis", arrow_head(b.right - ah, oy, 0.0, ah), c.axis_x))
            frame.add(Text("axis", b.right - 18 / zoom, oy - 6 / zoom, "X", c.axis_x, letter, bold=True))

        if b.contains_x(ox):
            frame.add(Line("axis", ox, b.top, ox, b.bottom, c.axis_y, lw))
            # Positive Y points down on screen in CG, up in math
            if ws.coord_system is CoordSystem.CG:
                tip_y, angle, label_y = b.bottom - ah, math.pi / 2, b.bottom - 18 / zoom
            else:
                tip_y, angle, label_y = b.top + ah, -math.pi / 2, b.top + 18 / zoom
            frame.add(Polygon("axis", arrow_head(ox, tip_y, angle, ah), c.axis_y))
            frame.add(Text("axis", ox + 6 / zoom, label_y, "Y", c.axis_y, letter, bold=True))

        if b.contains(ox, oy):
            frame.add(Circle("origin", ox, oy, 3 / zoom, c.origin))
            frame.add(Text("origin", ox + 6 / zoom, oy - 6 / zoom, "(0,0)", c.origin, 11 / zoom))

    # --- Edges ---

    def _draw_edges(self, frame: Frame, ws: Workspace, c: Palette) -> None:
        zoom = ws.view.zoom
        store = ws.store
        for e in store.edges():
            v1 = store.vertex(e.v1)
            v2 = store.vertex(e.v2)
            if v1 is None or v2 is None:
                continue
            frame.add(Line("edge", v1.x, v1.y, v2.x, v2.y, c.edge, 2 / zoom))
            mx = (v1.x + v2.x) / 2
            my = (v1.y + v2.y) / 2
            frame.add(Text("edge_label", mx, my - 8 / zoom, f"e{e.id}", c.edge_label, 10 / zoom, anchor="middle"))

    # --- Vertices ---

    def _draw_vertices(self, frame: Frame, ws: Workspace, c: Palette) -> None:
        zoom = ws.view.zoom
        vr = VERTEX_RADIUS / zoom
        pending = ws.pending_source
        selected = ws.selected_vertex
        pointer = ws.pointer

        # Preview goes first so vertices paint over it
        if ws.mode is EditMode.EDGE and pending is not None and pointer is not None:
            source = ws.store.vertex(pending)
            if source is not None:
                frame.add(Line("preview", source.x, source.y, pointer[0], pointer[1],
                               c.preview, 1.5 / zoom, dash=(6 / zoom, 4 / zoom)))

        for v in ws.store.vertices():
            is_pending = v.id == pending
            is_selected = v.id == selected

            if is_pending or is_selected:
                glow = c.glow_pending if is_pending else c.glow_selected
                frame.add(Circle("glow", v.x, v.y, vr + 5 / zoom, glow))

            if is_pending:
                fill = c.vertex_pending
            elif is_selected:
                fill = c.vertex_selected
            else:
                fill = c.vertex_fill
            frame.add(Circle("vertex", v.x, v.y, vr, fill, c.vertex_stroke, 2 / zoom))

            frame.add(Text("vertex_label", v.x, v.y - vr - 5 / zoom, f"V{v.id}",
                           c.vertex_label, 10 / zoom, anchor="middle", bold=True))
            ux, uy = ws.user_coords(v.x, v.y)
            frame.add(Text("vertex_coord", v.x, v.y + vr + 12 / zoom, f"({ux},{uy})",
                           c.vertex_coord, 10 / zoom, anchor="middle"))
