"""
Colour palettes for the light and dark themes.

The renderer asks for the palette once per frame, so switching theme only
needs a redraw.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK


@dataclass(frozen=True)
class Palette:
    canvas_bg: str
    grid: str
    grid_label: str
    axis_x: str
    axis_y: str
    origin: str
    vertex_fill: str
    vertex_stroke: str
    vertex_selected: str
    vertex_pending: str
    vertex_label: str
    vertex_coord: str
    glow_selected: str
    glow_pending: str
    edge: str
    edge_label: str
    preview: str


LIGHT = Palette(
    canvas_bg="#f8fafc",
    grid="#dde3ef",
    grid_label="#94a3b8",
    axis_x="#ef4444",
    axis_y="#10b981",
    origin="#f59e0b",
    vertex_fill="#6366f1",
    vertex_stroke="#ffffff",
    vertex_selected="#f97316",
    vertex_pending="#0891b2",
    vertex_label="#1e293b",
    vertex_coord="#64748b",
    glow_selected="rgba(249,115,22,.2)",
    glow_pending="rgba(8,145,178,.15)",
    edge="#d97706",
    edge_label="#92400e",
    preview="rgba(8,145,178,.4)",
)

DARK = Palette(
    canvas_bg="#0d1117",
    grid="#1c2b3a",
    grid_label="#2d4a6a",
    axis_x="#f87171",
    axis_y="#34d399",
    origin="#fbbf24",
    vertex_fill="#6366f1",
    vertex_stroke="#1f2937",
    vertex_selected="#f97316",
    vertex_pending="#22d3ee",
    vertex_label="#ffffff",
    vertex_coord="#9ca3af",
    glow_selected="rgba(249,115,22,.2)",
    glow_pending="rgba(34,211,238,.2)",
    edge="#fbbf24",
    edge_label="#b45309",
    preview="rgba(34,211,238,.4)",
)


def palette(theme: Union[Theme, str]) -> Palette:
    return DARK if Theme(theme) is Theme.DARK else LIGHT
