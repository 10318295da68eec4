"""
Educational content for the info panel.

Each tab returns markdown. The 'sys' tab follows the active coordinate
system and the 'mode' tab follows the active edit mode.
"""

from typing import Union

from coordgraph.coords import CoordSystem
from coordgraph.workspace import EditMode

TABS = {
    "sys": "System",
    "diff": "CG vs Math",
    "mode": "Mode",
}

SYS_CONTENT = {
    CoordSystem.CG: """
#### CG / Screen coordinates

- Origin **(0, 0)** is the **top-left corner**
- **X** grows to the **right** →
- **Y** grows **downward** ↓
- Pixel (100, 200) is 100 px right of and 200 px below the origin
- Used by HTML canvas, CSS, SDL, WinAPI and OpenGL window coordinates

> Think of the screen as a sheet of paper: you start at the top-left corner
> and read to the right and downward.
""",
    CoordSystem.MATH: """
#### Mathematical system: Cartesian plane

- Origin **(0, 0)** is the **centre of the plane**
- **X** grows to the **right** →
- **Y** grows **upward** ↑
- Quadrant I (x > 0, y > 0): top right
- Quadrant II (x < 0, y > 0): top left
- Quadrant III (x < 0, y < 0): bottom left
- Quadrant IV (x > 0, y < 0): bottom right

> Here y = -100 lies *below* the origin, the opposite of the CG system.
""",
}

DIFF_CONTENT = """
#### CG vs Math: key differences

| Property | CG / Screen | Math |
|---|---|---|
| Origin | Top-left corner | Centre |
| Positive Y | ↓ downward | ↑ upward |
| Negative Y | Above the origin | Below the origin |
| Y conversion | `y_cg = height - y_math` | `y_math = height - y_cg` |

> OpenGL clip space runs from -1 to +1 with Y up (like the math system);
> the final framebuffer uses Y down (CG).
"""

MODE_CONTENT = {
    EditMode.SELECT: """
#### Mode: Select / Move

- Click a **vertex** to select it
- **Drag** a vertex to move it
- Click empty canvas to clear the selection
- Coordinates update live while dragging
""",
    EditMode.VERTEX: """
#### Mode: Insert Vertex

- Click anywhere on the canvas to **add a vertex**
- Or type X and Y in the sidebar and press **Add vertex**
- Coordinates follow the selected coordinate system
- Delete vertices from the list with ×
""",
    EditMode.EDGE: """
#### Mode: Insert Edge

- Click the **first vertex**; it is highlighted
- Click the **second vertex** to create the edge
- Click the same vertex again to **cancel**
- Duplicate edges are detected automatically
- A dashed line follows the cursor from the first vertex
""",
}


def info_markdown(tab: str,
                  system: Union[CoordSystem, str] = CoordSystem.CG,
                  mode: Union[EditMode, str] = EditMode.VERTEX) -> str:
    """Markdown for an info tab; unknown tabs render empty."""
    if tab == "sys":
        return SYS_CONTENT[CoordSystem(system)]
    if tab == "diff":
        return DIFF_CONTENT
    if tab == "mode":
        return MODE_CONTENT.get(EditMode(mode), MODE_CONTENT[EditMode.VERTEX])
    return ""
