"""
Sidebar widgets for the coordgraph page.

Each render_* function builds one sidebar section inside the current NiceGUI
container and reports user intent through callbacks; none of them touch the
workspace directly. Sections whose look depends on state return a small
update function the page calls after the state changes.
"""

from typing import Callable, Dict, List

from nicegui import ui

from coordgraph.coords import CoordSystem
from coordgraph.info import TABS
from coordgraph.workspace import MODE_NAMES, EdgeRow, EditMode, VertexRow

MODE_ICONS = {
    EditMode.SELECT: 'near_me',
    EditMode.VERTEX: 'radio_button_checked',
    EditMode.EDGE: 'timeline',
}


def section_title(text: str):
    ui.label(text).classes('text-xs font-bold text-gray-400 uppercase mt-2')


def render_coord_toggle(
    current: CoordSystem,
    on_change: Callable[[CoordSystem], None],
):
    """Two-way toggle between the CG and the math coordinate system."""
    section_title('Coordinate system')
    options = {CoordSystem.CG.value: 'CG (Y ↓)', CoordSystem.MATH.value: 'Math (Y ↑)'}
    return ui.toggle(
        options,
        value=current.value,
        on_change=lambda e: on_change(CoordSystem(e.value)),
    ).props('spread no-caps').classes('w-full')


def render_mode_buttons(
    current: EditMode,
    on_change: Callable[[EditMode], None],
) -> Callable[[EditMode], None]:
    """
    Renders one button per edit mode, highlighting the active one.

    Returns a function that re-highlights the buttons for a new mode.
    """
    section_title('Mode')
    buttons: Dict[EditMode, ui.button] = {}
    with ui.column().classes('w-full gap-1'):
        for mode in EditMode:
            btn = ui.button(MODE_NAMES[mode], icon=MODE_ICONS[mode],
                            on_click=lambda _, m=mode: on_change(m))
            btn.props('no-caps align=left').classes('w-full')
            buttons[mode] = btn

    def update_visuals(active: EditMode):
        for mode, btn in buttons.items():
            btn.props(remove='color outline')
            if mode is active:
                btn.props('color=primary')
            else:
                btn.props('outline color=grey')

    update_visuals(current)
    return update_visuals


def render_add_vertex_form(on_add: Callable[[float, float], None]):
    """X/Y inputs in user coordinates plus an "Add vertex" button."""
    section_title('Add vertex by coordinates')
    with ui.row().classes('w-full items-center gap-2 no-wrap'):
        x_input = ui.number('X', value=0, format='%.0f').props('dense outlined').classes('w-20')
        y_input = ui.number('Y', value=0, format='%.0f').props('dense outlined').classes('w-20')

        def submit():
            if x_input.value is None or y_input.value is None:
                ui.notify('Enter both X and Y', type='warning')
                return
            on_add(float(x_input.value), float(y_input.value))

        ui.button(icon='add', on_click=submit).props('dense round color=primary').tooltip('Add vertex')
    return x_input, y_input


def render_vertex_list(
    get_rows: Callable[[], List[VertexRow]],
    on_select: Callable[[int], None],
    on_delete: Callable[[int], None],
) -> Callable[[], None]:
    """
    Vertex list in user coordinates; the row text selects, × deletes.

    Returns the refresh function of this page's list.
    """
    @ui.refreshable
    def content():
        rows = get_rows()
        section_title(f'Vertices ({len(rows)})')
        if not rows:
            ui.label('No vertices yet').classes('text-sm text-gray-500 italic')
            return
        with ui.column().classes('w-full gap-0 max-h-48 overflow-y-auto'):
            for row in rows:
                highlight = ''
                if row.pending:
                    highlight = 'bg-orange-100 dark:bg-orange-900'
                elif row.selected:
                    highlight = 'bg-blue-100 dark:bg-blue-900'
                with ui.row().classes(f'w-full items-center justify-between no-wrap px-1 rounded {highlight}'):
                    ui.label(row.label).classes('text-sm font-mono cursor-pointer').on(
                        'click', lambda _, vid=row.id: on_select(vid))
                    ui.button(icon='close', on_click=lambda _, vid=row.id: on_delete(vid)) \
                        .props('flat dense round size=sm color=negative').tooltip(f'Delete V{row.id}')

    content()
    return content.refresh


def render_edge_list(
    get_rows: Callable[[], List[EdgeRow]],
    on_delete: Callable[[int], None],
) -> Callable[[], None]:
    @ui.refreshable
    def content():
        rows = get_rows()
        section_title(f'Edges ({len(rows)})')
        if not rows:
            ui.label('No edges yet').classes('text-sm text-gray-500 italic')
            return
        with ui.column().classes('w-full gap-0 max-h-48 overflow-y-auto'):
            for row in rows:
                with ui.row().classes('w-full items-center justify-between no-wrap px-1'):
                    ui.label(row.label).classes('text-sm font-mono')
                    ui.button(icon='close', on_click=lambda _, eid=row.id: on_delete(eid)) \
                        .props('flat dense round size=sm color=negative').tooltip(f'Delete e{row.id}')

    content()
    return content.refresh


def render_info_tabs(get_markdown: Callable[[str], str]) -> Callable[[], None]:
    """
    Tabbed educational panel.

    ``get_markdown(tab)`` supplies the content; the returned function
    re-renders every tab after the coordinate system or mode changed.
    """
    section_title('Info')
    panels = {}
    with ui.tabs().classes('w-full').props('dense no-caps') as tabs:
        tab_elements = {key: ui.tab(key, label=label) for key, label in TABS.items()}
    first = next(iter(tab_elements.values()))
    with ui.tab_panels(tabs, value=first).classes('w-full'):
        for key, tab in tab_elements.items():
            with ui.tab_panel(tab).classes('p-1'):
                panels[key] = ui.markdown(get_markdown(key)).classes('text-sm')

    def update():
        for key, md in panels.items():
            md.content = get_markdown(key)

    return update
