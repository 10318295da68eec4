"""
Main NiceGUI application for coordgraph.

An interactive playground for the difference between the computer-graphics
(CG) coordinate system and the mathematical one: click to place vertices,
connect them with edges, drag them around, pan and zoom, and watch the
coordinates in both systems.

The page is glue only. State lives in a per-page Workspace, commands go
through EditActions, pointer gestures through the InteractionController and
every frame is an SVG produced by the CanvasRenderer and pushed into a
ui.interactive_image.
"""

import logging
import sys

from dotenv import load_dotenv
load_dotenv()

from nicegui import ui

from coordgraph.config import get_settings, set_preference
from coordgraph.coords import CoordSystem
from coordgraph.edit import EditActions, InteractionController
from coordgraph.edit.actions import CommandResult
from coordgraph.edit.handlers import MOUSE_EVENTS, WHEEL_JS_HANDLER, setup_canvas_handlers
from coordgraph.info import info_markdown
from coordgraph.renderer import CanvasRenderer
from coordgraph.status import StatusMessage
from coordgraph.theme import Theme, palette
from coordgraph.ui_components import (
    render_add_vertex_form,
    render_coord_toggle,
    render_edge_list,
    render_info_tabs,
    render_mode_buttons,
    render_vertex_list,
)
from coordgraph.workspace import MODE_NAMES, EditMode, Topic, Workspace

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger('coordgraph')

renderer = CanvasRenderer()

# Reports the canvas host size now and whenever the window is resized
RESIZE_JS = '''
(() => {{
    const host = document.getElementById('c{host_id}');
    if (!host) return;
    const report = () => emitEvent('canvas_resize', {{
        width: Math.floor(host.clientWidth),
        height: Math.floor(host.clientHeight),
    }});
    window.addEventListener('resize', report);
    report();
}})();
'''

ui.add_head_html('''
    <style>
        .coordgraph-canvas svg { user-select: none; }
    </style>
''', shared=True)


def persist(key, value):
    """Store a UI preference; a read-only config location only costs the preference."""
    try:
        set_preference(key, value)
    except OSError as e:
        logger.warning(f"Could not save preference {key}: {e}")


@ui.page('/')
def main_page():
    ui.query('body').style('margin: 0; padding: 0; overflow: hidden;')

    workspace = Workspace(mode=settings.mode, coord_system=settings.coord_system)
    actions = EditActions(workspace)
    controller = InteractionController(workspace, actions)
    state = {'theme': settings.theme}

    dark = ui.dark_mode(value=state['theme'] is Theme.DARK)

    # --- Canvas helpers ---

    def redraw():
        canvas.set_content(renderer.render_svg(workspace, palette(state['theme'])))

    def set_cursor(cursor: str):
        canvas.style(f'cursor: {cursor}')

    def update_pointer():
        coords = controller.pointer_user_coords()
        pos_label.text = 'Pos: —' if coords is None else f'Pos: ({coords[0]}, {coords[1]})'

    def run_command(result: CommandResult):
        """Apply a sidebar command: redraw and report its message."""
        redraw()
        if result.message:
            status.show(result.message)

    # --- Sidebar callbacks ---

    def on_coord_change(system: CoordSystem):
        if system is workspace.coord_system:
            return
        run_command(actions.set_coord_system(system))
        persist('coord_system', system)

    def on_mode_change(mode: EditMode):
        run_command(actions.set_mode(mode))
        persist('mode', mode)

    def on_add(ux: float, uy: float):
        run_command(actions.add_vertex_at_user(ux, uy))

    def on_select(vertex_id: int):
        run_command(actions.select_vertex(vertex_id))

    def on_delete_vertex(vertex_id: int):
        run_command(actions.delete_vertex(vertex_id))

    def on_delete_edge(edge_id: int):
        run_command(actions.delete_edge(edge_id))

    def on_clear_all():
        run_command(actions.clear_all())

    def on_reset_view():
        run_command(actions.reset_view())

    def on_toggle_theme():
        state['theme'] = state['theme'].toggled()
        dark.set_value(state['theme'] is Theme.DARK)
        theme_button.props(f'icon={"light_mode" if state["theme"] is Theme.DARK else "dark_mode"}')
        persist('theme', state['theme'])
        redraw()

    # --- Layout ---

    with ui.row().classes('w-screen h-screen no-wrap gap-0'):
        with ui.column().classes('w-80 h-full overflow-y-auto p-3 gap-2 shrink-0 '
                                 'border-r border-gray-300 dark:border-gray-700'):
            with ui.row().classes('w-full items-center justify-between'):
                ui.label('Coordinate Graph').classes('text-lg font-bold')
                theme_button = ui.button(
                    icon='light_mode' if state['theme'] is Theme.DARK else 'dark_mode',
                    on_click=on_toggle_theme,
                ).props('flat round dense').tooltip('Toggle theme')

            render_coord_toggle(workspace.coord_system, on_coord_change)
            update_mode_buttons = render_mode_buttons(workspace.mode, on_mode_change)
            render_add_vertex_form(on_add)
            refresh_vertices = render_vertex_list(workspace.vertex_rows, on_select, on_delete_vertex)
            refresh_edges = render_edge_list(workspace.edge_rows, on_delete_edge)

            with ui.row().classes('w-full gap-2 mt-2'):
                ui.button('Clear all', icon='delete_sweep', on_click=on_clear_all) \
                    .props('outline color=negative no-caps dense')
                ui.button('Reset view', icon='center_focus_strong', on_click=on_reset_view) \
                    .props('outline no-caps dense').tooltip('Ctrl+0')

            update_info = render_info_tabs(
                lambda tab: info_markdown(tab, workspace.coord_system, workspace.mode))

        with ui.column().classes('grow h-full gap-0'):
            canvas_host = ui.element('div').classes('w-full grow relative overflow-hidden')
            with canvas_host:
                canvas = ui.interactive_image(
                    size=(workspace.canvas_width, workspace.canvas_height),
                    events=MOUSE_EVENTS,
                    cross=False,
                ).classes('coordgraph-canvas absolute top-0 left-0')

            with ui.row().classes('w-full items-center gap-6 px-3 py-1 text-sm font-mono '
                                  'border-t border-gray-300 dark:border-gray-700') as status_bar:
                mode_label = ui.label(f'Mode: {MODE_NAMES[workspace.mode]}')
                pos_label = ui.label('Pos: —')
                zoom_label = ui.label(f'Zoom: {workspace.zoom_percent}%')
                message_label = ui.label('').classes('grow text-right text-primary')

    def schedule_clear(delay, callback):
        # Timers live in the status bar so refreshed sidebar lists cannot delete them
        with status_bar:
            return ui.timer(delay, callback, once=True)

    status = StatusMessage(
        on_change=lambda text: setattr(message_label, 'text', text),
        schedule=schedule_clear,
        timeout=settings.status_timeout,
    )

    # --- Workspace observers ---

    def on_workspace_change(topic: Topic):
        if topic in (Topic.GRAPH, Topic.SELECTION, Topic.COORDS):
            refresh_vertices()
        if topic is Topic.GRAPH:
            refresh_edges()
        if topic is Topic.MODE:
            update_mode_buttons(workspace.mode)
            mode_label.text = f'Mode: {MODE_NAMES[workspace.mode]}'
        if topic in (Topic.MODE, Topic.COORDS):
            update_info()
        if topic is Topic.VIEW:
            zoom_label.text = f'Zoom: {workspace.zoom_percent}%'

    workspace.subscribe(on_workspace_change)

    # --- Event wiring ---

    handlers = setup_canvas_handlers(
        controller=controller,
        redraw=redraw,
        show_message=status.show,
        set_cursor=set_cursor,
        update_pointer=update_pointer,
    )
    canvas.on_mouse(handlers['handle_mouse'])
    canvas.on('wheel', handlers['handle_wheel'], js_handler=WHEEL_JS_HANDLER)
    ui.keyboard(on_key=handlers['handle_keyboard'])

    def handle_resize(e):
        args = e.args if isinstance(e.args, dict) else {}
        try:
            width = int(args.get('width', 0))
            height = int(args.get('height', 0))
        except (TypeError, ValueError):
            return
        if width <= 0 or height <= 0:
            return
        workspace.layout(width, height)
        canvas._props['size'] = [width, height]
        canvas.update()
        redraw()

    ui.on('canvas_resize', handle_resize)
    ui.timer(0.1, lambda: ui.run_javascript(RESIZE_JS.format(host_id=canvas_host.id)), once=True)

    set_cursor(controller.cursor)
    redraw()


if __name__ in {"__main__", "__mp_main__"}:
    logger.info(f"Starting coordgraph on http://{settings.host}:{settings.port}")
    ui.run(
        title='Coordinate Graph',
        host=settings.host,
        port=settings.port,
        reload=not getattr(sys, 'frozen', False),
    )
