from types import SimpleNamespace

import pytest

from coordgraph.edit import InteractionController
from coordgraph.edit.handlers import (
    normalize_event_payload,
    payload_point,
    setup_canvas_handlers,
)
from coordgraph.workspace import EditMode, Workspace


def test_normalize_event_payload_handles_dict():
    payload = {'x': 1, 'y': 2}
    assert normalize_event_payload(payload) is payload


def test_normalize_event_payload_handles_list():
    assert normalize_event_payload([10, 20, -3]) == {'x': 10, 'y': 20, 'deltaY': -3}


def test_normalize_event_payload_handles_other():
    assert normalize_event_payload('nope') == {}


def test_payload_point_aliases():
    assert payload_point({'x': '4', 'y': 5}) == (4.0, 5.0)
    assert payload_point({'offsetX': 1, 'offsetY': 2}) == (1.0, 2.0)
    assert payload_point({'image_x': 7, 'image_y': 8}) == (7.0, 8.0)
    assert payload_point({'x': 1}) is None
    assert payload_point({'x': 'a', 'y': 1}) is None


@pytest.fixture
def wired():
    ws = Workspace()
    ws.layout(800, 600)
    controller = InteractionController(ws)
    calls = {'redraw': 0, 'messages': [], 'cursors': [], 'pointer': 0}

    def redraw():
        calls['redraw'] += 1

    def update_pointer():
        calls['pointer'] += 1

    handlers = setup_canvas_handlers(
        controller=controller,
        redraw=redraw,
        show_message=calls['messages'].append,
        set_cursor=calls['cursors'].append,
        update_pointer=update_pointer,
    )
    return ws, handlers, calls


def mouse(kind, x=None, y=None, button=0):
    return SimpleNamespace(type=kind, image_x=x, image_y=y, button=button)


def test_click_adds_vertex_and_reports(wired):
    ws, handlers, calls = wired
    handlers['handle_mouse'](mouse('mousedown', 120, 120))
    handlers['handle_mouse'](mouse('mouseup', 120, 120))
    handlers['handle_mouse'](mouse('click', 120, 120))
    assert ws.store.vertex_count == 1
    assert calls['messages'] == ['Vertex V0 added']
    assert calls['redraw'] == 1
    assert calls['cursors'] == ['crosshair']


def test_move_updates_pointer_readout(wired):
    ws, handlers, calls = wired
    handlers['handle_mouse'](mouse('mousemove', 60, 70))
    assert ws.pointer == (40, 50)
    assert calls['pointer'] == 1
    handlers['handle_mouse'](mouse('mouseleave'))
    assert ws.pointer is None
    assert calls['pointer'] == 2


def test_events_without_coordinates_are_ignored(wired):
    ws, handlers, calls = wired
    handlers['handle_mouse'](mouse('click'))
    assert ws.store.vertex_count == 0
    assert calls['redraw'] == 0


def test_wheel_payload(wired):
    ws, handlers, calls = wired
    handlers['handle_wheel'](SimpleNamespace(args={'x': 100, 'y': 100, 'deltaY': -53}))
    assert ws.zoom_percent == 115
    handlers['handle_wheel'](SimpleNamespace(args={'deltaY': -53}))
    assert ws.zoom_percent == 115


def test_keyboard_reset(wired):
    ws, handlers, calls = wired
    ws.view.zoom = 3.0
    event = SimpleNamespace(
        key=SimpleNamespace(name='0'),
        action=SimpleNamespace(keydown=True),
        modifiers=SimpleNamespace(ctrl=True),
    )
    handlers['handle_keyboard'](event)
    assert ws.view.zoom == 1.0
    assert calls['messages'] == ['Zoom and pan reset']


def test_cursor_follows_mode(wired):
    ws, handlers, calls = wired
    ws.mode = EditMode.SELECT
    handlers['handle_mouse'](mouse('mousemove', 500, 500))
    assert calls['cursors'][-1] == 'default'
