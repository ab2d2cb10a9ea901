import pytest

pytest.importorskip("pynput.mouse")

from markmenu.core.types import ItemState, MenuItemEventType  # noqa: E402
from markmenu.runtime.run_loop import build_menu  # noqa: E402
from markmenu.ui.mouse_source import MouseSource, PointerInput  # noqa: E402


def test_drain_replays_queued_inputs():
    menu = build_menu()
    events = []
    menu.selection.subscribe(events.append)
    src = MouseSource()

    src.put(PointerInput("move", 0, 400, 300))
    src.put(PointerInput("press", 0, 400, 300, buttons=1))
    t = 0
    for i in range(1, 23):
        t += 16
        src.put(PointerInput("move", t, 400 + i * 10, 300))
    src.put(PointerInput("release", t + 16, 620, 300, button=0))

    assert src.drain(menu) == 25
    assert [(e.type, e.target.item_id) for e in events] == [(MenuItemEventType.SELECTION, "copy")]
    assert menu.root_item.find("copy").state == ItemState.SELECTED


def test_drain_respects_limit():
    menu = build_menu()
    src = MouseSource()
    for i in range(5):
        src.put(PointerInput("move", i, i, 0))
    assert src.drain(menu, limit=3) == 3
    assert src.drain(menu) == 2
    assert src.drain(menu) == 0


def test_stop_without_start():
    MouseSource().stop()
