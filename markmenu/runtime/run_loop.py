from __future__ import annotations

import math
from dataclasses import dataclass

from markmenu.core.config import Settings
from markmenu.interpreter.menu import Menu
from markmenu.menu.item import MenuItem
from markmenu.menu.menu_event import MenuEvent
from markmenu.menu.parser import MenuParser
from markmenu.runtime.host import Element, Host, Window

DEMO_MENU = {
    "id": "root", "text": "Edit", "icon": "", "type": "simple", "direction": None,
    "children": [
        {"id": "copy", "text": "Copy", "icon": "copy", "type": "simple", "direction": 0},
        {"id": "format", "text": "Format", "icon": "format", "type": "simple", "direction": 90,
         "children": [
             {"id": "bold", "text": "Bold", "icon": "bold", "type": "checkbox", "direction": 0,
              "data": {"selected": False}},
             {"id": "size", "text": "Size", "icon": "size", "type": "slider", "direction": 180,
              "data": {"min": 8, "max": 72, "initial": 12, "precision": 0, "stepDist": 20, "stepSize": 2}},
         ]},
        {"id": "paste", "text": "Paste", "icon": "paste", "type": "simple", "direction": 180},
        {"id": "undo", "text": "Undo", "icon": "undo", "type": "simple", "direction": 270},
    ],
}


@dataclass
class FakeSource:
    """
    Deterministic scripted pointer: press at *start*, draw straight strokes
    through *corners*, release. Samples every *step_px* along the path.
    """
    start: tuple[float, float]
    corners: tuple[tuple[float, float], ...]
    step_px: float = 10.0
    frame_ms: int = 16

    def play(self, menu: Menu, t_ms: int = 0) -> int:
        x, y = self.start
        menu.move(x, y, t_ms=t_ms)
        menu.activate(t_ms=t_ms)
        for cx, cy in self.corners:
            n = max(1, int(math.hypot(cx - x, cy - y) / self.step_px))
            for i in range(1, n + 1):
                t_ms += self.frame_ms
                menu.move(x + (cx - x) * i / n, y + (cy - y) * i / n, t_ms=t_ms)
                menu.tick(t_ms)
            x, y = cx, cy
        t_ms += self.frame_ms
        menu.deactivate(t_ms=t_ms)
        return t_ms


def build_menu(structure: MenuItem | None = None, settings: Settings | None = None) -> Menu:
    host = Host([Element("#menu", 1280, 720)], window=Window(1280, 720))
    menu = Menu("#menu", settings)
    menu.init(host)
    menu.set_structure(structure or MenuParser().parse(DEMO_MENU))
    return menu


def run(menu: Menu | None = None) -> list[MenuEvent]:
    menu = menu or build_menu()
    events: list[MenuEvent] = []

    def on_event(ev: MenuEvent) -> None:
        events.append(ev)
        target = ev.target.item_id if ev.target else "-"
        print(f"[markmenu] {ev.type.value:<9} {ev.source.item_id} -> {target} {dict(ev.data) if ev.data else ''}")

    menu.selection.subscribe(on_event)

    print("[markmenu] Runtime loop (FAKE SOURCE).")
    t = 0
    # mark-ahead: down into Format, then left onto Size
    t = FakeSource(start=(400, 300), corners=((400, 520), (160, 520))).play(menu, t) + 500
    # straight flick right: Copy
    t = FakeSource(start=(400, 300), corners=((620, 300),)).play(menu, t) + 500
    # short flick out and back: aborted before committing, menu stays open
    FakeSource(start=(400, 300), corners=((400, 130), (400, 290))).play(menu, t)
    print(f"[markmenu] root state after abort: {menu.root_item.state.value}")
    return events


if __name__ == "__main__":
    run()
