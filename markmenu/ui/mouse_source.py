from __future__ import annotations

import queue
import time
from dataclasses import dataclass
from typing import Optional

from pynput import mouse

from markmenu.core.types import Point, LEFT_BUTTON, PRIMARY_BUTTONS
from markmenu.interpreter.menu import Menu

# pynput button -> (buttons mask on press, button index on release)
_BUTTONS = {
    mouse.Button.left: (PRIMARY_BUTTONS, LEFT_BUTTON),
    mouse.Button.right: (2, 2),
    mouse.Button.middle: (4, 1),
}


@dataclass(frozen=True)
class PointerInput:
    kind: str                 # "move" | "press" | "release"
    t_ms: int
    x: float
    y: float
    buttons: int = 0
    button: int = LEFT_BUTTON


class MouseSource:
    """
    Desktop pointer source.

    pynput calls back on its own thread; callbacks only enqueue. drain()
    replays the queued inputs into a Menu on the caller's thread, so the
    menu itself stays single-threaded.
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[PointerInput] = queue.Queue()
        self._listener: Optional[mouse.Listener] = None

    def start(self) -> None:
        self._listener = mouse.Listener(on_move=self._on_move, on_click=self._on_click)
        self._listener.start()

    def stop(self) -> None:
        if self._listener is not None:
            self._listener.stop()
            self._listener = None

    def _now(self) -> int:
        return int(time.monotonic() * 1000)

    def _on_move(self, x, y):
        self._queue.put(PointerInput("move", self._now(), float(x), float(y)))

    def _on_click(self, x, y, button, pressed):
        if button not in _BUTTONS:
            return
        buttons, index = _BUTTONS[button]
        kind = "press" if pressed else "release"
        self._queue.put(PointerInput(kind, self._now(), float(x), float(y), buttons=buttons, button=index))

    def put(self, item: PointerInput) -> None:
        self._queue.put(item)

    def drain(self, menu: Menu, limit: int = 256) -> int:
        """Apply up to *limit* queued inputs to *menu*; returns how many were applied."""
        n = 0
        while n < limit:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                break
            pos = Point(item.x, item.y)
            if item.kind == "move":
                menu.move(item.x, item.y, t_ms=item.t_ms)
            elif item.kind == "press":
                menu.activate(buttons=item.buttons, position=pos, t_ms=item.t_ms)
            else:
                menu.deactivate(button=item.button, position=pos, t_ms=item.t_ms)
            n += 1
        return n
