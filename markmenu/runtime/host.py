"""
Headless stand-in for the page a menu is mounted into: a set of elements
addressable by selector plus an optional window that reports resizes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from markmenu.core.signal import Signal


@dataclass
class Element:
    selector: str
    width: int = 0
    height: int = 0


class Window:
    def __init__(self, width: int, height: int) -> None:
        self.size: tuple[int, int] = (width, height)
        self._resized: Signal[tuple[int, int]] = Signal()

    def on_resize(self, callback: Callable[[tuple[int, int]], None]) -> Callable[[], None]:
        return self._resized.subscribe(callback)

    def resize(self, width: int, height: int) -> None:
        self.size = (width, height)
        self._resized.emit(self.size)


class Host:
    def __init__(self, elements: Iterable[Element] = (), window: Window | None = None) -> None:
        self._elements = {e.selector: e for e in elements}
        self.window = window

    def add(self, element: Element) -> Element:
        self._elements[element.selector] = element
        return element

    def query(self, selector: str) -> Element | None:
        return self._elements.get(selector)
