from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional, Union

from markmenu.core import angle
from markmenu.core.config import Settings
from markmenu.core.errors import InvalidSelector, NotInitialized
from markmenu.core.one_euro import PointFilter
from markmenu.core.signal import Signal
from markmenu.core.types import (
    ActivateInput, DeactivateInput, DragDefinition, DragState,
    ClickState, ItemState, Point,
    LEFT_BUTTON, PRIMARY_BUTTONS,
)
from markmenu.interpreter.state_machine import InputInterpreter, Output
from markmenu.menu.item import MenuItem
from markmenu.menu.menu_event import MenuEvent
from markmenu.recognizer.gesture import resolve_trace
from markmenu.recognizer.trace import Trace
from markmenu.runtime.animation import FadeAnimation, ease_out_cubic
from markmenu.runtime.host import Element, Host
from markmenu.tools.trace_view import TraceView

log = logging.getLogger(__name__)


class Menu:
    """
    Marking menu: owns the input streams, the trace and the root item.

    Inputs arrive as activate / deactivate / move / leave calls and are
    processed to completion (including every notification) before the call
    returns. Timestamps are milliseconds; pass them explicitly for
    deterministic replay, otherwise a monotonic clock is used.
    """

    def __init__(self, root_selector: str,
                 settings: Union[Settings, Mapping[str, Any], None] = None) -> None:
        self._root_selector = root_selector
        if isinstance(settings, Settings):
            self._settings = settings
        else:
            self._settings = Settings.from_overrides(settings)

        self._fade = FadeAnimation()
        self._trace = Trace(self._settings)
        self._interp = InputInterpreter(self._settings.main)
        self._filter = PointFilter(self._settings.trace) if self._settings.main.smoothing else None

        self._host: Optional[Host] = None
        self._element: Optional[Element] = None
        self._click: Optional[Signal[ClickState]] = None
        self._dragging: Optional[Signal[DragDefinition]] = None
        self._root_item: Optional[MenuItem] = None
        self._trace_view: Optional[TraceView] = None

        self.view_size: Optional[tuple[int, int]] = None
        self._now_ms = 0
        self._open_on_press = False

    # ---------------------- accessors ----------------------

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def input_position(self) -> Point:
        return self._interp.position

    @property
    def marking_mode(self) -> bool:
        return self._interp.marking

    @property
    def trace(self) -> Trace:
        return self._trace

    @property
    def root_item(self) -> Optional[MenuItem]:
        return self._root_item

    @property
    def click(self) -> Signal[ClickState]:
        if self._click is None:
            raise NotInitialized("Menu not initialized")
        return self._click

    @property
    def dragging(self) -> Signal[DragDefinition]:
        if self._dragging is None:
            raise NotInitialized("Menu not initialized")
        return self._dragging

    @property
    def selection(self) -> Signal[MenuEvent]:
        if self._root_item is None:
            raise NotInitialized("Menu not initialized")
        return self._root_item.selection

    @property
    def canvas(self) -> Element:
        if self._element is None:
            raise NotInitialized("Canvas not initialized in menu")
        return self._element

    # ---------------------- setup ----------------------

    def init(self, host: Host) -> None:
        """
        Mount the menu on the element matching the root selector.

        Raises InvalidSelector if nothing matches, NotInitialized if
        auto resize is enabled but the host has no window.
        """
        element = host.query(self._root_selector)
        if element is None:
            raise InvalidSelector(f"No element matching '{self._root_selector}' found.")
        if self._settings.main.enable_auto_resize and host.window is None:
            raise NotInitialized("auto resize requested but the host has no window")

        self._host = host
        self._element = element
        self._click = Signal()
        self._dragging = Signal()
        # internal handlers first: external subscribers see the updated state
        self._dragging.subscribe(self._on_drag)
        self._click.subscribe(self._on_click)

        self.resize()
        if self._settings.main.enable_auto_resize:
            host.window.on_resize(self.resize)
        log.debug("menu mounted on %s", self._root_selector)

    def set_structure(self, structure: MenuItem) -> None:
        self._root_item = structure
        structure.menu = self
        structure.settings = self._settings
        structure.init()
        structure.visible = False
        self._fade.initialize(
            target=structure,
            start=0.0,
            end=1.0,
            duration_ms=self._settings.main.animation_duration,
            easing=ease_out_cubic,
        )

    def resize(self, size: Optional[tuple[int, int]] = None) -> None:
        """Match the view to the window size; only touches rendering state."""
        if self._host is None or self._host.window is None:
            return
        self.view_size = size if size is not None else self._host.window.size

    def draw_trace(self) -> TraceView:
        """Start collecting drag samples and decision points for debugging."""
        dragging = self.dragging
        if self._trace_view is None:
            self._trace_view = TraceView()
            self._trace.on_decision_point.subscribe(self._trace_view.add_decision_point)
            dragging.subscribe(self._trace_view.add_sample)
        return self._trace_view

    # ---------------------- display ----------------------

    def display(self) -> None:
        """
        Open the menu at the last input position.

        No-op while the root is already ACTIVE so an ongoing interaction is
        neither re-faded nor moved.
        """
        if self._root_item is None:
            raise NotInitialized("Menu not initialized.")
        root = self._root_item
        if root.state not in (ItemState.HIDDEN, ItemState.NONE):
            return

        self._trace.reset()
        if self._trace_view is not None:
            self._trace_view.clear()
        self._fade.stop()

        root.display()
        self._fade.start(self._now_ms)
        root.position = self.input_position
        log.debug("menu displayed at (%.1f, %.1f)", root.position.x, root.position.y)

    # ---------------------- inputs ----------------------

    def activate(self, buttons: int = PRIMARY_BUTTONS, position: Optional[Point] = None,
                 t_ms: Optional[int] = None) -> None:
        self._require_input()
        t = self._clock(t_ms)
        root = self._root_item
        self._open_on_press = root is not None and root.state == ItemState.ACTIVE
        if buttons == PRIMARY_BUTTONS:
            # a new drag starts a new trace
            self._trace.reset()
            if self._filter is not None:
                self._filter.reset()
        self._dispatch(self._interp.activate(ActivateInput(t_ms=t, buttons=buttons, position=position)))

    def deactivate(self, button: Optional[int] = LEFT_BUTTON, position: Optional[Point] = None,
                   t_ms: Optional[int] = None) -> None:
        self._require_input()
        t = self._clock(t_ms)
        self._dispatch(self._interp.deactivate(DeactivateInput(t_ms=t, button=button, position=position)))

    def leave(self, t_ms: Optional[int] = None) -> None:
        """Pointer left the surface: ends a drag like a release, never clicks."""
        self.deactivate(button=None, t_ms=t_ms)

    def move(self, x: float, y: float, t_ms: Optional[int] = None) -> None:
        self._require_input()
        t = self._clock(t_ms)
        position = Point(x, y)
        if self._filter is not None and self._interp.dragging:
            position = self._filter.apply(position, t)
        self._dispatch(self._interp.move(position, t))

    def tick(self, t_ms: Optional[int] = None) -> None:
        """Advance timers: the click window and the fade animation."""
        t = self._clock(t_ms)
        self._interp.tick(t)
        self._fade.tick(t)

    # ---------------------- internal ----------------------

    def _clock(self, t_ms: Optional[int]) -> int:
        self._now_ms = int(time.monotonic() * 1000) if t_ms is None else int(t_ms)
        return self._now_ms

    def _require_input(self) -> None:
        if self._click is None or self._dragging is None:
            raise NotInitialized("Menu not initialized")

    def _dispatch(self, outputs: list[Output]) -> None:
        for out in outputs:
            if isinstance(out, DragDefinition):
                self.dragging.emit(out)
            else:
                self.click.emit(out)

    def _on_drag(self, drag: DragDefinition) -> None:
        self.display()
        self._trace.update(drag.position)
        if drag.state == DragState.END:
            self._finish_gesture()

    def _finish_gesture(self) -> None:
        active = self._root_item.active_item() if self._root_item is not None else None
        if active is None:
            return
        events = resolve_trace(active, self._trace, self._settings)
        if events:
            log.debug("gesture resolved: %s", ", ".join(f"{e.type.value}:{e.target.item_id}" for e in events))
        else:
            log.debug("gesture from %s not committed", active.id)

    def _on_click(self, click: ClickState) -> None:
        if click == ClickState.LEFT_CLICK:
            self.display()
            if self._open_on_press:
                self._resolve_pointer()
        elif self._open_on_press and self._root_item is not None:
            active = self._root_item.active_item()
            if active is not None:
                active.cancel()

    def _resolve_pointer(self) -> None:
        active = self._root_item.active_item() if self._root_item is not None else None
        if active is None:
            return
        offset = self.input_position - active.position
        distance = offset.length
        main = self._settings.main
        if main.enable_max_click_radius and distance > main.max_click_radius:
            log.debug("click %.1f from %s rejected (max %.1f)", distance, active.id, main.max_click_radius)
            return
        if distance <= self._settings.item.center_radius:
            active.cancel()
            return
        active.resolve_click(angle.of_vector(offset), position=self.input_position)
