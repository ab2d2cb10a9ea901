from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from markmenu.core.config import MainSettings
from markmenu.core.types import (
    ActivateInput, DeactivateInput, DragDefinition, DragState,
    ClickState, Point, ZERO_POINT,
    LEFT_BUTTON, PRIMARY_BUTTONS,
)

log = logging.getLogger(__name__)

Output = Union[DragDefinition, ClickState]


@dataclass
class PendingClick:
    """Cancellable timeout token for one activation's click race."""
    started_ms: int
    deadline_ms: int

    def expired(self, t_ms: int) -> bool:
        return t_ms >= self.deadline_ms


class InputInterpreter:
    """
    Deterministic input interpreter.
    Converts activation / deactivation / position inputs -> drag samples and clicks.

    Drag: a primary activation starts it; every position until the next
    deactivation is a DRAGGING sample. Once the pointer is farther than
    min_distance from the first sample the drag is in marking mode, and its
    deactivation adds one END sample.

    Click: every activation starts a race between its deactivation and
    click_timeout_ms. Deactivation first -> LEFT/RIGHT click by button.
    Timeout first, leave, or entering marking mode -> no click.
    """

    def __init__(self, main: MainSettings) -> None:
        self._min_distance = main.min_distance
        self._timeout_ms = main.click_timeout_ms

        self.position: Point = ZERO_POINT
        self.dragging: bool = False
        self.marking: bool = False
        self._drag_origin: Point | None = None
        self._pending: PendingClick | None = None

    @property
    def pending_click(self) -> PendingClick | None:
        return self._pending

    def activate(self, ev: ActivateInput) -> list[Output]:
        if ev.position is not None:
            self.position = ev.position
        if self._pending is not None:
            log.debug("activation at %d replaces pending click from %d", ev.t_ms, self._pending.started_ms)
        self._pending = PendingClick(started_ms=ev.t_ms, deadline_ms=ev.t_ms + self._timeout_ms)

        if ev.buttons == PRIMARY_BUTTONS:
            self.dragging = True
            self.marking = False
            self._drag_origin = None
        return []

    def move(self, position: Point, t_ms: int) -> list[Output]:
        self.position = position
        self.tick(t_ms)
        if not self.dragging:
            return []

        if self._drag_origin is None:
            self._drag_origin = position
        elif not self.marking and self._drag_origin.distance_to(position) > self._min_distance:
            self.marking = True
            if self._pending is not None:
                # a moving press is a drag, never a click
                log.debug("marking mode at %d, click race cancelled", t_ms)
                self._pending = None

        return [DragDefinition(position=position, state=DragState.DRAGGING)]

    def deactivate(self, ev: DeactivateInput) -> list[Output]:
        if ev.position is not None:
            self.position = ev.position
        out: list[Output] = []

        if self.dragging:
            self.dragging = False
            self._drag_origin = None
            if self.marking:
                self.marking = False
                out.append(DragDefinition(position=self.position, state=DragState.END))

        pending, self._pending = self._pending, None
        if pending is None or ev.is_leave:
            return out
        if pending.expired(ev.t_ms):
            log.debug("release at %d after click window, treated as hold", ev.t_ms)
            return out
        out.append(ClickState.LEFT_CLICK if ev.button == LEFT_BUTTON else ClickState.RIGHT_CLICK)
        return out

    def tick(self, t_ms: int) -> None:
        """Let the pending click timeout fire if its deadline has passed."""
        if self._pending is not None and self._pending.expired(t_ms):
            log.debug("click window from %d expired at %d", self._pending.started_ms, t_ms)
            self._pending = None
