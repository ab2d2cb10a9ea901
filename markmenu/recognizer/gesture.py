"""
Mark-ahead resolution: walk the item tree one level per gesture stroke.

Rules:
- nothing is committed when the first stroke is shorter than
  min_trace_distance (the user may still abort by returning to the start)
- each stroke picks the nearest child of the current level
- an intermediate child opens (DESCEND) and becomes the current level
- a leaf on any stroke but the last is only hovered; the final stroke's
  leaf is selected
- a stroke with no child inside the angle tolerance ends the walk, leaving
  whatever sub-menu was reached open for visual selection
"""

from __future__ import annotations

import logging
from typing import Sequence

from markmenu.core.config import Settings
from markmenu.core.types import MenuItemEventType
from markmenu.menu.item import MenuItem
from markmenu.menu.menu_event import MenuEvent
from markmenu.recognizer.trace import Step, Trace

log = logging.getLogger(__name__)


def resolve_steps(item: MenuItem, steps: Sequence[Step], settings: Settings) -> list[MenuEvent]:
    if not steps:
        return []
    if steps[0].length < settings.main.min_trace_distance:
        log.debug("gesture not committed: first stroke %.1f < %.1f",
                  steps[0].length, settings.main.min_trace_distance)
        return []

    events: list[MenuEvent] = []
    current = item
    last = len(steps) - 1
    for i, step in enumerate(steps):
        child = current.nearest_child(step.direction)
        if child is None:
            log.debug("stroke %d (%.1f deg) matches nothing below %s", i, step.direction, current.id)
            break
        travel = max(0.0, step.length - settings.main.min_trace_distance)
        event = current.choose(child, position=step.end, final=(i == last), travel=travel)
        events.append(event)
        if event.type == MenuItemEventType.SELECTION:
            break
        if event.type == MenuItemEventType.DESCEND:
            current = child
    return events


def resolve_trace(item: MenuItem, trace: Trace, settings: Settings) -> list[MenuEvent]:
    """Resolve a finished drag from *item*; a drag that ends near its start resolves to nothing."""
    if not trace.is_gesture():
        return []
    return resolve_steps(item, trace.steps(), settings)
