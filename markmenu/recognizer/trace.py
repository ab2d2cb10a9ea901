from __future__ import annotations

import logging
from dataclasses import dataclass

from markmenu.core import angle
from markmenu.core.config import Settings
from markmenu.core.signal import Signal
from markmenu.core.types import Point

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    """One straight stroke of a gesture."""
    start: Point
    end: Point

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    @property
    def direction(self) -> float:
        """Degrees [0, 360)."""
        return angle.between(self.start, self.end)


class Trace:
    """
    Path of the current drag plus the decision points found along it.

    A decision point is committed at the last on-course sample (the pivot)
    once the pointer has travelled more than min_distance away from it in a
    direction that differs from the current stroke by more than
    decision_angle. Off-course excursions shorter than that are jitter.
    """

    def __init__(self, settings: Settings) -> None:
        self._min_distance = settings.main.min_distance
        self._decision_angle = settings.trace.decision_angle

        self.on_decision_point: Signal[Point] = Signal()

        self._positions: list[Point] = []
        self._decision_points: list[Point] = []
        self._anchor: Point | None = None
        self._pivot: Point | None = None
        self._stroke_dir: float | None = None  # degrees

    def reset(self) -> None:
        self._positions.clear()
        self._decision_points.clear()
        self._anchor = None
        self._pivot = None
        self._stroke_dir = None

    @property
    def positions(self) -> tuple[Point, ...]:
        return tuple(self._positions)

    @property
    def decision_points(self) -> tuple[Point, ...]:
        return tuple(self._decision_points)

    @property
    def origin(self) -> Point | None:
        return self._positions[0] if self._positions else None

    @property
    def end(self) -> Point | None:
        return self._positions[-1] if self._positions else None

    def update(self, position: Point) -> Point | None:
        """Append a sample; returns the decision point it committed, if any."""
        self._positions.append(position)

        if self._anchor is None:
            self._anchor = position
            return None

        if self._stroke_dir is None:
            if self._anchor.distance_to(position) > self._min_distance:
                self._stroke_dir = angle.between(self._anchor, position)
                self._pivot = position
            return None

        assert self._pivot is not None
        travelled = self._pivot.distance_to(position)
        if travelled == 0.0:
            return None

        heading = angle.between(self._pivot, position)
        if abs(angle.difference(self._stroke_dir, heading)) <= self._decision_angle:
            self._pivot = position
            return None

        if travelled <= self._min_distance:
            return None

        point = self._pivot
        self._decision_points.append(point)
        self._anchor = point
        self._stroke_dir = heading
        self._pivot = position
        log.debug("decision point #%d at (%.1f, %.1f)", len(self._decision_points), point.x, point.y)
        self.on_decision_point.emit(point)
        return point

    def is_gesture(self) -> bool:
        """
        False for a drag without decision points that ended within
        min_distance of where it began. Once a decision point is committed
        the drag is a gesture even if it comes back to its start.
        """
        if len(self._positions) < 2:
            return False
        if self._decision_points:
            return True
        return self._positions[0].distance_to(self._positions[-1]) >= self._min_distance

    def steps(self) -> list[Step]:
        """
        Split the path into strokes at the decision points.

        A trailing stroke shorter than min_distance is dropped (the pointer
        stopped right after turning). Without decision points the whole drag
        is one start -> end stroke.
        """
        if len(self._positions) < 2:
            return []
        corners = [self._positions[0], *self._decision_points, self._positions[-1]]
        steps = [Step(a, b) for a, b in zip(corners, corners[1:]) if a != b]
        if len(steps) > 1 and steps[-1].length < self._min_distance:
            steps.pop()
        return steps
