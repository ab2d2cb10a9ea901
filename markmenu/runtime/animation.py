from __future__ import annotations

from collections.abc import Callable
from typing import Any


def linear(p: float) -> float:
    return p


def ease_out_cubic(p: float) -> float:
    return 1.0 - (1.0 - p) ** 3


class FadeAnimation:
    """
    Opacity tween driven by explicit timestamps.

    The target only needs a writable ``opacity`` attribute.
    """

    def __init__(self) -> None:
        self.target: Any = None
        self.start_value = 0.0
        self.end_value = 1.0
        self.duration_ms = 0
        self.easing: Callable[[float], float] = linear
        self._started_ms: int | None = None

    def initialize(self, target: Any, start: float = 0.0, end: float = 1.0,
                   duration_ms: int = 250, easing: Callable[[float], float] = ease_out_cubic) -> None:
        self.stop()
        self.target = target
        self.start_value = start
        self.end_value = end
        self.duration_ms = duration_ms
        self.easing = easing

    @property
    def running(self) -> bool:
        return self._started_ms is not None

    def start(self, t_ms: int) -> None:
        if self.target is None:
            return
        self._started_ms = t_ms
        self.target.opacity = self.start_value
        if self.duration_ms <= 0:
            self.tick(t_ms)

    def stop(self) -> None:
        self._started_ms = None

    def tick(self, t_ms: int) -> float | None:
        """Advance to *t_ms*; returns the new opacity, None when idle."""
        if self._started_ms is None:
            return None
        if self.duration_ms <= 0:
            p = 1.0
        else:
            p = min(1.0, max(0.0, (t_ms - self._started_ms) / self.duration_ms))
        value = self.start_value + (self.end_value - self.start_value) * self.easing(p)
        self.target.opacity = value
        if p >= 1.0:
            self._started_ms = None
        return value
