"""
Pointer smoothing for drags (enabled with main.smoothing).

One Euro filter (Casiez et al. 2012): an exponential low pass whose cutoff
rises with the smoothed speed, so slow hand tremor is damped while a fast
flick keeps up with the pointer.
"""

from __future__ import annotations

import math
from typing import Optional

from markmenu.core.config import TraceSettings
from markmenu.core.types import Point


def smoothing_factor(cutoff_hz: float, dt_s: float) -> float:
    r = 2.0 * math.pi * cutoff_hz * max(dt_s, 1e-6)
    return r / (r + 1.0)


class LowPass:
    """Exponential smoothing; the first sample is taken as is."""

    def __init__(self) -> None:
        self.value: Optional[float] = None

    def reset(self) -> None:
        self.value = None

    def __call__(self, x: float, a: float) -> float:
        self.value = x if self.value is None else self.value + a * (x - self.value)
        return self.value


class OneEuro:
    """One channel. Timestamps are seconds."""

    def __init__(self, min_cutoff: float = 2.0, beta: float = 0.06, d_cutoff: float = 1.0) -> None:
        self.min_cutoff = float(min_cutoff)
        self.beta = float(beta)
        self.d_cutoff = float(d_cutoff)
        self._pos = LowPass()
        self._speed = LowPass()
        self._t: Optional[float] = None

    def reset(self) -> None:
        self._pos.reset()
        self._speed.reset()
        self._t = None

    def apply(self, x: float, t: float) -> float:
        prev_t, self._t = self._t, t
        if prev_t is None or self._pos.value is None:
            self._speed.reset()
            return self._pos(x, 1.0)

        dt = max(1e-4, t - prev_t)
        speed = self._speed((x - self._pos.value) / dt, smoothing_factor(self.d_cutoff, dt))
        cutoff = self.min_cutoff + self.beta * abs(speed)
        return self._pos(x, smoothing_factor(cutoff, dt))


class PointFilter:
    """Smooths x and y independently with the TraceSettings cutoffs."""

    def __init__(self, params: TraceSettings) -> None:
        self._channels = tuple(
            OneEuro(params.min_cutoff_hz, params.beta, params.d_cutoff_hz) for _ in range(2)
        )

    def reset(self) -> None:
        for channel in self._channels:
            channel.reset()

    def apply(self, p: Point, t_ms: int) -> Point:
        t = t_ms / 1000.0
        fx, fy = self._channels
        return Point(fx.apply(p.x, t), fy.apply(p.y, t))
