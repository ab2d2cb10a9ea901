"""
Angle helpers. Pure functions, no state.

Radians are the internal unit; degrees in [0, 360) are used wherever a
value crosses the package boundary.
"""

from __future__ import annotations

import math

from markmenu.core.errors import InvalidAngle
from markmenu.core.types import Point


def _check(value: float) -> float:
    if not math.isfinite(value):
        raise InvalidAngle(f"angle must be finite, got {value!r}")
    return float(value)


def to_deg(radians: float) -> float:
    """Radians -> degrees in [0, 360)."""
    deg = math.degrees(_check(radians)) % 360.0
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if deg >= 360.0 else deg


def to_rad(degrees: float) -> float:
    """Degrees -> radians in (-pi, pi]."""
    rad = math.radians(_check(degrees) % 360.0)
    if rad > math.pi:
        rad -= 2.0 * math.pi
    return rad


def difference(a: float, b: float) -> float:
    """
    Shortest signed rotation from a to b, both in degrees.

    Result lies in (-180, 180]; positive means clockwise on screen.
    """
    d = (_check(b) - _check(a)) % 360.0
    if d > 180.0:
        d -= 360.0
    return d


def of_vector(v: Point) -> float:
    """Direction of a vector in degrees [0, 360)."""
    return to_deg(math.atan2(_check(v.y), _check(v.x)))


def between(a: Point, b: Point) -> float:
    """Direction from a to b in degrees [0, 360)."""
    return of_vector(b - a)
