import math

import pytest

from markmenu.core import angle
from markmenu.core.errors import InvalidAngle
from markmenu.core.types import Point


def test_deg_rad_roundtrip():
    d = 0.0
    while d < 360.0:
        back = angle.to_deg(angle.to_rad(d))
        assert abs(angle.difference(d, back)) < 1e-9
        d += 7.5


def test_to_deg_normalizes():
    assert angle.to_deg(-math.pi / 2) == pytest.approx(270.0)
    assert abs(angle.difference(0.0, angle.to_deg(2 * math.pi))) < 1e-9
    assert 0.0 <= angle.to_deg(-1e-17) < 360.0


def test_to_rad_range():
    assert angle.to_rad(180.0) == pytest.approx(math.pi)
    assert angle.to_rad(270.0) == pytest.approx(-math.pi / 2)
    assert angle.to_rad(-90.0) == pytest.approx(-math.pi / 2)


def test_difference_is_shortest_and_antisymmetric():
    pairs = [(0, 10), (350, 10), (10, 350), (90, 271), (45.5, 200.25), (0, 179.9)]
    for a, b in pairs:
        d = angle.difference(a, b)
        assert abs(d) <= 180.0
        assert d == pytest.approx(-angle.difference(b, a))
    assert angle.difference(350, 10) == pytest.approx(20.0)
    assert angle.difference(10, 350) == pytest.approx(-20.0)


def test_difference_half_turn():
    assert angle.difference(0, 180) == 180.0
    assert abs(angle.difference(180, 0)) == 180.0


def test_vector_directions_screen_coordinates():
    assert angle.of_vector(Point(1, 0)) == pytest.approx(0.0)
    assert angle.of_vector(Point(0, 1)) == pytest.approx(90.0)   # down
    assert angle.of_vector(Point(-1, 0)) == pytest.approx(180.0)
    assert angle.between(Point(5, 5), Point(5, 0)) == pytest.approx(270.0)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_rejected(bad):
    with pytest.raises(InvalidAngle):
        angle.to_deg(bad)
    with pytest.raises(InvalidAngle):
        angle.to_rad(bad)
    with pytest.raises(InvalidAngle):
        angle.difference(0.0, bad)
