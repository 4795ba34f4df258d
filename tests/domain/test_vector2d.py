from __future__ import annotations

import math

import pytest

from domain.errors import DegenerateEdgeGeometryError
from domain.models import Point
from domain.services.vector2d import (
    deg2rad,
    midpoint,
    normalize_angle,
    polar_to_cartesian,
    rad2deg,
    rotate_90,
    unit_vector,
)


def test_midpoint_averages_coordinates() -> None:
    assert midpoint(Point(0, 0), Point(10, -4)) == Point(5, -2)


def test_unit_vector_has_length_one() -> None:
    unit = unit_vector(Point(3, 4))
    assert unit.x == pytest.approx(0.6)
    assert unit.y == pytest.approx(0.8)


def test_unit_vector_of_zero_vector_raises() -> None:
    with pytest.raises(DegenerateEdgeGeometryError):
        unit_vector(Point(0, 0))


@pytest.mark.parametrize(
    ("angle", "expected"),
    [
        (0.0, 0.0),
        (math.pi, math.pi),
        (-math.pi, math.pi),
        (3 * math.pi / 2, -math.pi / 2),
        (-5 * math.pi / 2, -math.pi / 2),
    ],
)
def test_normalize_angle_stays_in_half_open_range(angle: float, expected: float) -> None:
    normalized = normalize_angle(angle)
    assert -math.pi < normalized <= math.pi
    assert normalized == pytest.approx(expected)


def test_polar_to_cartesian_treats_missing_values_as_zero() -> None:
    assert polar_to_cartesian(None, None) == Point(0.0, 0.0)
    converted = polar_to_cartesian(math.pi / 2, 2.0)
    assert converted.x == pytest.approx(0.0, abs=1e-12)
    assert converted.y == pytest.approx(2.0)


def test_degree_radian_conversion() -> None:
    assert deg2rad(180) == pytest.approx(math.pi)
    assert rad2deg(math.pi / 2) == pytest.approx(90)


def test_rotate_90_is_perpendicular() -> None:
    vector = Point(2, 5)
    rotated = rotate_90(vector)
    assert vector.x * rotated.x + vector.y * rotated.y == 0
