from __future__ import annotations

import math

from domain.errors import DegenerateEdgeGeometryError
from domain.models import Point


def add(point: Point, offset: Point) -> Point:
    return Point(point.x + offset.x, point.y + offset.y)


def subtract(point1: Point, point2: Point) -> Point:
    return Point(point1.x - point2.x, point1.y - point2.y)


def scale(vector: Point, factor: float) -> Point:
    return Point(vector.x * factor, vector.y * factor)


def midpoint(point1: Point, point2: Point) -> Point:
    return Point((point1.x + point2.x) / 2.0, (point1.y + point2.y) / 2.0)


def rotate_90(vector: Point) -> Point:
    return Point(vector.y, -vector.x)


def unit_vector(vector: Point) -> Point:
    norm = math.hypot(vector.x, vector.y)
    if norm == 0.0:
        msg = f"Cannot normalize zero-length vector ({vector.x}, {vector.y})"
        raise DegenerateEdgeGeometryError(msg)
    return Point(vector.x / norm, vector.y / norm)


def normalize_angle(angle_radians: float) -> float:
    # keep within (-pi; pi]
    while angle_radians <= -math.pi:
        angle_radians += 2 * math.pi
    while angle_radians > math.pi:
        angle_radians -= 2 * math.pi
    return angle_radians


def polar_to_cartesian(angle_radians: float | None, length: float | None) -> Point:
    angle = angle_radians or 0.0
    magnitude = length or 0.0
    return Point(magnitude * math.cos(angle), magnitude * math.sin(angle))


def deg2rad(angle_degrees: float) -> float:
    return angle_degrees * math.pi / 180.0


def rad2deg(angle_radians: float) -> float:
    return angle_radians * 180.0 / math.pi
