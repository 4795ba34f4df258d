from __future__ import annotations

from typing import Optional, Tuple

from domain.models import BezierSegment, Point
from domain.services.vector2d import midpoint

HalvedBezier = Tuple[Point, Point, Point, Point, Point, Point, Point]


def halve_cubic_bezier(
    point1: Point,
    control1: Optional[Point],
    control2: Optional[Point],
    point2: Point,
) -> HalvedBezier:
    """Split at t=0.5; returns (point1, h1, h2, mid, h3, h4, point2)."""
    if control1 is None:
        if control2 is None:
            straight_mid = midpoint(point1, point2)
            return (point1, point1, straight_mid, straight_mid, straight_mid, point2, point2)
        control1 = point1
    if control2 is None:
        control2 = point2

    m1 = midpoint(point1, control1)
    m2 = midpoint(control1, control2)
    m3 = midpoint(control2, point2)

    q1 = midpoint(m1, m2)
    q2 = midpoint(m2, m3)

    mid = midpoint(q1, q2)
    return (point1, m1, q1, mid, q2, m3, point2)


def halve_segment(segment: BezierSegment) -> Tuple[BezierSegment, BezierSegment]:
    start, h1, h2, mid, h3, h4, end = halve_cubic_bezier(
        segment.start, segment.control1, segment.control2, segment.end
    )
    if segment.control1 is None and segment.control2 is None:
        return BezierSegment(start, None, None, mid), BezierSegment(mid, None, None, end)
    return BezierSegment(start, h1, h2, mid), BezierSegment(mid, h3, h4, end)


def segment_midpoint(segment: BezierSegment) -> Point:
    return halve_cubic_bezier(segment.start, segment.control1, segment.control2, segment.end)[3]


def point_on_cubic_bezier(segment: BezierSegment, t: float) -> Point:
    control1 = segment.control1 if segment.control1 is not None else segment.start
    control2 = segment.control2 if segment.control2 is not None else segment.end
    inv = 1.0 - t
    w0 = inv * inv * inv
    w1 = 3.0 * inv * inv * t
    w2 = 3.0 * inv * t * t
    w3 = t * t * t
    return Point(
        w0 * segment.start.x + w1 * control1.x + w2 * control2.x + w3 * segment.end.x,
        w0 * segment.start.y + w1 * control1.y + w2 * control2.y + w3 * segment.end.y,
    )
