from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from domain.models import BezierSegment, Point, WeathermapEdge, WeathermapNode
from domain.services.bezier import halve_segment
from domain.services.vector2d import deg2rad, normalize_angle, polar_to_cartesian

ARROW_BOTH = "↔"
ARROW_FORWARD = "→"


@dataclass(frozen=True)
class PlannedEdgeSegment:
    segment: BezierSegment
    metric_name: Optional[str]
    title: str


def bend_control_points(
    center1: Point,
    center2: Point,
    bend_direction: Optional[float],
    bend_magnitude: Optional[float],
) -> Tuple[Optional[Point], Optional[Point]]:
    if not bend_direction or not bend_magnitude:
        return None, None

    # screen coordinates: the Y axis points down
    angle_1_to_2 = math.atan2(center1.y - center2.y, center2.x - center1.x)
    angle_2_to_1 = math.atan2(center2.y - center1.y, center1.x - center2.x)

    bend_angle_1 = normalize_angle(angle_1_to_2 + deg2rad(bend_direction))
    bend_angle_2 = normalize_angle(angle_2_to_1 - deg2rad(bend_direction))

    offset1 = polar_to_cartesian(bend_angle_1, bend_magnitude)
    offset2 = polar_to_cartesian(bend_angle_2, bend_magnitude)

    control1 = Point(center1.x + offset1.x, center1.y - offset1.y)
    control2 = Point(center2.x + offset2.x, center2.y - offset2.y)
    return control1, control2


class EdgeGeometryPlanner:
    def plan(
        self, edge: WeathermapEdge, node1: WeathermapNode, node2: WeathermapNode
    ) -> List[PlannedEdgeSegment]:
        start = node1.center()
        end = node2.center()
        control1, control2 = bend_control_points(
            start, end, edge.bend_direction, edge.bend_magnitude
        )
        full_segment = BezierSegment(start, control1, control2, end)

        if edge.metric2_name:
            first_half, second_half = halve_segment(full_segment)
            return [
                PlannedEdgeSegment(
                    segment=first_half,
                    metric_name=edge.metric_name,
                    title=f"{edge.node1} {ARROW_FORWARD} {edge.node2}",
                ),
                PlannedEdgeSegment(
                    segment=second_half,
                    metric_name=edge.metric2_name,
                    title=f"{edge.node2} {ARROW_FORWARD} {edge.node1}",
                ),
            ]
        return [
            PlannedEdgeSegment(
                segment=full_segment,
                metric_name=edge.metric_name,
                title=f"{edge.node1} {ARROW_BOTH} {edge.node2}",
            )
        ]
