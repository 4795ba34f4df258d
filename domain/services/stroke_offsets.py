from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from domain.models import BezierSegment, Point, WeathermapStyle
from domain.services.vector2d import add, rotate_90, scale, subtract, unit_vector


@dataclass(frozen=True)
class OffsetStroke:
    stroke_width: float
    segment: BezierSegment


def stroke_width_pattern(
    style: Optional[WeathermapStyle], default_stroke_width: float
) -> List[float]:
    widths = style.stroke_widths() if style is not None else []
    if not widths:
        widths = [default_stroke_width]
    if len(widths) % 2 != 1:
        # like stroke-dasharray, an even pattern is repeated once
        widths = widths + widths
    return widths


def translate_segment(segment: BezierSegment, offset: Point) -> BezierSegment:
    return BezierSegment(
        start=add(segment.start, offset),
        control1=None if segment.control1 is None else add(segment.control1, offset),
        control2=None if segment.control2 is None else add(segment.control2, offset),
        end=add(segment.end, offset),
    )


class StrokeOffsetPlanner:
    def plan(
        self,
        segment: BezierSegment,
        default_stroke_width: float,
        style: Optional[WeathermapStyle] = None,
    ) -> List[OffsetStroke]:
        return self.plan_pattern(segment, stroke_width_pattern(style, default_stroke_width))

    def plan_pattern(self, segment: BezierSegment, widths: Sequence[float]) -> List[OffsetStroke]:
        offset_axis = Point(0.0, 0.0)
        if len(widths) > 1:
            direction = subtract(segment.start, segment.end)
            offset_axis = unit_vector(rotate_90(direction))

        total_width = sum(widths[0::2])
        current_offset = -total_width / 2.0
        strokes: List[OffsetStroke] = []
        for index, width in enumerate(widths):
            if index % 2 == 1:
                current_offset += width
                continue
            centerline = current_offset + width / 2.0
            if len(widths) > 1:
                shifted = translate_segment(segment, scale(offset_axis, centerline))
            else:
                shifted = segment
            strokes.append(OffsetStroke(stroke_width=width, segment=shifted))
            current_offset += width
        return strokes
