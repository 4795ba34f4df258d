from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

from domain.models import EMERGENCY_COLOR, ColorChannel, Gradient, GradientStop

GRADIENT_LINEAR = "linear"
GRADIENT_STEPS = "steps"


def color_for_value(gradient: Gradient, channel: ColorChannel, value: float) -> str:
    if gradient.type == GRADIENT_LINEAR:
        return linear_color_for_value(gradient.stops, channel, value)
    if gradient.type == GRADIENT_STEPS:
        return step_color_for_value(gradient.stops, channel, value)
    return EMERGENCY_COLOR


def linear_color_for_value(
    stops: Sequence[GradientStop], channel: ColorChannel, value: float
) -> str:
    if not stops:
        return EMERGENCY_COLOR
    boundary = _boundary_color(stops, channel, value)
    if boundary is not None:
        return boundary

    bracket = _find_bracket(stops, value)
    if bracket is None:
        return EMERGENCY_COLOR
    lower, upper = bracket

    r_from, g_from, b_from = parse_hex_color(lower.color(channel))
    r_to, g_to, b_to = parse_hex_color(upper.color(channel))
    r = lerp(value, lower.position, upper.position, r_from, r_to)
    g = lerp(value, lower.position, upper.position, g_from, g_to)
    b = lerp(value, lower.position, upper.position, b_from, b_to)
    return f"rgb({math.floor(r)}, {math.floor(g)}, {math.floor(b)})"


def step_color_for_value(
    stops: Sequence[GradientStop], channel: ColorChannel, value: float
) -> str:
    if not stops:
        return EMERGENCY_COLOR
    boundary = _boundary_color(stops, channel, value)
    if boundary is not None:
        return boundary

    bracket = _find_bracket(stops, value)
    if bracket is None:
        return EMERGENCY_COLOR
    return bracket[0].color(channel)


def parse_hex_color(color: str) -> Tuple[int, int, int]:
    # expects "#RRGGBB"
    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)


def lerp(
    value: float, source_min: float, source_max: float, target_min: float, target_max: float
) -> float:
    if target_min == target_max:
        return target_min
    value = min(max(value, source_min), source_max)
    fraction = (value - source_min) / (source_max - source_min)
    return target_min + fraction * (target_max - target_min)


def _boundary_color(
    stops: Sequence[GradientStop], channel: ColorChannel, value: float
) -> Optional[str]:
    if value < stops[0].position:
        return stops[0].color(channel)
    if value >= stops[-1].position:
        return stops[-1].color(channel)
    return None


def _find_bracket(
    stops: Sequence[GradientStop], value: float
) -> Optional[Tuple[GradientStop, GradientStop]]:
    for lower, upper in zip(stops, stops[1:]):
        if lower.position <= value < upper.position:
            return lower, upper
    return None
