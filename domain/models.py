from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Literal, Mapping, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

EMERGENCY_COLOR = "pink"
NODE_STROKE_COLOR = "gray"
NODE_STROKE_WIDTH = "1px"
UNMEASURED_NODE_FILL = "silver"
NO_DATA_FILL = "black"
NO_DATA_TEXT_FILL = "white"
NO_DATA_STROKE = "black"

_STROKE_WIDTH_SEPARATOR = re.compile(r"[ ,]+")

CurrentValueMap = Mapping[str, float]
ValueName = Literal["max", "min", "avg", "current", "total"]
LegendType = Literal["", "hn", "ha", "hb", "vn", "vl", "vr"]


class ColorChannel(Enum):
    STROKE = "strokeColor"
    FILL = "fillColor"


class ConfigModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


def parse_stroke_width_array(raw: str) -> List[float]:
    tokens = [token for token in _STROKE_WIDTH_SEPARATOR.split(raw.strip()) if token]
    widths: List[float] = []
    for token in tokens:
        try:
            width = float(token)
        except ValueError as exc:
            msg = f"Invalid stroke width {token!r} in {raw!r}"
            raise ValueError(msg) from exc
        if not math.isfinite(width) or width < 0:
            msg = f"Stroke width must be a finite non-negative number, got {token!r}"
            raise ValueError(msg)
        widths.append(width)
    return widths


class GradientStop(ConfigModel):
    position: float
    stroke_color: str
    fill_color: str
    show_legend_label: bool = True

    def color(self, channel: ColorChannel) -> str:
        if channel is ColorChannel.STROKE:
            return self.stroke_color
        return self.fill_color


class Gradient(ConfigModel):
    type: str = "linear"
    stops: List[GradientStop] = Field(default_factory=list)

    def with_sorted_stops(self) -> Gradient:
        ordered = sorted(self.stops, key=lambda stop: stop.position)
        return self.model_copy(update={"stops": ordered})


class WeathermapNode(ConfigModel):
    label: str
    x: float
    y: float
    width: float
    height: float
    metric_name: Optional[str] = None
    link_params: Optional[str] = None

    def center(self) -> Point:
        return Point(self.x + self.width / 2.0, self.y + self.height / 2.0)


class WeathermapEdge(ConfigModel):
    node1: str
    node2: str
    bend_direction: Optional[float] = None
    bend_magnitude: Optional[float] = None
    metric_name: Optional[str] = None
    metric2_name: Optional[str] = None
    style_name: Optional[str] = None
    link_params: Optional[str] = None


class WeathermapLabel(ConfigModel):
    label: str
    x: float
    y: float


class WeathermapStyle(ConfigModel):
    name: str
    stroke_width_array: Optional[str] = None
    dash_array: Optional[str] = None

    @field_validator("stroke_width_array", mode="after")
    @classmethod
    def ensure_numeric_widths(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        if not parse_stroke_width_array(value):
            msg = f"strokeWidthArray {value!r} contains no widths"
            raise ValueError(msg)
        return value

    def stroke_widths(self) -> List[float]:
        if not self.stroke_width_array:
            return []
        return parse_stroke_width_array(self.stroke_width_array)


class LegendSettings(ConfigModel):
    type: LegendType = ""
    x: float = 0.0
    y: float = 0.0
    length: float = 100.0
    width: float = 5.0


class ObjectLinkSettings(ConfigModel):
    type: Literal["none", "dashboard", "absolute"] = "none"
    dashboard: Optional[str] = None
    dash_uri: Optional[str] = None
    absolute_uri: Optional[str] = None


class LinkSettings(ConfigModel):
    node: ObjectLinkSettings = ObjectLinkSettings()
    edge: ObjectLinkSettings = ObjectLinkSettings()


class CanvasSize(ConfigModel):
    width: float = 800.0
    height: float = 600.0


class TextOffsets(ConfigModel):
    left: float = 5.0
    bottom: float = 5.0


class WeathermapConfig(ConfigModel):
    id: int = 0
    weathermap_nodes: List[WeathermapNode] = Field(default_factory=list)
    weathermap_edges: List[WeathermapEdge] = Field(default_factory=list)
    weathermap_labels: List[WeathermapLabel] = Field(default_factory=list)
    weathermap_styles: List[WeathermapStyle] = Field(default_factory=list)
    canvas_size: CanvasSize = CanvasSize()
    text_offsets: TextOffsets = TextOffsets()
    show_numbers: bool = False
    value_name: ValueName = "avg"
    stroke_width: float = 1.0
    gradient: Gradient = Gradient()
    legend: LegendSettings = LegendSettings()
    link: LinkSettings = LinkSettings()
    no_value_dash_array: str = "1 5"
    unmeasured_dash_array: str = "4 2"

    @field_validator("weathermap_nodes", mode="after")
    @classmethod
    def ensure_unique_node_labels(cls, nodes: List[WeathermapNode]) -> List[WeathermapNode]:
        seen: Set[str] = set()
        for node in nodes:
            if node.label in seen:
                msg = f"Duplicate node label found: {node.label}"
                raise ValueError(msg)
            seen.add(node.label)
        return nodes

    @field_validator("weathermap_styles", mode="after")
    @classmethod
    def ensure_unique_style_names(cls, styles: List[WeathermapStyle]) -> List[WeathermapStyle]:
        seen: Set[str] = set()
        for style in styles:
            if style.name in seen:
                msg = f"Duplicate style name found: {style.name}"
                raise ValueError(msg)
            seen.add(style.name)
        return styles

    def node_lookup(self) -> Dict[str, WeathermapNode]:
        return {node.label: node for node in self.weathermap_nodes}

    def style_lookup(self) -> Dict[str, WeathermapStyle]:
        return {style.name: style for style in self.weathermap_styles}


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class BezierSegment:
    start: Point
    control1: Optional[Point]
    control2: Optional[Point]
    end: Point

    @property
    def is_straight(self) -> bool:
        return self.control1 is None and self.control2 is None

    def to_path_data(self) -> str:
        start = format_point(self.start)
        end = format_point(self.end)
        if self.is_straight:
            return f"M {start} L {end}"
        control1 = format_point(self.control1 or self.start)
        control2 = format_point(self.control2 or self.end)
        return f"M {start} C {control1},{control2},{end}"


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_point(point: Point) -> str:
    return f"{format_number(point.x)},{format_number(point.y)}"
