from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from domain.models import BezierSegment

StyleMap = Dict[str, str]


@dataclass(frozen=True)
class Rectangle:
    x: float
    y: float
    width: float
    height: float
    style: StyleMap = field(default_factory=dict)


@dataclass(frozen=True)
class PathStroke:
    segment: BezierSegment
    stroke_width: float

    @property
    def path_data(self) -> str:
        return self.segment.to_path_data()


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    css_class: Optional[str] = None
    dy: Optional[str] = None
    style: StyleMap = field(default_factory=dict)


@dataclass(frozen=True)
class Title:
    text: str


@dataclass(frozen=True)
class Group:
    children: Tuple[SceneItem, ...] = ()
    css_class: Optional[str] = None
    style: StyleMap = field(default_factory=dict)
    transform: Optional[str] = None


@dataclass(frozen=True)
class Link:
    href: str
    child: Group


SceneItem = Union[Group, Link, Rectangle, PathStroke, Text, Title]


@dataclass(frozen=True)
class GradientDefinitionStop:
    offset_percent: float
    color: str


@dataclass(frozen=True)
class GradientDefinition:
    gradient_id: str
    stops: Tuple[GradientDefinitionStop, ...]


@dataclass(frozen=True)
class WeathermapScene:
    width: float
    height: float
    definitions: Tuple[GradientDefinition, ...]
    layers: Tuple[Group, ...]
    add_view_box: bool = False

    def layer(self, css_class: str) -> Group:
        for group in self.layers:
            if group.css_class == css_class:
                return group
        msg = f"Scene has no layer {css_class!r}"
        raise KeyError(msg)
