from __future__ import annotations

import xml.etree.ElementTree as ET

from domain.models import format_number
from domain.ports.scene_sink import SceneSink
from domain.scene import (
    GradientDefinition,
    Group,
    PathStroke,
    Rectangle,
    StyleMap,
    Text,
    WeathermapScene,
)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)


def _q(tag: str) -> str:
    return f"{{{SVG_NS}}}{tag}"


def format_style(style: StyleMap) -> str:
    return ";".join(f"{key}:{value}" for key, value in style.items())


class SvgSceneSink(SceneSink):
    def __init__(self) -> None:
        self.root: ET.Element | None = None
        self.defs: ET.Element | None = None

    def begin_scene(self, scene: WeathermapScene) -> ET.Element:
        width = format_number(scene.width)
        height = format_number(scene.height)
        self.root = ET.Element(_q("svg"), {"style": f"width:{width}px;height:{height}px"})
        if scene.add_view_box:
            self.root.set("viewBox", f"0 0 {width} {height}")
        self.defs = ET.SubElement(self.root, _q("defs"))
        return self.root

    def emit_gradient_definition(self, definition: GradientDefinition) -> None:
        if self.defs is None:
            msg = "begin_scene must be called before emitting definitions"
            raise RuntimeError(msg)
        gradient = ET.SubElement(self.defs, _q("linearGradient"), {"id": definition.gradient_id})
        for stop in definition.stops:
            ET.SubElement(
                gradient,
                _q("stop"),
                {"offset": f"{format_number(stop.offset_percent)}%", "stop-color": stop.color},
            )

    def emit_group(self, parent: ET.Element, group: Group) -> ET.Element:
        attrs: dict[str, str] = {}
        if group.css_class:
            attrs["class"] = group.css_class
        if group.style:
            attrs["style"] = format_style(group.style)
        if group.transform:
            attrs["transform"] = group.transform
        return ET.SubElement(parent, _q("g"), attrs)

    def wrap_in_link(self, parent: ET.Element, href: str) -> ET.Element:
        return ET.SubElement(parent, _q("a"), {f"{{{XLINK_NS}}}href": href})

    def emit_rectangle(self, parent: ET.Element, rectangle: Rectangle) -> None:
        attrs = {
            "x": format_number(rectangle.x),
            "y": format_number(rectangle.y),
            "width": format_number(rectangle.width),
            "height": format_number(rectangle.height),
        }
        if rectangle.style:
            attrs["style"] = format_style(rectangle.style)
        ET.SubElement(parent, _q("rect"), attrs)

    def emit_path(self, parent: ET.Element, path: PathStroke) -> None:
        ET.SubElement(
            parent,
            _q("path"),
            {"d": path.path_data, "style": f"stroke-width:{format_number(path.stroke_width)}"},
        )

    def emit_text(self, parent: ET.Element, text: Text) -> None:
        attrs = {"x": format_number(text.x), "y": format_number(text.y)}
        if text.css_class:
            attrs["class"] = text.css_class
        if text.dy is not None:
            attrs["dy"] = text.dy
        if text.style:
            attrs["style"] = format_style(text.style)
        element = ET.SubElement(parent, _q("text"), attrs)
        element.text = text.text

    def emit_title(self, parent: ET.Element, title: str) -> None:
        element = ET.SubElement(parent, _q("title"))
        element.text = title

    def to_string(self) -> str:
        if self.root is None:
            msg = "No scene has been rendered"
            raise RuntimeError(msg)
        return ET.tostring(self.root, encoding="unicode")
