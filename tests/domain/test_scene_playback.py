from __future__ import annotations

from typing import Any

import pytest

from domain.models import BezierSegment, Point
from domain.scene import (
    GradientDefinition,
    Group,
    Link,
    PathStroke,
    Rectangle,
    Text,
    Title,
    WeathermapScene,
)
from domain.services.scene_playback import play_scene


class RecordingSink:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Any, Any]] = []
        self._next = 0

    def _handle(self) -> str:
        self._next += 1
        return f"h{self._next}"

    def begin_scene(self, scene: WeathermapScene) -> str:
        self.calls.append(("begin", None, (scene.width, scene.height)))
        return "root"

    def emit_gradient_definition(self, definition: GradientDefinition) -> None:
        self.calls.append(("gradient", None, definition.gradient_id))

    def emit_group(self, parent: str, group: Group) -> str:
        handle = self._handle()
        self.calls.append(("group", parent, group.css_class))
        return handle

    def wrap_in_link(self, parent: str, href: str) -> str:
        handle = self._handle()
        self.calls.append(("link", parent, href))
        return handle

    def emit_rectangle(self, parent: str, rectangle: Rectangle) -> None:
        self.calls.append(("rect", parent, rectangle.width))

    def emit_path(self, parent: str, path: PathStroke) -> None:
        self.calls.append(("path", parent, path.path_data))

    def emit_text(self, parent: str, text: Text) -> None:
        self.calls.append(("text", parent, text.text))

    def emit_title(self, parent: str, title: str) -> None:
        self.calls.append(("title", parent, title))


def test_play_scene_walks_tree_depth_first() -> None:
    segment = BezierSegment(Point(0, 0), None, None, Point(1, 1))
    edge = Group(children=(Title("a ↔ b"), PathStroke(segment=segment, stroke_width=2)))
    scene = WeathermapScene(
        width=10,
        height=20,
        definitions=(GradientDefinition(gradient_id="g", stops=()),),
        layers=(
            Group(css_class="edges", children=(Link(href="http://x", child=edge),)),
            Group(css_class="nodes", children=(Rectangle(0, 0, 5, 5), Text(1, 2, "a"))),
        ),
    )
    sink = RecordingSink()
    assert play_scene(scene, sink) == "root"

    assert sink.calls == [
        ("begin", None, (10, 20)),
        ("gradient", None, "g"),
        ("group", "root", "edges"),
        ("link", "h1", "http://x"),
        ("group", "h2", None),
        ("title", "h3", "a ↔ b"),
        ("path", "h3", "M 0,0 L 1,1"),
        ("group", "root", "nodes"),
        ("rect", "h4", 5),
        ("text", "h4", "a"),
    ]


def test_play_scene_rejects_unknown_items() -> None:
    scene = WeathermapScene(
        width=1,
        height=1,
        definitions=(),
        layers=(Group(children=("not an item",)),),  # type: ignore[arg-type]
    )
    with pytest.raises(TypeError, match="Unsupported scene item"):
        play_scene(scene, RecordingSink())
