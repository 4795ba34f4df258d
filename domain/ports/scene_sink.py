from __future__ import annotations

from typing import Any, Protocol

from domain.scene import GradientDefinition, Group, PathStroke, Rectangle, Text, WeathermapScene

Handle = Any


class SceneSink(Protocol):
    def begin_scene(self, scene: WeathermapScene) -> Handle: ...

    def emit_gradient_definition(self, definition: GradientDefinition) -> None: ...

    def emit_group(self, parent: Handle, group: Group) -> Handle: ...

    def wrap_in_link(self, parent: Handle, href: str) -> Handle: ...

    def emit_rectangle(self, parent: Handle, rectangle: Rectangle) -> None: ...

    def emit_path(self, parent: Handle, path: PathStroke) -> None: ...

    def emit_text(self, parent: Handle, text: Text) -> None: ...

    def emit_title(self, parent: Handle, title: str) -> None: ...
