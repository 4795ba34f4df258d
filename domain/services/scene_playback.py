from __future__ import annotations

from domain.ports.scene_sink import Handle, SceneSink
from domain.scene import Group, Link, PathStroke, Rectangle, SceneItem, Text, Title, WeathermapScene


def play_scene(scene: WeathermapScene, sink: SceneSink) -> Handle:
    root = sink.begin_scene(scene)
    for definition in scene.definitions:
        sink.emit_gradient_definition(definition)
    for layer in scene.layers:
        _play_item(layer, root, sink)
    return root


def _play_item(item: SceneItem, parent: Handle, sink: SceneSink) -> None:
    if isinstance(item, Group):
        handle = sink.emit_group(parent, item)
        for child in item.children:
            _play_item(child, handle, sink)
    elif isinstance(item, Link):
        anchor = sink.wrap_in_link(parent, item.href)
        _play_item(item.child, anchor, sink)
    elif isinstance(item, Rectangle):
        sink.emit_rectangle(parent, item)
    elif isinstance(item, PathStroke):
        sink.emit_path(parent, item)
    elif isinstance(item, Text):
        sink.emit_text(parent, item)
    elif isinstance(item, Title):
        sink.emit_title(parent, item.text)
    else:
        msg = f"Unsupported scene item: {type(item).__name__}"
        raise TypeError(msg)
