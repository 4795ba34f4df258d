from __future__ import annotations

from pathlib import Path

from filelock import FileLock

from adapters.filesystem.json_utils import write_text_atomic
from adapters.svg.sink import SvgSceneSink
from domain.ports.repositories import SvgRepository
from domain.scene import WeathermapScene
from domain.services.scene_playback import play_scene


def scene_to_svg(scene: WeathermapScene) -> str:
    sink = SvgSceneSink()
    play_scene(scene, sink)
    return sink.to_string()


class FileSystemSvgRepository(SvgRepository):
    def save(self, svg_text: str, path: Path) -> None:
        lock_path = path.with_suffix(f"{path.suffix}.lock")
        path.parent.mkdir(parents=True, exist_ok=True)
        with FileLock(str(lock_path)):
            write_text_atomic(path, svg_text)
