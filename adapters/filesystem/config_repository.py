from __future__ import annotations

from pathlib import Path
from typing import Any

from adapters.filesystem.json_utils import load_json_text, strip_json_comments
from domain.models import WeathermapConfig
from domain.ports.repositories import WeathermapConfigRepository


class FileSystemWeathermapConfigRepository(WeathermapConfigRepository):
    def load(self, path: Path) -> WeathermapConfig:
        return WeathermapConfig.model_validate(self.load_raw(path))

    def load_raw(self, path: Path) -> dict[str, Any]:
        text = path.read_text(encoding="utf-8")
        return load_json_text(strip_json_comments(text))
