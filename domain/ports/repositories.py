from __future__ import annotations

from pathlib import Path
from typing import Dict, Protocol

from domain.models import ValueName, WeathermapConfig


class WeathermapConfigRepository(Protocol):
    def load(self, path: Path) -> WeathermapConfig: ...


class MetricValuesRepository(Protocol):
    def load(self, path: Path, value_name: ValueName) -> Dict[str, float]: ...


class SvgRepository(Protocol):
    def save(self, svg_text: str, path: Path) -> None: ...
