from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from adapters.filesystem.json_utils import load_json
from domain.models import ValueName
from domain.ports.repositories import MetricValuesRepository

logger = logging.getLogger(__name__)

_AGGREGATORS: dict[str, Callable[[Sequence[float]], float]] = {
    "max": max,
    "min": min,
    "avg": lambda series: sum(series) / len(series),
    "current": lambda series: series[-1],
    "total": sum,
}


def aggregate_series(series: Sequence[float], value_name: ValueName) -> float | None:
    if not series:
        return None
    aggregator = _AGGREGATORS.get(value_name)
    if aggregator is None:
        msg = f"Unknown value aggregation: {value_name}"
        raise ValueError(msg)
    return float(aggregator(series))


def normalize_metric_values(raw: dict[str, Any], value_name: ValueName) -> dict[str, float]:
    values: dict[str, float] = {}
    for metric_name, entry in raw.items():
        if isinstance(entry, list):
            series = [float(item) for item in entry if _is_number(item)]
            value = aggregate_series(series, value_name)
        elif _is_number(entry):
            value = float(entry)
        else:
            value = None
        if value is None or not math.isfinite(value):
            logger.debug("Metric %s has no usable value", metric_name)
            continue
        values[str(metric_name)] = value
    return values


class FileSystemMetricValuesRepository(MetricValuesRepository):
    def load(self, path: Path, value_name: ValueName) -> dict[str, float]:
        return normalize_metric_values(load_json(path), value_name)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
