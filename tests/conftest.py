from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from app.config import AppSettings, RenderSettings
from domain.models import WeathermapConfig
from tests.helpers.weathermap_fixtures import two_node_payload


def _clear_wxm_env() -> None:
    for key in list(os.environ):
        if key.startswith("WXM_"):
            os.environ.pop(key, None)


_clear_wxm_env()


@pytest.fixture(autouse=True)
def clear_wxm_env() -> Generator[None, None, None]:
    _clear_wxm_env()
    yield
    _clear_wxm_env()


@pytest.fixture
def render_settings(tmp_path: Path) -> RenderSettings:
    return RenderSettings(
        output_dir=tmp_path / "weathermaps",
        add_view_box=False,
        value_name_override=None,
        log_level="INFO",
    )


@pytest.fixture
def app_settings(render_settings: RenderSettings) -> AppSettings:
    return AppSettings(render=render_settings)


@pytest.fixture
def weathermap_payload() -> dict[str, Any]:
    return two_node_payload()


@pytest.fixture
def weathermap_config(weathermap_payload: dict[str, Any]) -> WeathermapConfig:
    return WeathermapConfig.model_validate(weathermap_payload)


@pytest.fixture
def weathermap_config_factory(
    weathermap_payload: dict[str, Any],
) -> Callable[..., WeathermapConfig]:
    def _factory(**overrides: object) -> WeathermapConfig:
        return WeathermapConfig.model_validate({**weathermap_payload, **overrides})

    return _factory
