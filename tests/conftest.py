"""Shared fixtures: OpenWeatherMap payloads and settings."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from notion_weather.config import Settings, get_settings
from tests.payloads import make_current, make_forecast


@pytest.fixture
def current_payload() -> dict[str, Any]:
    return make_current()


@pytest.fixture
def forecast_payload() -> dict[str, Any]:
    return make_forecast()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temporary data directory, no delays."""
    return Settings(
        data_dir=tmp_path / "data",
        site_dir=tmp_path / "site",
        cities=["Warsaw", "Paris"],
        request_delay_seconds=0,
        widget_retry_delay_seconds=0,
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
