"""Fetch current conditions and forecast for one city.

The two requests are issued concurrently and joined before anything else
happens; a single failed request fails the whole city.
"""

from __future__ import annotations

import sys
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from notion_weather.datasources.openweather.normalize import normalize_city_weather
from notion_weather.exceptions import InvalidPayloadError, ProviderError

if TYPE_CHECKING:
    from collections.abc import Callable

    from notion_weather.datasources.openweather.client import OpenWeatherClient
    from notion_weather.schemas import CityWeather


def run_pair(
    get_current: Callable[[str], dict[str, Any]],
    get_forecast: Callable[[str], dict[str, Any]],
    city: str,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Call both fetchers for ``city`` concurrently and wait for both.

    The first exception raised by either fetcher propagates.
    """
    with ThreadPoolExecutor(max_workers=2) as pool:
        current = pool.submit(get_current, city)
        forecast = pool.submit(get_forecast, city)
        return current.result(), forecast.result()


def fetch_raw_pair(client: OpenWeatherClient, city: str) -> tuple[dict[str, Any], dict[str, Any]]:
    """Raw ``(current, forecast)`` payloads for ``city``."""
    return run_pair(client.get_current, client.get_forecast, city)


def fetch_city_weather(client: OpenWeatherClient, city: str) -> CityWeather | None:
    """
    Fetch and normalize weather for one city.

    Never raises for provider or payload problems: the failure is printed
    and ``None`` is returned so the caller can keep its previous data.
    """
    print(f"Fetching weather data for: {city}")
    try:
        current, forecast = fetch_raw_pair(client, city)
        return normalize_city_weather(city, current, forecast)
    except (ProviderError, InvalidPayloadError) as e:
        print(f"Error fetching weather for {city}: {e}", file=sys.stderr)
        return None
