"""OpenWeatherMap data source.

Public API:
  - client: OpenWeatherClient (``/weather`` and ``/forecast`` requests)
  - normalize: normalize_city_weather (raw payloads -> CityWeather)
  - city: fetch_city_weather (concurrent fetch + validate, ``None`` on failure)
"""

from notion_weather.datasources.openweather.city import fetch_city_weather, fetch_raw_pair
from notion_weather.datasources.openweather.client import OPENWEATHER_API, OpenWeatherClient
from notion_weather.datasources.openweather.normalize import normalize_city_weather

__all__ = [
    "OPENWEATHER_API",
    "OpenWeatherClient",
    "fetch_city_weather",
    "fetch_raw_pair",
    "normalize_city_weather",
]
