"""OpenWeatherMap API client.

API docs:
  - Current weather: https://openweathermap.org/current
  - 5 day / 3 hour forecast: https://openweathermap.org/forecast5
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import requests

from notion_weather.exceptions import ProviderError
from notion_weather.services.http import session as default_session

if TYPE_CHECKING:
    from notion_weather.config import Settings

OPENWEATHER_API = "https://api.openweathermap.org/data/2.5"


class OpenWeatherClient:
    """Thin wrapper over the two city-name endpoints.

    Both requests share the API key, unit system and language. Any
    non-success status or transport failure is raised as
    :class:`~notion_weather.exceptions.ProviderError`.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_API,
        units: str = "metric",
        language: str = "pl",
        http: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.units = units
        self.language = language
        self.http = http or default_session

    @classmethod
    def from_settings(
        cls, settings: Settings, api_key: str, http: requests.Session | None = None
    ) -> OpenWeatherClient:
        return cls(
            api_key,
            base_url=settings.api_base,
            units=settings.units,
            language=settings.language,
            http=http,
        )

    def params(self, city: str) -> dict[str, str]:
        """Query parameters for a city lookup (``requests`` URL-encodes them)."""
        return {"q": city, "appid": self.api_key, "units": self.units, "lang": self.language}

    def get_current(self, city: str) -> dict[str, Any]:
        """Fetch current conditions for ``city``."""
        return self._get("weather", city, label="Current weather")

    def get_forecast(self, city: str) -> dict[str, Any]:
        """Fetch the 5-day / 3-hour forecast for ``city``."""
        return self._get("forecast", city, label="Forecast")

    def _get(self, endpoint: str, city: str, *, label: str) -> dict[str, Any]:
        url = f"{self.base_url}/{endpoint}"
        try:
            resp = self.http.get(url, params=self.params(city))
        except requests.RequestException as e:
            msg = f"{label} request failed for {city}: {e}"
            raise ProviderError(msg) from e

        if not resp.ok:
            msg = f"{label} API error for {city}: {resp.status_code} {resp.reason}"
            raise ProviderError(msg, status_code=resp.status_code)

        try:
            result: dict[str, Any] = resp.json()
        except ValueError as e:
            msg = f"{label} API returned invalid JSON for {city}"
            raise ProviderError(msg, status_code=resp.status_code) from e
        return result
