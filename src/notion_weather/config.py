"""
Application settings.

Values come from ``NOTION_WEATHER_*`` environment variables or a ``.env``
file. The API key is deliberately not a setting; it is read through a
:class:`~notion_weather.credentials.CredentialProvider`.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

#: Cities kept in the shared cache file, in refresh order.
POPULAR_CITIES: list[str] = [
    "Warsaw",
    "Paris",
    "London",
    "New York",
    "Tokyo",
    "Sydney",
    "Barcelona",
    "Rome",
    "Berlin",
    "Amsterdam",
    "Prague",
    "Vienna",
    "Budapest",
    "Krakow",
    "Gdansk",
    "Wroclaw",
    "Poznan",
    "Zakopane",
    "Madrid",
    "Lisbon",
    "Stockholm",
    "Oslo",
    "Copenhagen",
    "Helsinki",
    "Dublin",
    "Edinburgh",
    "Brussels",
    "Zurich",
    "Milan",
    "Florence",
    "Athens",
    "Istanbul",
    "Moscow",
    "St Petersburg",
    "Kiev",
    "Minsk",
]


class Settings(BaseSettings):
    """Runtime configuration for the refresher and the widget."""

    model_config = SettingsConfigDict(
        env_prefix="NOTION_WEATHER_",
        env_file=".env",
        extra="ignore",
    )

    # App
    app_name: str = "notion-weather"
    app_env: str = "development"
    debug: bool = False

    # Provider
    api_base: str = "https://api.openweathermap.org/data/2.5"
    api_key_env_var: str = "OPENWEATHER_API_KEY"
    language: str = "pl"
    units: str = "metric"

    # Cache refresh
    cities: list[str] = Field(default_factory=lambda: list(POPULAR_CITIES))
    data_dir: Path = Path("data")
    cache_file: Path = Path("weather.json")
    request_delay_seconds: float = Field(default=0.2, ge=0)

    # Widget
    default_city: str = "Warsaw"
    cache_duration_minutes: float = Field(default=10, gt=0)
    preferences_file: Path = Path("widget_prefs.json")
    widget_retries: int = Field(default=3, ge=0)
    widget_retry_delay_seconds: float = Field(default=5, ge=0)
    site_dir: Path = Path("site")
    api_port: int = 8000

    @property
    def cache_path(self) -> Path:
        """Location of the cache snapshot file."""
        return self.data_dir / self.cache_file

    @property
    def cache_duration_seconds(self) -> float:
        """Widget TTL in seconds."""
        return self.cache_duration_minutes * 60


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
