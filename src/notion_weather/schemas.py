"""
Domain models for notion-weather.

Pydantic models for the normalized records stored in the cache snapshot.
Field names and aliases match the on-disk JSON layout, so
``model_dump(by_alias=True)`` is exactly what gets written.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

METADATA_KEY = "_metadata"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# =============================================================================
# Current conditions
# =============================================================================


class Wind(_Frozen):
    """Wind speed (m/s in metric units) and direction (degrees)."""

    speed: float = 0
    deg: float = 0


class WeatherRecord(_Frozen):
    """Normalized current conditions for one city."""

    name: str
    country: str = ""
    temp: float
    feels_like: float
    humidity: float
    pressure: float
    description: str
    icon: str
    wind: Wind = Field(default_factory=Wind)
    visibility: float = 0
    dt: int


# =============================================================================
# Forecast
# =============================================================================


class ForecastMain(_Frozen):
    temp: float
    temp_min: float
    temp_max: float
    humidity: float


class Condition(_Frozen):
    description: str
    icon: str


class ForecastWind(_Frozen):
    speed: float = 0


class ForecastEntry(_Frozen):
    """One 3-hourly forecast sample."""

    dt: int
    main: ForecastMain
    weather: list[Condition] = Field(..., min_length=1)
    wind: ForecastWind = Field(default_factory=ForecastWind)
    dt_txt: str = ""


class ForecastList(_Frozen):
    """Ordered forecast samples as returned by the provider."""

    entries: list[ForecastEntry] = Field(..., alias="list", min_length=1)


# =============================================================================
# Cache snapshot
# =============================================================================


class CityWeather(_Frozen):
    """Cache snapshot value for one city key."""

    current: WeatherRecord
    forecast: ForecastList
    last_updated: str = Field(..., alias="lastUpdated")
    city: str

    def to_cache_dict(self) -> dict[str, object]:
        """Serialize to the JSON-ready layout used in the cache file."""
        return self.model_dump(by_alias=True, mode="json")


class CacheMetadata(_Frozen):
    """Run statistics stored under the ``_metadata`` key."""

    last_update: str = Field(..., alias="lastUpdate")
    total_cities: int = Field(..., alias="totalCities")
    successful_updates: int = Field(..., alias="successfulUpdates")
    failed_updates: int = Field(..., alias="failedUpdates")
    available_cities: list[str] = Field(default_factory=list, alias="availableCities")
