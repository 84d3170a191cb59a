"""Validate raw OpenWeatherMap payloads and map them onto domain models."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from notion_weather.exceptions import InvalidPayloadError
from notion_weather.schemas import (
    CityWeather,
    Condition,
    ForecastEntry,
    ForecastList,
    ForecastMain,
    ForecastWind,
    WeatherRecord,
    Wind,
)


def validate_payloads(current: Any, forecast: Any) -> None:
    """Check the structure both payloads must have before normalization.

    Raises:
        InvalidPayloadError: A payload is not a JSON object, ``main``/``weather``
            is missing from current conditions, or the forecast ``list`` is empty.
    """
    if not isinstance(current, dict) or not isinstance(forecast, dict):
        msg = "Invalid weather data structure: expected JSON objects"
        raise InvalidPayloadError(msg)
    if not current.get("main") or not current.get("weather") or not forecast.get("list"):
        msg = "Invalid weather data structure"
        raise InvalidPayloadError(msg)


def _record(current: dict[str, Any]) -> WeatherRecord:
    main = current["main"]
    weather = current["weather"][0]
    wind = current.get("wind") or {}
    return WeatherRecord(
        name=current.get("name", ""),
        country=(current.get("sys") or {}).get("country", ""),
        temp=main["temp"],
        feels_like=main["feels_like"],
        humidity=main["humidity"],
        pressure=main["pressure"],
        description=weather["description"],
        icon=weather["icon"],
        wind=Wind(speed=wind.get("speed") or 0, deg=wind.get("deg") or 0),
        visibility=current.get("visibility") or 0,
        dt=current["dt"],
    )


def _entry(item: dict[str, Any]) -> ForecastEntry:
    main = item["main"]
    weather = item["weather"][0]
    return ForecastEntry(
        dt=item["dt"],
        main=ForecastMain(
            temp=main["temp"],
            temp_min=main["temp_min"],
            temp_max=main["temp_max"],
            humidity=main["humidity"],
        ),
        weather=[Condition(description=weather["description"], icon=weather["icon"])],
        wind=ForecastWind(speed=(item.get("wind") or {}).get("speed") or 0),
        dt_txt=item.get("dt_txt", ""),
    )


def normalize_city_weather(
    city: str,
    current: dict[str, Any],
    forecast: dict[str, Any],
    fetched_at: datetime | None = None,
) -> CityWeather:
    """
    Build the cache record for ``city`` from raw provider payloads.

    Optional fields get explicit defaults: wind speed/direction and
    visibility become 0 when the provider omits them.

    Args:
        city: City name as configured (kept as the display name).
        current: ``/weather`` response.
        forecast: ``/forecast`` response.
        fetched_at: Timestamp for ``lastUpdated`` (defaults to now, UTC).

    Raises:
        InvalidPayloadError: Required fields are missing or malformed.
    """
    validate_payloads(current, forecast)
    stamp = (fetched_at or datetime.now(UTC)).isoformat()
    try:
        return CityWeather(
            current=_record(current),
            forecast=ForecastList(entries=[_entry(item) for item in forecast["list"]]),
            last_updated=stamp,
            city=city,
        )
    except (KeyError, IndexError, TypeError, ValidationError) as e:
        msg = f"Invalid weather data structure: {e}"
        raise InvalidPayloadError(msg) from e
