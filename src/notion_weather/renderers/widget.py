"""Weather widget renderers.

Two stages: :func:`build_render_model` turns raw provider payloads into a
:class:`WidgetModel` (plain values, no markup), and the ``build_*_html``
functions turn a model, an error or the loading state into HTML.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any
from urllib.parse import quote

from notion_weather.analysis.daily_forecast import DAYS_SHOWN, bucket_by_day
from notion_weather.renderers import render_template
from notion_weather.renderers.weather_utils import (
    convert_wind_speed,
    format_forecast_date,
    icon_for,
    round_half_up,
    temperature_unit,
    wind_direction,
)

LABELS: dict[str, dict[str, str]] = {
    "pl": {
        "updated": "Aktualizacja",
        "forecast": "Prognoza 5-dniowa",
        "feels_like": "Odczuwalna",
        "humidity": "Wilgotność",
        "wind": "Wiatr",
        "pressure": "Ciśnienie",
        "visibility": "Widoczność",
        "uv_index": "Indeks UV",
        "location": "Lokalizacja",
        "loading": "Ładowanie prognozy pogody...",
    },
    "en": {
        "updated": "Updated",
        "forecast": "5-day forecast",
        "feels_like": "Feels like",
        "humidity": "Humidity",
        "wind": "Wind",
        "pressure": "Pressure",
        "visibility": "Visibility",
        "uv_index": "UV index",
        "location": "Location",
        "loading": "Loading weather forecast...",
    },
}


def labels_for(language: str) -> dict[str, str]:
    return LABELS.get(language, LABELS["en"])


@dataclass
class DetailRow:
    label: str
    value: str


@dataclass
class ForecastDay:
    date: str
    icon: str
    temp_max: int
    temp_min: int
    description: str


@dataclass
class WidgetModel:
    """Everything the widget template shows, already formatted."""

    location: str
    updated: str
    icon: str
    temperature: str
    description: str
    details: list[DetailRow] = field(default_factory=list)
    days: list[ForecastDay] = field(default_factory=list)
    labels: dict[str, str] = field(default_factory=dict)


def _details(current: dict[str, Any], units: str, labels: dict[str, str]) -> list[DetailRow]:
    main = current["main"]
    wind = current.get("wind") or {}
    unit = temperature_unit(units)
    if units == "imperial":
        wind_speed = f"{round_half_up(wind.get('speed') or 0)} mph"
    else:
        wind_speed = f"{convert_wind_speed(wind.get('speed') or 0)} km/h"
    uvi = current.get("uvi")
    return [
        DetailRow(labels["feels_like"], f"{round_half_up(main['feels_like'])}{unit}"),
        DetailRow(labels["humidity"], f"{main['humidity']}%"),
        DetailRow(labels["wind"], f"{wind_speed} {wind_direction(wind.get('deg') or 0)}"),
        DetailRow(labels["pressure"], f"{main['pressure']} hPa"),
        DetailRow(labels["visibility"], f"{(current.get('visibility') or 0) / 1000:.1f} km"),
        DetailRow(labels["uv_index"], f"{uvi:.1f}" if uvi else "N/A"),
    ]


def build_render_model(
    current: dict[str, Any],
    forecast: dict[str, Any],
    now: datetime | None = None,
    *,
    units: str = "metric",
    language: str = "pl",
    tz: tzinfo | None = None,
) -> WidgetModel:
    """
    Transform raw ``/weather`` and ``/forecast`` payloads into a render model.

    Args:
        current: Current-conditions payload.
        forecast: Forecast payload (``list`` of 3-hourly samples).
        now: Render time shown in the header (defaults to now).
        units: Provider unit system, picks the temperature suffix.
        language: Label language (``pl`` or ``en``).
        tz: Timezone for the header time and forecast dates (local if None).
    """
    labels = labels_for(language)
    weather = current["weather"][0]
    country = (current.get("sys") or {}).get("country", "")
    location = f"{current.get('name', '')}, {country}" if country else current.get("name", "")
    rendered_at = now or datetime.now(tz)

    days = [
        ForecastDay(
            date=format_forecast_date(item["dt"], language, tz),
            icon=icon_for(item["weather"][0].get("icon")),
            temp_max=round_half_up(item["main"]["temp_max"]),
            temp_min=round_half_up(item["main"]["temp_min"]),
            description=item["weather"][0].get("description", ""),
        )
        for item in bucket_by_day(forecast.get("list", []), DAYS_SHOWN, tz)
    ]

    return WidgetModel(
        location=location,
        updated=rendered_at.strftime("%H:%M:%S"),
        icon=icon_for(weather.get("icon")),
        temperature=f"{round_half_up(current['main']['temp'])}{temperature_unit(units)}",
        description=weather.get("description", ""),
        details=_details(current, units, labels),
        days=days,
        labels=labels,
    )


def build_widget_html(model: WidgetModel) -> str:
    """HTML fragment for the success state."""
    return render_template("widget.html.j2", model=model)


def build_error_html(message: str, location: str, language: str = "pl") -> str:
    """HTML fragment for the error state."""
    return render_template(
        "error.html.j2", message=message, location=location, labels=labels_for(language)
    )


def build_loading_html(language: str = "pl") -> str:
    """HTML fragment for the loading state."""
    return render_template("loading.html.j2", labels=labels_for(language))


def build_page_html(
    content: str, title: str = "Weather", refresh_seconds: int | None = None
) -> str:
    """Wrap a fragment into a standalone page with the widget CSS.

    With ``refresh_seconds`` the browser reloads the page on that interval.
    """
    return render_template(
        "page.html.j2", content=content, title=title, refresh_seconds=refresh_seconds
    )


def build_widget_url(base_url: str, city: str) -> str:
    """Embed URL for a Notion page, e.g. ``https://host/widget?city=Paris&notion=true``."""
    return f"{base_url}?city={quote(city, safe='')}&notion=true"
