"""Weather utility functions for renderers.

Pure conversion functions with no external dependencies.
"""

from __future__ import annotations

import math
from datetime import datetime, tzinfo

# OpenWeatherMap icon codes (https://openweathermap.org/weather-conditions)
WEATHER_ICONS: dict[str, str] = {
    # Day
    "01d": "\u2600\ufe0f",  # clear sky
    "02d": "\u26c5",  # few clouds
    "03d": "\u2601\ufe0f",  # scattered clouds
    "04d": "\u2601\ufe0f",  # broken clouds
    "09d": "\U0001f327\ufe0f",  # shower rain
    "10d": "\U0001f326\ufe0f",  # rain
    "11d": "\u26c8\ufe0f",  # thunderstorm
    "13d": "\u2744\ufe0f",  # snow
    "50d": "\U0001f32b\ufe0f",  # mist
    # Night
    "01n": "\U0001f319",
    "02n": "\u2601\ufe0f",
    "03n": "\u2601\ufe0f",
    "04n": "\u2601\ufe0f",
    "09n": "\U0001f327\ufe0f",
    "10n": "\U0001f327\ufe0f",
    "11n": "\u26c8\ufe0f",
    "13n": "\u2744\ufe0f",
    "50n": "\U0001f32b\ufe0f",
}

DEFAULT_ICON = "\U0001f324\ufe0f"

WIND_DIRECTIONS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]

TEMPERATURE_UNITS: dict[str, str] = {"metric": "\u00b0C", "imperial": "\u00b0F", "standard": "K"}

# Short weekday/month names for forecast labels, Monday first.
_DATE_NAMES: dict[str, tuple[list[str], list[str]]] = {
    "pl": (
        ["pon.", "wt.", "śr.", "czw.", "pt.", "sob.", "niedz."],
        ["sty", "lut", "mar", "kwi", "maj", "cze", "lip", "sie", "wrz", "paź", "lis", "gru"],
    ),
    "en": (
        ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"],
        ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
    ),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return math.floor(value + 0.5)


def icon_for(code: str | None) -> str:
    """Emoji for an OpenWeatherMap icon code."""
    return WEATHER_ICONS.get(code or "", DEFAULT_ICON)


def temperature_unit(units: str) -> str:
    return TEMPERATURE_UNITS.get(units, TEMPERATURE_UNITS["metric"])


def convert_wind_speed(speed: float) -> int:
    """Convert m/s to whole km/h."""
    return round_half_up(speed * 3.6)


def wind_direction(degrees: float) -> str:
    """8-point compass direction for a bearing in degrees."""
    return WIND_DIRECTIONS[round_half_up(degrees / 45) % 8]


def format_forecast_date(timestamp: int, language: str = "pl", tz: tzinfo | None = None) -> str:
    """Short forecast label, e.g. ``pon., 5 lut`` or ``Mon, 5 Feb``."""
    dt = datetime.fromtimestamp(timestamp, tz)
    weekdays, months = _DATE_NAMES.get(language, _DATE_NAMES["en"])
    return f"{weekdays[dt.weekday()]}, {dt.day} {months[dt.month - 1]}"
