"""Notion Weather - OpenWeatherMap cache and embeddable weather widget.

Architecture::

    datasources/   OpenWeatherMap client (current conditions + 5-day forecast)
    refresher.py   Batch cache refresh over the configured city list
    store.py       JSON cache snapshot and widget preference files
    cache.py       In-memory TTL cache used by the widget
    analysis/      Forecast day-bucketing
    renderers/     Pure data -> HTML (widget, error and loading views)
    widget.py      Widget state machine (resolve -> load -> render)
    server.py      HTTP front end serving the widget to Notion embeds
    flows/         Prefect orchestration of the cache refresh
    services/      Shared utilities (HTTP session)

Data flow (refresher): datasources -> refresher -> store -> data/weather.json
Data flow (widget): datasources -> cache -> analysis -> renderers -> view
"""

__version__ = "0.1.0"

from notion_weather.config import Settings
from notion_weather.schemas import CityWeather, ForecastEntry, WeatherRecord

__all__ = ["CityWeather", "ForecastEntry", "Settings", "WeatherRecord", "__version__"]
