"""
Weather widget orchestration.

One load walks ``loading -> success | error``:

1. Resolve the location: ``city`` query parameter, then ``location``, then
   the last successfully shown location, then the configured default.
2. Show the loading view.
3. Fetch current conditions and forecast concurrently, each through the
   in-memory TTL cache.
4. On success remember the location and show the widget; on any failure
   show the error view with the message and the attempted location.

Views are the only objects that touch a presentation surface. Everything
before them is plain data, so the widget can be driven from the CLI, the
HTTP server or tests alike.
"""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from enum import StrEnum
from functools import partial
from typing import TYPE_CHECKING, Any, Protocol

from notion_weather.cache import TTLCache
from notion_weather.credentials import require_api_key
from notion_weather.datasources.openweather import OpenWeatherClient
from notion_weather.datasources.openweather.city import run_pair
from notion_weather.renderers.widget import (
    build_error_html,
    build_loading_html,
    build_page_html,
    build_render_model,
    build_widget_html,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

    import requests

    from notion_weather.config import Settings
    from notion_weather.credentials import CredentialProvider
    from notion_weather.store import PreferenceStore

#: Preference key holding the last successfully loaded location.
LOCATION_KEY = "weather-location"

#: Query parameters checked for a location, in priority order.
LOCATION_PARAMS = ("city", "location")


class WidgetState(StrEnum):
    """Widget lifecycle states."""

    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class View(Protocol):
    """Presentation surface the widget renders into."""

    def show(self, html: str) -> None: ...


class MemoryView:
    """Keeps the last rendered fragment in memory."""

    def __init__(self) -> None:
        self.html = ""

    def show(self, html: str) -> None:
        self.html = html


class HtmlFileView:
    """Writes each rendered state as a standalone HTML page."""

    def __init__(self, path: Path, title: str = "Weather") -> None:
        self.path = path
        self.title = title

    def show(self, html: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(build_page_html(html, title=self.title), encoding="utf-8")


@dataclass
class WidgetResult:
    """Final state of one load."""

    state: WidgetState
    location: str
    html: str
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.state is WidgetState.SUCCESS


class WeatherWidget:
    """Loads and renders the weather widget for one location at a time.

    Args:
        settings: API base, units, language, default city and TTL.
        credentials: Source of the API key, checked on every load.
        view: Where rendered states go.
        preferences: Persists the last loaded location (optional).
        cache: Response cache; a new one with the configured TTL by default.
        http: Session for the provider client (shared session by default).
    """

    def __init__(
        self,
        settings: Settings,
        credentials: CredentialProvider,
        view: View,
        preferences: PreferenceStore | None = None,
        cache: TTLCache | None = None,
        http: requests.Session | None = None,
    ) -> None:
        self.settings = settings
        self.credentials = credentials
        self.view = view
        self.preferences = preferences
        self.cache = cache if cache is not None else TTLCache(settings.cache_duration_seconds)
        self.http = http
        self.state = WidgetState.LOADING
        self.location = settings.default_city

    def resolve_location(self, query: Mapping[str, str] | None = None) -> str:
        """Pick the location to show (query > saved preference > default)."""
        query = query or {}
        for param in LOCATION_PARAMS:
            value = (query.get(param) or "").strip()
            if value:
                return value
        if self.preferences is not None:
            saved = self.preferences.get(LOCATION_KEY)
            if saved:
                return saved
        return self.settings.default_city

    def _cached(
        self, kind: str, fetch: Callable[[str], dict[str, Any]], city: str
    ) -> dict[str, Any]:
        key = f"{kind}-{city}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        data = fetch(city)
        self.cache.set(key, data)
        return data

    def fetch(self, city: str) -> tuple[dict[str, Any], dict[str, Any]]:
        """Current conditions and forecast for ``city``, served from cache when fresh.

        Raises:
            MissingCredentialError: No usable API key.
            ProviderError: Either request failed.
        """
        api_key = require_api_key(self.credentials, self.settings.api_key_env_var)
        client = OpenWeatherClient.from_settings(self.settings, api_key, http=self.http)
        return run_pair(
            partial(self._cached, "current", client.get_current),
            partial(self._cached, "forecast", client.get_forecast),
            city,
        )

    def show_loading(self) -> None:
        self.state = WidgetState.LOADING
        self.view.show(build_loading_html(self.settings.language))

    def show_error(self, message: str) -> WidgetResult:
        self.state = WidgetState.ERROR
        html = build_error_html(message, self.location, self.settings.language)
        self.view.show(html)
        return WidgetResult(WidgetState.ERROR, self.location, html, message)

    def load(self, query: Mapping[str, str] | None = None) -> WidgetResult:
        """Run one ``loading -> success | error`` cycle."""
        self.location = self.resolve_location(query)
        self.show_loading()

        try:
            current, forecast = self.fetch(self.location)
            model = build_render_model(
                current,
                forecast,
                units=self.settings.units,
                language=self.settings.language,
            )
            html = build_widget_html(model)
            if self.preferences is not None:
                self.preferences.set(LOCATION_KEY, self.location)
        except Exception as e:  # noqa: BLE001
            print(f"Weather widget error: {e}", file=sys.stderr)
            return self.show_error(str(e) or type(e).__name__)

        self.state = WidgetState.SUCCESS
        self.view.show(html)
        return WidgetResult(WidgetState.SUCCESS, self.location, html)

    def load_with_retry(
        self,
        query: Mapping[str, str] | None = None,
        retries: int | None = None,
        delay_seconds: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> WidgetResult:
        """Load, retrying failed attempts up to ``retries`` more times.

        Waits ``delay_seconds`` between attempts. The last failure's error
        view stays on screen when every attempt fails.
        """
        retries = self.settings.widget_retries if retries is None else retries
        delay = self.settings.widget_retry_delay_seconds if delay_seconds is None else delay_seconds

        result = self.load(query)
        attempts_left = retries
        while not result.ok and attempts_left > 0:
            print(f"Retry in {delay:g} seconds... ({attempts_left} attempts left)")
            sleep(delay)
            attempts_left -= 1
            result = self.load(query)
        return result
