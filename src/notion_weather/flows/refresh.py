"""
Prefect flow that refreshes the shared weather cache file.

Run locally:
    OPENWEATHER_API_KEY=... python -m notion_weather.flows.refresh

Run with Prefect dashboard:
    prefect server start &
    OPENWEATHER_API_KEY=... python -m notion_weather.flows.refresh
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from prefect import flow, task

from notion_weather.config import Settings, get_settings
from notion_weather.credentials import (
    CredentialProvider,
    EnvCredentialProvider,
    require_api_key,
)
from notion_weather.datasources.openweather import OpenWeatherClient
from notion_weather.refresher import CacheRefresher
from notion_weather.store import DataStore


@task(name="load-snapshot")
def load_snapshot(data_dir: str, cache_file: str) -> dict[str, Any]:
    """Load the previous cache snapshot ({} when absent or malformed)."""
    return DataStore(Path(data_dir)).read_snapshot(Path(cache_file))


@task(name="save-snapshot")
def save_snapshot(snapshot: dict[str, Any], data_dir: str, cache_file: str) -> Path:
    """Write the merged snapshot in one step."""
    return DataStore(Path(data_dir)).write_snapshot(Path(cache_file), snapshot)


# Parameters are live objects, not JSON values.
@flow(name="refresh-weather-cache", log_prints=True, validate_parameters=False)
def refresh_weather_cache(
    settings: Settings | None = None,
    credentials: CredentialProvider | None = None,
) -> dict[str, Any]:
    """
    Refresh every configured city and rewrite the cache file.

    Args:
        settings: Application settings (``get_settings()`` when omitted).
        credentials: API key source (the ``settings.api_key_env_var``
            environment variable when omitted).

    Raises:
        MissingCredentialError: No API key; nothing is fetched or written.
        CacheWriteError: The final write failed.
    """
    if settings is None:
        settings = get_settings()
    if credentials is None:
        credentials = EnvCredentialProvider(settings.api_key_env_var)
    api_key = require_api_key(credentials, settings.api_key_env_var)

    print("Starting weather data update...")
    client = OpenWeatherClient.from_settings(settings, api_key)
    refresher = CacheRefresher.from_settings(settings, client)

    previous = load_snapshot(str(settings.data_dir), str(settings.cache_file))
    result = refresher.refresh(previous)
    output_path = save_snapshot(result.snapshot, str(settings.data_dir), str(settings.cache_file))

    size_kb = output_path.stat().st_size / 1024
    print("Weather data update completed!")
    print(f"Successful updates: {result.successful}")
    print(f"Failed updates: {result.failed}")
    print(f"Total cities in cache: {result.total_cities}")
    print(f"Data saved to: {output_path}")
    print(f"File size: {size_kb:.2f} KB")

    return {
        "successful": result.successful,
        "failed": result.failed,
        "total_cities": result.total_cities,
        "output": str(output_path),
    }


if __name__ == "__main__":
    summary = refresh_weather_cache()
    print(f"Flow complete: {summary}")
