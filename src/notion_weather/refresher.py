"""Batch refresh of the shared weather cache file.

Walks the configured city list in order, one city at a time, and merges
each successful result into the previous snapshot. A city that fails keeps
whatever entry it already had, so a flaky provider never empties the cache.
The run ends with a single whole-file write of the merged snapshot and its
``_metadata`` summary.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from notion_weather.datasources.openweather import fetch_city_weather
from notion_weather.schemas import METADATA_KEY, CacheMetadata

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from notion_weather.config import Settings
    from notion_weather.datasources.openweather import OpenWeatherClient
    from notion_weather.schemas import CityWeather


def city_keys(snapshot: dict[str, Any]) -> list[str]:
    """Sorted city keys of a snapshot (everything not starting with ``_``)."""
    return sorted(key for key in snapshot if not key.startswith("_"))


def build_metadata(
    snapshot: dict[str, Any],
    successful: int,
    failed: int,
    now: datetime | None = None,
) -> CacheMetadata:
    """Summarize a refresh run over the final snapshot."""
    keys = city_keys(snapshot)
    return CacheMetadata(
        last_update=(now or datetime.now(UTC)).isoformat(),
        total_cities=len(keys),
        successful_updates=successful,
        failed_updates=failed,
        available_cities=keys,
    )


@dataclass
class RefreshResult:
    """Outcome of one refresh run."""

    snapshot: dict[str, Any]
    successful: int
    failed: int

    @property
    def processed(self) -> int:
        return self.successful + self.failed

    @property
    def total_cities(self) -> int:
        return len(city_keys(self.snapshot))


class CacheRefresher:
    """Sequential, rate-limited refresh over a fixed city list.

    Args:
        cities: City names in refresh order.
        fetch: Returns the normalized record for a city, or None on failure.
        delay_seconds: Pause between consecutive cities.
        sleep: Blocking sleep function (swapped out in tests).
    """

    def __init__(
        self,
        cities: Sequence[str],
        fetch: Callable[[str], CityWeather | None],
        delay_seconds: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.cities = list(cities)
        self.fetch = fetch
        self.delay_seconds = delay_seconds
        self.sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings, client: OpenWeatherClient) -> CacheRefresher:
        return cls(
            settings.cities,
            lambda city: fetch_city_weather(client, city),
            delay_seconds=settings.request_delay_seconds,
        )

    def refresh(self, previous: dict[str, Any], now: datetime | None = None) -> RefreshResult:
        """Fetch every city and merge the results over ``previous``.

        ``previous`` is not modified. The returned snapshot carries a fresh
        ``_metadata`` entry.
        """
        snapshot = dict(previous)
        successful = 0
        failed = 0
        total = len(self.cities)

        print(f"Fetching data for {total} cities")
        for i, city in enumerate(self.cities):
            progress = f"[{i + 1}/{total}]"
            print(f"{progress} Processing {city}...")

            record = self.fetch(city)
            if record is not None:
                snapshot[city.lower()] = record.to_cache_dict()
                successful += 1
                print(f"{progress} {city} - Success")
            else:
                failed += 1
                print(f"{progress} {city} - Failed (keeping old data if exists)")

            # Rate limiting - pause between requests
            if i < total - 1:
                self.sleep(self.delay_seconds)

        snapshot.pop(METADATA_KEY, None)
        metadata = build_metadata(snapshot, successful, failed, now)
        snapshot[METADATA_KEY] = metadata.model_dump(by_alias=True)
        return RefreshResult(snapshot=snapshot, successful=successful, failed=failed)
