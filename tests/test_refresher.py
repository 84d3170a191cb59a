"""Tests for the batch cache refresher."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from unittest.mock import Mock

from notion_weather.datasources.openweather import (
    OpenWeatherClient,
    fetch_city_weather,
    normalize_city_weather,
)
from notion_weather.refresher import CacheRefresher, build_metadata, city_keys
from notion_weather.schemas import CityWeather
from tests.payloads import make_current, make_forecast, mock_response, route_by_endpoint

NOW = datetime(2026, 2, 4, 12, 0, tzinfo=UTC)


def _record(city: str) -> CityWeather:
    return normalize_city_weather(city, make_current(city), make_forecast(count=3), NOW)


def _fetcher(ok: set[str]) -> Mock:
    """Fetch function succeeding only for cities in ``ok``."""
    return Mock(side_effect=lambda city: _record(city) if city in ok else None)


class TestCityKeys:
    """Test city key listing."""

    def test_sorted_and_skips_metadata(self) -> None:
        snapshot = {"warsaw": {}, "_metadata": {}, "amsterdam": {}, "_other": {}}
        assert city_keys(snapshot) == ["amsterdam", "warsaw"]

    def test_empty(self) -> None:
        assert city_keys({}) == []


class TestBuildMetadata:
    """Test run summary construction."""

    def test_counts_and_cities(self) -> None:
        meta = build_metadata({"paris": {}, "warsaw": {}}, successful=1, failed=1, now=NOW)
        assert meta.total_cities == 2
        assert meta.available_cities == ["paris", "warsaw"]
        assert meta.successful_updates == 1
        assert meta.failed_updates == 1
        assert meta.last_update == "2026-02-04T12:00:00+00:00"

    def test_aliases(self) -> None:
        meta = build_metadata({"paris": {}}, 1, 0, NOW).model_dump(by_alias=True)
        assert set(meta) == {
            "lastUpdate",
            "totalCities",
            "successfulUpdates",
            "failedUpdates",
            "availableCities",
        }


class TestCacheRefresher:
    """Test merge, failure preservation and pacing."""

    def test_failed_city_keeps_previous_entry(self) -> None:
        old_paris = {"city": "Paris", "lastUpdated": "2026-02-03T12:00:00+00:00", "current": {}}
        refresher = CacheRefresher(
            ["Paris", "Warsaw"], _fetcher({"Warsaw"}), delay_seconds=0, sleep=Mock()
        )

        result = refresher.refresh({"paris": old_paris}, now=NOW)

        assert result.snapshot["paris"] == old_paris
        assert result.snapshot["warsaw"]["city"] == "Warsaw"
        meta = result.snapshot["_metadata"]
        assert meta["successfulUpdates"] == 1
        assert meta["failedUpdates"] == 1
        assert meta["totalCities"] == 2
        assert meta["availableCities"] == ["paris", "warsaw"]

    def test_failed_city_without_previous_entry_absent(self) -> None:
        refresher = CacheRefresher(["Paris", "Warsaw"], _fetcher({"Warsaw"}), sleep=Mock())

        result = refresher.refresh({}, now=NOW)

        assert "paris" not in result.snapshot
        assert result.snapshot["_metadata"]["availableCities"] == ["warsaw"]
        assert result.snapshot["_metadata"]["totalCities"] == 1

    def test_keys_are_lowercase(self) -> None:
        refresher = CacheRefresher(["New York"], _fetcher({"New York"}), sleep=Mock())

        result = refresher.refresh({}, now=NOW)

        assert "new york" in result.snapshot
        assert result.snapshot["new york"]["city"] == "New York"

    def test_success_replaces_previous_entry(self) -> None:
        refresher = CacheRefresher(["Warsaw"], _fetcher({"Warsaw"}), sleep=Mock())

        result = refresher.refresh({"warsaw": {"city": "stale"}}, now=NOW)

        assert result.snapshot["warsaw"]["city"] == "Warsaw"
        assert result.snapshot["warsaw"]["lastUpdated"] == "2026-02-04T12:00:00+00:00"

    def test_cities_not_in_list_are_kept(self) -> None:
        refresher = CacheRefresher(["Warsaw"], _fetcher({"Warsaw"}), sleep=Mock())

        result = refresher.refresh({"lima": {"city": "Lima"}}, now=NOW)

        assert result.snapshot["lima"] == {"city": "Lima"}
        assert result.snapshot["_metadata"]["totalCities"] == 2

    def test_old_metadata_replaced(self) -> None:
        previous = {"_metadata": {"totalCities": 99, "stale": True}}
        refresher = CacheRefresher(["Warsaw"], _fetcher({"Warsaw"}), sleep=Mock())

        result = refresher.refresh(previous, now=NOW)

        assert "stale" not in result.snapshot["_metadata"]
        assert result.snapshot["_metadata"]["totalCities"] == 1
        assert result.snapshot["_metadata"]["lastUpdate"] == NOW.isoformat()

    def test_previous_not_mutated(self) -> None:
        previous: dict[str, Any] = {"paris": {"city": "Paris"}}
        refresher = CacheRefresher(["Warsaw"], _fetcher({"Warsaw"}), sleep=Mock())

        refresher.refresh(previous, now=NOW)

        assert previous == {"paris": {"city": "Paris"}}

    def test_counts_add_up(self) -> None:
        cities = ["Warsaw", "Paris", "London", "Rome"]
        refresher = CacheRefresher(cities, _fetcher({"Warsaw", "Rome"}), sleep=Mock())

        result = refresher.refresh({}, now=NOW)

        assert result.successful == 2
        assert result.failed == 2
        assert result.processed == len(cities)
        assert result.total_cities == 2

    def test_all_failed_with_empty_prior(self) -> None:
        refresher = CacheRefresher(["Warsaw", "Paris"], _fetcher(set()), sleep=Mock())

        result = refresher.refresh({}, now=NOW)

        assert result.snapshot == {
            "_metadata": {
                "lastUpdate": NOW.isoformat(),
                "totalCities": 0,
                "successfulUpdates": 0,
                "failedUpdates": 2,
                "availableCities": [],
            }
        }

    def test_cities_fetched_in_order(self) -> None:
        fetch = _fetcher({"Warsaw", "Paris", "London"})
        refresher = CacheRefresher(["Warsaw", "Paris", "London"], fetch, sleep=Mock())

        refresher.refresh({}, now=NOW)

        assert [c.args[0] for c in fetch.call_args_list] == ["Warsaw", "Paris", "London"]

    def test_sleeps_between_cities_only(self) -> None:
        sleep = Mock()
        refresher = CacheRefresher(
            ["Warsaw", "Paris", "London"], _fetcher({"Warsaw"}), delay_seconds=0.2, sleep=sleep
        )

        refresher.refresh({}, now=NOW)

        assert sleep.call_count == 2
        sleep.assert_called_with(0.2)

    def test_single_city_never_sleeps(self) -> None:
        sleep = Mock()
        refresher = CacheRefresher(["Warsaw"], _fetcher({"Warsaw"}), sleep=sleep)

        refresher.refresh({}, now=NOW)

        sleep.assert_not_called()

    def test_progress_output(self, capsys: Any) -> None:
        refresher = CacheRefresher(["Paris", "Warsaw"], _fetcher({"Warsaw"}), sleep=Mock())

        refresher.refresh({}, now=NOW)

        out = capsys.readouterr().out
        assert "Fetching data for 2 cities" in out
        assert "[1/2] Paris - Failed (keeping old data if exists)" in out
        assert "[2/2] Warsaw - Success" in out

    def test_from_settings(self, settings: Any) -> None:
        refresher = CacheRefresher.from_settings(settings, Mock())
        assert refresher.cities == ["Warsaw", "Paris"]
        assert refresher.delay_seconds == 0

    def test_non_object_bodies_count_as_failures(self) -> None:
        http = Mock()
        http.get.side_effect = route_by_endpoint(
            {
                "Paris": {
                    "weather": mock_response(None),
                    "forecast": mock_response(make_forecast()),
                },
                "Warsaw": {
                    "weather": mock_response([]),
                    "forecast": mock_response(make_forecast()),
                },
            }
        )
        client = OpenWeatherClient("test-key", http=http)
        old_paris = {"city": "Paris", "lastUpdated": "2026-02-03T12:00:00+00:00"}
        refresher = CacheRefresher(
            ["Paris", "Warsaw"], lambda city: fetch_city_weather(client, city), sleep=Mock()
        )

        result = refresher.refresh({"paris": old_paris}, now=NOW)

        assert result.successful == 0
        assert result.failed == 2
        assert result.snapshot["paris"] == old_paris
        assert "warsaw" not in result.snapshot
