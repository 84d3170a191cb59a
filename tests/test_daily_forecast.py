"""Tests for the one-sample-per-day forecast reduction."""

from __future__ import annotations

from datetime import UTC, date, timedelta, timezone

from notion_weather.analysis.daily_forecast import DAYS_SHOWN, bucket_by_day, sample_date
from tests.payloads import BASE_TS, make_forecast, make_forecast_item

HOUR = 3600


class TestSampleDate:
    """Test calendar date derivation."""

    def test_utc(self) -> None:
        assert sample_date({"dt": BASE_TS}, UTC) == date(2026, 2, 4)

    def test_timezone_shifts_date(self) -> None:
        minus_two = timezone(timedelta(hours=-2))
        assert sample_date({"dt": BASE_TS}, minus_two) == date(2026, 2, 3)


class TestBucketByDay:
    """Test day bucketing."""

    def test_five_days_from_forty_samples(self) -> None:
        items = make_forecast(count=40)["list"]

        daily = bucket_by_day(items, tz=UTC)

        assert len(daily) == DAYS_SHOWN
        assert [sample_date(i, UTC) for i in daily] == [
            date(2026, 2, 4),
            date(2026, 2, 5),
            date(2026, 2, 6),
            date(2026, 2, 7),
            date(2026, 2, 8),
        ]

    def test_keeps_first_sample_of_each_day(self) -> None:
        items = make_forecast(count=16)["list"]

        daily = bucket_by_day(items, tz=UTC)

        assert daily[0] is items[0]
        assert daily[1] is items[8]

    def test_partial_first_day(self) -> None:
        # First sample at 21:00, so day one has a single sample
        items = make_forecast(count=9, start=BASE_TS + 21 * HOUR)["list"]

        daily = bucket_by_day(items, tz=UTC)

        assert [i["dt"] for i in daily] == [BASE_TS + 21 * HOUR, BASE_TS + 24 * HOUR]

    def test_fewer_days_available(self) -> None:
        items = make_forecast(count=12)["list"]
        assert len(bucket_by_day(items, tz=UTC)) == 2

    def test_custom_day_count(self) -> None:
        items = make_forecast(count=40)["list"]
        assert len(bucket_by_day(items, days=3, tz=UTC)) == 3

    def test_empty(self) -> None:
        assert bucket_by_day([], tz=UTC) == []

    def test_keeps_input_order(self) -> None:
        items = [
            make_forecast_item(BASE_TS + 30 * HOUR),
            make_forecast_item(BASE_TS + 3 * HOUR),
            make_forecast_item(BASE_TS + 6 * HOUR),
        ]

        daily = bucket_by_day(items, tz=UTC)

        assert [i["dt"] for i in daily] == [BASE_TS + 30 * HOUR, BASE_TS + 3 * HOUR]
