"""Reduce a 3-hourly forecast to one sample per calendar day."""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

DAYS_SHOWN = 5


def sample_date(item: dict[str, Any], tz: tzinfo | None = None) -> date:
    """Calendar date of a forecast sample's ``dt`` (local time when ``tz`` is None)."""
    return datetime.fromtimestamp(item["dt"], tz).date()


def bucket_by_day(
    items: Iterable[dict[str, Any]],
    days: int = DAYS_SHOWN,
    tz: tzinfo | None = None,
) -> list[dict[str, Any]]:
    """
    Keep the first sample of each calendar date, in order, up to ``days`` dates.

    This is de-duplication, not aggregation: later samples of an
    already-seen date are dropped rather than averaged in.

    Args:
        items: Forecast samples in chronological order (``list`` of the
            ``/forecast`` response).
        days: Maximum number of dates to return.
        tz: Timezone used to derive the calendar date.
    """
    daily: list[dict[str, Any]] = []
    seen: set[date] = set()
    for item in items:
        if len(daily) >= days:
            break
        day = sample_date(item, tz)
        if day not in seen:
            seen.add(day)
            daily.append(item)
    return daily
