"""Forecast reshaping for display.

Pure functions over provider data. No I/O, no HTTP, no Prefect
decorators; renderers consume the results directly.

Modules:
  - daily_forecast: 3-hourly forecast samples -> one sample per calendar day
"""

from notion_weather.analysis.daily_forecast import DAYS_SHOWN, bucket_by_day

__all__ = ["DAYS_SHOWN", "bucket_by_day"]
