"""
Prefect flows for the weather cache.

Flows:
- refresh: fetch every configured city and rewrite data/weather.json

Usage (local):
    python -m notion_weather.flows.refresh
    notion-weather            # same flow via the CLI

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'refresh-weather-cache/default'

In GitHub Actions (scheduled):
    pip install .
    OPENWEATHER_API_KEY=${{ secrets.OPENWEATHER_API_KEY }} notion-weather
"""
