"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, request helpers
    ├── normalize.py      # Validation and mapping onto ``schemas`` models
    └── {feature}.py      # Fetch functions (one per concept)

Currently there is a single source, ``openweather/`` (OpenWeatherMap 2.5
current weather + 5-day/3-hour forecast).
"""
