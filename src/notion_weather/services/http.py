"""
Shared HTTP client with a default timeout.

Provides a pre-configured ``requests.Session`` for the OpenWeatherMap
client. Requests are sent once, with no transport-level retries: the only
rate handling is the fixed pause between cities in the cache refresh, and a
failed city simply keeps its previous cache entry.

Usage::

    from notion_weather.services.http import session

    resp = session.get("https://api.openweathermap.org/data/2.5/weather", params={...})
    resp.raise_for_status()
"""

from __future__ import annotations

import requests

from notion_weather import __version__

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = f"notion-weather/{__version__}"


def create_session(timeout: float = DEFAULT_TIMEOUT) -> requests.Session:
    """
    Build a ``requests.Session`` with the project User-Agent.

    Args:
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    s.headers["User-Agent"] = USER_AGENT

    # Inject a default timeout so callers don't need to pass ``timeout=``.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, import and use directly.
session: requests.Session = create_session()
