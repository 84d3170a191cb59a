"""
HTTP server for embedding the widget in Notion.

``GET /?city=Paris`` (or ``/widget?location=Paris``) renders the widget for
that location; without a query parameter the last shown location or the
default city is used. All requests share one :class:`WeatherWidget` and
therefore one TTL cache. Served pages reload themselves once per TTL
period. ``HTTPServer`` handles one request at a time, which the cache
relies on.
"""

from __future__ import annotations

import http.server
import json
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qs, urlsplit

from notion_weather.renderers.widget import build_page_html

if TYPE_CHECKING:
    from notion_weather.widget import WeatherWidget

WIDGET_PATHS = ("/", "/widget", "/weather-widget.html")


def parse_query(raw_query: str) -> dict[str, str]:
    """First value of each query parameter."""
    return {key: values[0] for key, values in parse_qs(raw_query).items() if values}


def create_handler(widget: WeatherWidget) -> type[http.server.BaseHTTPRequestHandler]:
    """Build a request handler class bound to ``widget``."""

    class WidgetRequestHandler(http.server.BaseHTTPRequestHandler):
        server_version = "notion-weather"

        def do_GET(self) -> None:  # noqa: N802
            url = urlsplit(self.path)
            if url.path == "/health":
                self._send(200, "application/json", json.dumps({"status": "ok"}))
                return
            if url.path not in WIDGET_PATHS:
                self._send(404, "text/plain; charset=utf-8", "Not found")
                return

            result = widget.load(parse_query(url.query))
            status = 200 if result.ok else 502
            page = build_page_html(
                result.html,
                title=f"Weather - {result.location}",
                refresh_seconds=round(widget.settings.cache_duration_seconds),
            )
            self._send(status, "text/html; charset=utf-8", page)

        def _send(self, status: int, content_type: str, body: str) -> None:
            payload = body.encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", content_type)
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
            print(f"{self.address_string()} - {format % args}")

    return WidgetRequestHandler


def create_server(widget: WeatherWidget, port: int, host: str = "") -> http.server.HTTPServer:
    return http.server.HTTPServer((host, port), create_handler(widget))
