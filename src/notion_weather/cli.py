"""
Command-line interface for the application.

Running ``notion-weather`` with no command refreshes the cache file;
``notion-weather test [CITY]`` checks a single city without touching it.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from notion_weather import __version__
from notion_weather.config import get_settings
from notion_weather.credentials import EnvCredentialProvider, require_api_key
from notion_weather.datasources.openweather import OpenWeatherClient, fetch_city_weather
from notion_weather.exceptions import NotionWeatherError
from notion_weather.flows.refresh import refresh_weather_cache
from notion_weather.renderers.weather_utils import temperature_unit
from notion_weather.renderers.widget import build_widget_url
from notion_weather.server import create_server
from notion_weather.store import DataStore, PreferenceStore
from notion_weather.widget import HtmlFileView, MemoryView, WeatherWidget


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="notion-weather",
        description="OpenWeatherMap cache refresher and weather widget for Notion",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'refresh' command - the default when no command is given
    subparsers.add_parser("refresh", help="Refresh the weather cache file")

    # 'test' command - single-city diagnostic
    test_parser = subparsers.add_parser("test", help="Fetch one city and print a summary")
    test_parser.add_argument(
        "city",
        nargs="?",
        default="Warsaw",
        help="City to fetch (default: Warsaw)",
    )

    # 'widget' command - render the widget to a file
    widget_parser = subparsers.add_parser("widget", help="Render the weather widget to HTML")
    widget_parser.add_argument("--city", type=str, default=None, help="City to show")
    widget_parser.add_argument(
        "--location", type=str, default=None, help="Alternate name for --city"
    )
    widget_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file (default: <site_dir>/weather-widget.html)",
    )

    # 'serve' command - serve the widget over HTTP
    serve_parser = subparsers.add_parser("serve", help="Serve the widget locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    # 'url' command - Notion embed URL
    url_parser = subparsers.add_parser("url", help="Print the Notion embed URL for a city")
    url_parser.add_argument("city", type=str, help="City to embed")
    url_parser.add_argument(
        "--base-url",
        type=str,
        required=True,
        help="Where the widget is served, e.g. https://example.com/weather-widget.html",
    )

    # 'info' command
    subparsers.add_parser("info", help="Show application info")

    return parser


def _build_widget(view: MemoryView | HtmlFileView) -> WeatherWidget:
    settings = get_settings()
    preferences = PreferenceStore(DataStore(settings.data_dir), settings.preferences_file)
    return WeatherWidget(
        settings,
        EnvCredentialProvider(settings.api_key_env_var),
        view,
        preferences=preferences,
    )


def cmd_refresh(_args: argparse.Namespace) -> int:
    """Handle the 'refresh' command (and the no-command default)."""
    settings = get_settings()
    try:
        refresh_weather_cache(
            settings=settings,
            credentials=EnvCredentialProvider(settings.api_key_env_var),
        )
    except NotionWeatherError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_test(args: argparse.Namespace) -> int:
    """Handle the 'test' command: fetch one city, never touch the cache file."""
    settings = get_settings()
    try:
        api_key = require_api_key(
            EnvCredentialProvider(settings.api_key_env_var), settings.api_key_env_var
        )
    except NotionWeatherError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Testing weather data for: {args.city}")
    client = OpenWeatherClient.from_settings(settings, api_key)
    data = fetch_city_weather(client, args.city)
    if data is None:
        print("Failed to fetch data")
        return 0

    print("Success!")
    print(f"Location: {data.current.name}, {data.current.country}")
    print(f"Temperature: {data.current.temp}{temperature_unit(settings.units)}")
    print(f"Description: {data.current.description}")
    print(f"Forecast entries: {len(data.forecast.entries)}")
    return 0


def cmd_widget(args: argparse.Namespace) -> int:
    """Handle the 'widget' command: render once (with retries) to an HTML file."""
    settings = get_settings()
    output = args.output or settings.site_dir / "weather-widget.html"
    widget = _build_widget(HtmlFileView(output))

    query = {
        key: value
        for key, value in (("city", args.city), ("location", args.location))
        if value
    }
    result = widget.load_with_retry(query)

    print(f"Widget ({result.state}) for {result.location} written to {output}")
    return 0 if result.ok else 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the widget over HTTP."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port
    widget = _build_widget(MemoryView())

    with create_server(widget, port) as server:
        print(f"Serving widget on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def cmd_url(args: argparse.Namespace) -> int:
    """Handle the 'url' command."""
    print(build_widget_url(args.base_url, args.city))
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Cities: {len(settings.cities)}")
    print(f"Cache file: {settings.cache_path}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.debug:
        print(f"Debug mode enabled. Settings: {get_settings()}")

    commands = {
        None: cmd_refresh,
        "refresh": cmd_refresh,
        "test": cmd_test,
        "widget": cmd_widget,
        "serve": cmd_serve,
        "url": cmd_url,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
