"""JSON data store for the cache snapshot and widget preferences.

All files live under one base directory (``data/`` by default):
  - weather.json: cache snapshot, city key -> record plus ``_metadata``
  - widget_prefs.json: small key/value file the widget uses the way a
    browser widget uses ``localStorage`` (last chosen location)

Snapshots are written pretty-printed and replaced in one step: the JSON is
written to a temporary sibling file which is then renamed over the target,
so readers never see a half-written snapshot.
"""

from __future__ import annotations

import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Any

from notion_weather.exceptions import CacheWriteError


class DataStore:
    """Reads and writes JSON files under a base directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir

    def read_json(self, path: Path) -> Any | None:
        """Parse a JSON file, or return None if it doesn't exist.

        Malformed content raises ``json.JSONDecodeError``.
        """
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open(encoding="utf-8") as f:
            return json.load(f)

    def write_json(self, path: Path, data: Any) -> Path:
        """Replace ``path`` with ``data`` as indented JSON.

        Creates parent directories as needed.

        Returns:
            Path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{full.name}.", suffix=".tmp", dir=full.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, full)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        return full

    def read_snapshot(self, path: Path) -> dict[str, Any]:
        """Load a cache snapshot.

        A missing file is an empty snapshot. So is unreadable or
        non-object content, after printing a warning.
        """
        try:
            data = self.read_json(path)
        except (OSError, ValueError) as e:
            print(f"Warning: Error loading existing data from {path}: {e}", file=sys.stderr)
            return {}

        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"Warning: Ignoring {path}: expected a JSON object", file=sys.stderr)
            return {}
        return data

    def write_snapshot(self, path: Path, snapshot: dict[str, Any]) -> Path:
        """Write a cache snapshot, raising :class:`CacheWriteError` on failure."""
        try:
            return self.write_json(path, snapshot)
        except (OSError, TypeError, ValueError) as e:
            msg = f"Error saving weather data to {path}: {e}"
            raise CacheWriteError(msg) from e

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full


class PreferenceStore:
    """Persistent string key/value pairs backed by one JSON file."""

    def __init__(self, store: DataStore, path: Path) -> None:
        self.store = store
        self.path = path

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.store.write_json(self.path, data)

    def _load(self) -> dict[str, Any]:
        try:
            data = self.store.read_json(self.path)
        except (OSError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}
