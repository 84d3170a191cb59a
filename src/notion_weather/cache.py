"""In-memory TTL cache for widget API responses.

Entries expire after a fixed duration and are evicted lazily, on the first
lookup after they went stale. There is no size bound; the cache lives as
long as the widget process. Not safe for concurrent mutation.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any


class TTLCache:
    """Time-based key/value cache."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        data, inserted_at = entry
        if self._clock() - inserted_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return data

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` with the current time."""
        self._entries[key] = (value, self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
