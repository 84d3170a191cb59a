"""Exception hierarchy.

Fatal errors (:class:`MissingCredentialError`, :class:`CacheWriteError`)
propagate to the CLI, which turns them into exit code 1. Provider and
payload errors are contained per city by the refresher and shown in the
widget's error state.
"""

from __future__ import annotations


class NotionWeatherError(Exception):
    """Base class for all application errors."""


class MissingCredentialError(NotionWeatherError):
    """The OpenWeatherMap API key is not configured."""


class ProviderError(NotionWeatherError):
    """The weather provider returned a non-success status or was unreachable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidPayloadError(NotionWeatherError):
    """A well-formed provider response is missing required fields."""


class CacheWriteError(NotionWeatherError):
    """The cache snapshot could not be written to disk."""
