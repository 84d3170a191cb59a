"""API credential providers.

The refresher and the widget never read the environment directly; they are
given a provider at startup so tests can substitute a fixed key::

    provider = EnvCredentialProvider("OPENWEATHER_API_KEY")
    api_key = require_api_key(provider)
"""

from __future__ import annotations

import os
from typing import Protocol, runtime_checkable

from notion_weather.exceptions import MissingCredentialError

#: Value shipped in sample configs; treated the same as an unset key.
PLACEHOLDER_API_KEY = "YOUR_API_KEY_HERE"


@runtime_checkable
class CredentialProvider(Protocol):
    """Anything that can hand out the provider API key."""

    def get_api_key(self) -> str | None: ...


class EnvCredentialProvider:
    """Reads the API key from an environment variable."""

    def __init__(self, env_var: str = "OPENWEATHER_API_KEY") -> None:
        self.env_var = env_var

    def get_api_key(self) -> str | None:
        return os.environ.get(self.env_var)


class StaticCredentialProvider:
    """Returns a fixed API key."""

    def __init__(self, api_key: str | None) -> None:
        self.api_key = api_key

    def get_api_key(self) -> str | None:
        return self.api_key


def require_api_key(provider: CredentialProvider, env_var: str = "OPENWEATHER_API_KEY") -> str:
    """Return the API key or raise :class:`MissingCredentialError`."""
    api_key = (provider.get_api_key() or "").strip()
    if not api_key or api_key == PLACEHOLDER_API_KEY:
        msg = f"{env_var} environment variable is not set"
        raise MissingCredentialError(msg)
    return api_key
