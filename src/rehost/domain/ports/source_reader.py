"""Ports: source readers — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

EnvLookup = Callable[[str], Optional[str]]
"""Capability returning an environment variable's value, or ``None`` if unset."""


class LocalReader(Protocol):
    """Abstract contract for reading text files from local storage."""

    async def read_text(self, path: str) -> str:
        """Return the decoded text of the file at *path*."""
        ...


class RemoteFetcher(Protocol):
    """Abstract contract for fetching text documents over the network."""

    async def fetch_text(self, url: str) -> str:
        """GET *url* and return the decoded response body."""
        ...
