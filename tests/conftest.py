"""Pytest fixtures and test doubles shared across the suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import httpx
import pytest

from rehost.domain.exceptions import FetchError, IoError

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class FakeLocalReader:
    """In-memory ``LocalReader``; unknown paths raise ``IoError``."""

    files: dict[str, str] = field(default_factory=dict)
    reads: list[str] = field(default_factory=list)

    async def read_text(self, path: str) -> str:
        self.reads.append(path)
        if path not in self.files:
            raise IoError(f"File not found: {path}")
        return self.files[path]


@dataclass
class FakeRemoteFetcher:
    """In-memory ``RemoteFetcher``; unknown URLs raise ``FetchError``."""

    documents: dict[str, str] = field(default_factory=dict)
    fetches: list[str] = field(default_factory=list)

    async def fetch_text(self, url: str) -> str:
        self.fetches.append(url)
        if url not in self.documents:
            raise FetchError(f"{url} returned HTTP 404")
        return self.documents[url]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def local_reader() -> FakeLocalReader:
    return FakeLocalReader()


@pytest.fixture
def remote_fetcher() -> FakeRemoteFetcher:
    return FakeRemoteFetcher()


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write *content* to ``tmp_path / name`` and return the path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def text_transport() -> Callable[[dict[str, str]], httpx.MockTransport]:
    """Build a transport serving ``{url: body}``; anything else is a 404."""

    def _build(routes: dict[str, str]) -> httpx.MockTransport:
        def _handler(request: httpx.Request) -> httpx.Response:
            body = routes.get(str(request.url))
            if body is None:
                return httpx.Response(404, text="not found")
            return httpx.Response(200, text=body)

        return httpx.MockTransport(_handler)

    return _build
