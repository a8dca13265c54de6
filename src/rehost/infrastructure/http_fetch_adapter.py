"""HTTP fetch adapter — implements the RemoteFetcher port with httpx."""

from __future__ import annotations

import logging

import httpx

from rehost._version import __version__
from rehost.domain.exceptions import FetchError

logger = logging.getLogger(__name__)

_USER_AGENT = f"rehost/{__version__}"


class HttpFetchAdapter:
    """Concrete ``RemoteFetcher`` backed by an ``httpx.AsyncClient``.

    The client is owned by the caller; redirects are followed per request.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_text(self, url: str) -> str:
        """GET *url* and return the body decoded with its declared charset."""
        try:
            resp = await self._client.get(
                url,
                headers={"User-Agent": _USER_AGENT},
                follow_redirects=True,
            )
        except httpx.InvalidURL as exc:
            raise FetchError(f"Invalid URL '{url}': {exc}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Network error fetching {url}: {exc}") from exc

        if not resp.is_success:
            raise FetchError(f"{url} returned HTTP {resp.status_code}")

        encoding = resp.charset_encoding or "utf-8"
        try:
            text = resp.content.decode(encoding)
        except (LookupError, UnicodeDecodeError) as exc:
            raise FetchError(
                f"Response body of {url} is not valid {encoding} text"
            ) from exc

        logger.debug("Fetched %s (HTTP %d, %d bytes)", url, resp.status_code, len(resp.content))
        return text
