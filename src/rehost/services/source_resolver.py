"""Source resolver — turns a declared location into a (name, content) pair."""

from __future__ import annotations

import logging

from rehost.domain.entities import (
    ExternalLocation,
    LocalLocation,
    Location,
    ResolvedSource,
)
from rehost.domain.ports.source_reader import LocalReader, RemoteFetcher
from rehost.domain.value_objects import SourcePath, SourceUrl

logger = logging.getLogger(__name__)


class SourceResolver:
    """Reads local files and fetches remote ones through the injected ports.

    Nothing is cached: two declarations naming the same source trigger two
    independent reads.
    """

    def __init__(self, local_reader: LocalReader, remote_fetcher: RemoteFetcher) -> None:
        self._local = local_reader
        self._remote = remote_fetcher

    async def resolve(self, location: Location) -> ResolvedSource:
        """Return the default name and raw content for *location*.

        Raises :class:`~rehost.domain.exceptions.IoError` for local sources and
        :class:`~rehost.domain.exceptions.FetchError` for remote ones.
        """
        if isinstance(location, LocalLocation):
            path = SourcePath.from_string(location.path)
            logger.debug("Reading %s", path.raw)
            content = await self._local.read_text(path.raw)
            return ResolvedSource(name=path.file_name, content=content)

        if isinstance(location, ExternalLocation):
            url = SourceUrl.from_string(location.url)
            logger.debug("Fetching %s", url.raw)
            content = await self._remote.fetch_text(url.raw)
            return ResolvedSource(name=url.file_name, content=content)

        raise TypeError(f"Unsupported location: {location!r}")
