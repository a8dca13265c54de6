"""Dependency wiring — builds the adapters, runs assembly, exposes the store."""

from __future__ import annotations

import logging
import os

import httpx
from fastapi import Request

from rehost.domain.entities import Configuration, ContentStore
from rehost.domain.ports.source_reader import EnvLookup
from rehost.infrastructure.config import Settings
from rehost.infrastructure.http_fetch_adapter import HttpFetchAdapter
from rehost.infrastructure.local_file_adapter import LocalFileAdapter
from rehost.services.assembly_pipeline import AssemblyPipeline
from rehost.services.source_resolver import SourceResolver

logger = logging.getLogger(__name__)


async def build_content_store(
    config: Configuration,
    settings: Settings,
    *,
    env_lookup: EnvLookup = os.environ.get,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ContentStore:
    """Run the assembly pipeline with production adapters.

    The HTTP client lives only for the duration of the build.
    """
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.fetch_timeout),
        transport=transport,
    ) as client:
        resolver = SourceResolver(
            local_reader=LocalFileAdapter(),
            remote_fetcher=HttpFetchAdapter(client),
        )
        pipeline = AssemblyPipeline(
            resolver,
            use_env=settings.override,
            env_lookup=env_lookup,
        )
        return await pipeline.assemble(config)


def get_content_store(request: Request) -> ContentStore:
    """Return the store attached to the application at construction time."""
    store: ContentStore = request.app.state.content_store
    return store
