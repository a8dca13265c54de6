"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from rehost._version import __version__
from rehost.domain.entities import ContentStore
from rehost.interface.error_handlers import register_error_handlers
from rehost.interface.routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Serving %d file(s)", len(app.state.content_store))
    yield
    logger.info("Shutting down")


def create_app(store: ContentStore) -> FastAPI:
    """Build the application around an already assembled *store*.

    The docs and OpenAPI endpoints are disabled: every path belongs to the
    content store.
    """
    app = FastAPI(
        title="rehost",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=_lifespan,
    )
    app.state.content_store = store

    register_error_handlers(app)
    app.include_router(router)

    return app
