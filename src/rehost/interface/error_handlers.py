"""Global exception handlers — plain-text error bodies.

The only client-visible error in normal operation is 404; anything else
reaching here is a bug and is logged as such.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── HTTP errors (404 for unknown names and non-GET methods) ─────────

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        # Unsupported methods come back from the router as 405.
        if exc.status_code == 405:
            exc = StarletteHTTPException(status_code=404)
        logger.debug("%s %s → %d", request.method, request.url.path, exc.status_code)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> PlainTextResponse:
        logger.exception("Unhandled exception")
        return PlainTextResponse("Internal Server Error", status_code=500)
