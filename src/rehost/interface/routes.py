"""The single catch-all route — an exact-match lookup in the content store."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse

from rehost.domain.entities import ContentStore
from rehost.interface.dependencies import get_content_store

router = APIRouter()

# Methods outside this list are answered with 405 by the router; the error
# handlers turn that into 404 as well.
_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def request_name(request: Request) -> str:
    """Return the request path minus its leading slash, exactly as sent.

    ``raw_path`` keeps percent-escapes intact; ``path`` is only a fallback
    for servers that do not provide it.
    """
    raw = request.scope.get("raw_path")
    if raw is None:
        path = request.scope["path"]
    else:
        path = raw.split(b"?", 1)[0].decode("latin-1")
    return path[1:]


@router.api_route("/{path:path}", methods=_ALL_METHODS, include_in_schema=False)
async def serve_file(
    request: Request,
    store: ContentStore = Depends(get_content_store),
) -> PlainTextResponse:
    """Return the stored document whose name equals the request path."""
    name = request_name(request)
    if request.method != "GET" or name not in store:
        raise HTTPException(status_code=404)
    return PlainTextResponse(store[name])
