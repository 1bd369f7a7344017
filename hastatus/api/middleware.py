"""aiohttp middlewares: request correlation ids and permissive CORS.

Image endpoints are fetched by dashboards and e-ink devices on other origins,
so every response allows any origin.
"""

import uuid
from collections.abc import Callable
from contextvars import ContextVar
from typing import Any

from aiohttp import web

REQUEST_ID_HEADER = "X-Request-ID"

# Context variable holding the current request's correlation id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, X-Request-ID",
    "Access-Control-Expose-Headers": "X-Request-ID",
}


@web.middleware
async def correlation_id_middleware(
    request: web.Request, handler: Callable[[web.Request], Any]
) -> web.StreamResponse:
    """Echo the caller's X-Request-ID, or assign a new one.

    The id is stored in a context variable so log records emitted while the
    request is handled carry it, and is returned in the response headers.
    """
    correlation_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

    request_id_var.set(correlation_id)
    request["correlation_id"] = correlation_id

    response = await handler(request)
    response.headers[REQUEST_ID_HEADER] = correlation_id
    return response


@web.middleware
async def cors_middleware(
    request: web.Request, handler: Callable[[web.Request], Any]
) -> web.StreamResponse:
    """Allow cross-origin GETs and answer preflight requests directly."""
    if request.method == "OPTIONS":
        response: web.StreamResponse = web.Response(status=204)
    else:
        try:
            response = await handler(request)
        except web.HTTPException as exc:
            # Router errors (404/405) are raised; keep CORS headers on them too.
            exc.headers.update(CORS_HEADERS)
            raise
    response.headers.update(CORS_HEADERS)
    return response


def get_request_id() -> str:
    """Current request correlation id, or "no-request-id" outside a request."""
    request_id = request_id_var.get()
    return request_id if request_id else "no-request-id"
