"""Server middleware: panic recovery and request timeouts."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from aiohttp import web
from aiohttp.typedefs import Handler

_logger = logging.getLogger(__name__)

Middleware = Callable[[web.Request, Handler], Awaitable[web.StreamResponse]]


@web.middleware
async def recovery_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Turn unhandled handler exceptions into a logged 500 response."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception:
        _logger.exception("Unhandled error serving %s %s", request.method, request.path)
        raise web.HTTPInternalServerError(text="Internal Server Error") from None


def timeout_middleware(timeout: float) -> Middleware:
    """Bound each request to *timeout* seconds, answering 504 when exceeded."""

    @web.middleware
    async def middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
        deadline = asyncio.timeout(timeout)
        try:
            async with deadline:
                return await handler(request)
        except TimeoutError:
            if not deadline.expired():
                raise
            _logger.warning("Request %s %s timed out after %.1fs", request.method, request.path, timeout)
            raise web.HTTPGatewayTimeout(text="Request timed out") from None

    return middleware
