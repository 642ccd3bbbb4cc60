"""ASGI middleware for the shellscope service.

`create_app()` adds CORSMiddleware, SlowAPIMiddleware, SecurityHeadersMiddleware
and RequestIdMiddleware in that order. Starlette runs the last one added
outermost, so every response, 429s and 422s included, carries a request ID
and the security headers.

The request ID lives in a ContextVar so the structlog processor in
`shellscope.core.logging` can stamp it on every event, including the
per-request access line emitted here.
"""

import time
import uuid
from contextvars import ContextVar
from typing import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# The API only ever returns JSON; remote script text travels inside it and
# must never be rendered, framed or cached by a browser.
SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Cache-Control": "no-store",
}

_request_id_var: ContextVar[str] = ContextVar("request_id", default="")

access_logger = structlog.get_logger("shellscope.access")

Handler = Callable[[Request], Awaitable[Response]]


def get_request_id() -> str:
    """Return the current request's ID, or an empty string outside a request."""
    return _request_id_var.get()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind X-Request-ID for the request and log one access line when it ends.

    A client-supplied ID is kept so callers can correlate their own logs;
    otherwise a UUID4 is minted.
    """

    async def dispatch(self, request: Request, call_next: Handler) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = _request_id_var.set(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            access_logger.info(
                "request",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
        finally:
            _request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp SECURITY_HEADERS on every response, error responses included."""

    async def dispatch(self, request: Request, call_next: Handler) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
