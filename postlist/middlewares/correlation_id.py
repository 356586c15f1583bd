"""
Middleware for request correlation ID tracking and per-request log context.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

CORRELATION_HEADER = "X-Correlation-ID"
CORRELATION_ID_LENGTH = 8

# Context variable for storing correlation ID per request
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Attach a correlation ID and a fresh logging context to every request.

    The ID is taken from the ``X-Correlation-ID`` header or generated, cut to
    8 characters, stored on ``request.state.request_id`` and in a context
    variable, and echoed back in the response headers. The log context is
    seeded with the request method and path and cleared once the response
    has been produced.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        from postlist.logging import clear_log_context, set_log_context

        cid = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex
        cid = cid[:CORRELATION_ID_LENGTH]

        request.state.request_id = cid
        token = correlation_id.set(cid)
        set_log_context(endpoint=request.url.path, method=request.method)

        try:
            response = await call_next(request)
        finally:
            clear_log_context()
            correlation_id.reset(token)

        response.headers[CORRELATION_HEADER] = cid
        return response


def get_correlation_id() -> str:
    """
    Get the correlation ID for the current request context.

    Returns:
        The correlation ID string, or empty string if not set.
    """
    return correlation_id.get()
