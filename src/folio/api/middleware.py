"""Request ID middleware.

Binds a request ID to the logging context for the duration of a request.
"""

from __future__ import annotations

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from folio.observability.logging import LogContext


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Extract or generate ``x-request-id`` and echo it on the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())

        with LogContext(request_id=request_id):
            request.state.request_id = request_id
            response = await call_next(request)
            response.headers["x-request-id"] = request_id
            return response
