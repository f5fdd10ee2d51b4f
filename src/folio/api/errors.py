"""JSON error responses for the HTTP surface.

GraphQL errors travel inside GraphQL responses; this handler only covers
failures that escape a route entirely.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ErrorBody(BaseModel):
    """Error payload returned by the HTTP surface."""

    model_config = {"extra": "forbid", "populate_by_name": True}

    code: str
    message: str
    request_id: str | None = Field(default=None, alias="requestId")
    timestamp: str


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Exception handler for unexpected errors."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    body = ErrorBody(
        code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        request_id=getattr(request.state, "request_id", None),
        timestamp=datetime.now(UTC).isoformat(),
    )
    return JSONResponse(status_code=500, content=body.model_dump(by_alias=True, exclude_none=True))
