"""Health check endpoints for Folio.

Provides Kubernetes-compatible liveness and readiness probes:
- /health       - Full report (document store and cache)
- /health/live  - Liveness probe (always returns OK if process is running)
- /health/ready - Readiness probe (only the document store is required;
                  a down cache degrades the service but does not stop it)
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(tags=["health"])

CHECK_TIMEOUT = 5.0  # seconds


class HealthStatus(str, Enum):
    """Health check status."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class ComponentHealth:
    """Health status of a single component."""

    name: str
    status: HealthStatus
    latency_ms: float
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result: dict[str, Any] = {
            "name": self.name,
            "status": self.status.value,
            "latency_ms": round(self.latency_ms, 2),
        }
        if self.message:
            result["message"] = self.message
        return result


async def check_component(name: str, probe: Callable[[], Awaitable[bool]]) -> ComponentHealth:
    """Run one connectivity probe with a timeout."""
    start = time.monotonic()
    try:
        healthy = await asyncio.wait_for(probe(), timeout=CHECK_TIMEOUT)
        message = None if healthy else f"{name} check failed"
    except asyncio.TimeoutError:
        healthy = False
        message = f"{name} check timed out"
    except Exception as e:
        healthy = False
        message = str(e)
    latency = (time.monotonic() - start) * 1000
    return ComponentHealth(
        name=name,
        status=HealthStatus.HEALTHY if healthy else HealthStatus.UNHEALTHY,
        latency_ms=latency,
        message=message,
    )


async def check_all(request: Request) -> tuple[ComponentHealth, ComponentHealth]:
    state = request.app.state
    store_result, cache_result = await asyncio.gather(
        check_component("store", state.store.health_check),
        check_component("cache", state.redis.health_check),
    )
    return store_result, cache_result


@router.get("/health")
async def full_health(request: Request) -> JSONResponse:
    """Full health report for external checks.

    Returns 200 when all dependencies are healthy, 503 otherwise.
    """
    components = await check_all(request)
    all_healthy = all(c.status == HealthStatus.HEALTHY for c in components)
    overall = HealthStatus.HEALTHY if all_healthy else HealthStatus.UNHEALTHY
    return JSONResponse(
        content={
            "status": overall.value,
            "checks": {c.name: c.to_dict() for c in components},
        },
        status_code=200 if all_healthy else 503,
    )


@router.get("/health/live")
async def live() -> dict[str, str]:
    """Liveness probe.

    Returns OK if the process is running.
    """
    return {"status": "ok"}


@router.get("/health/ready")
async def ready(request: Request) -> JSONResponse:
    """Readiness probe.

    Returns 503 only when the document store is unreachable; a cache outage
    reports ``degraded`` because reads fall back to the store.
    """
    store_result, cache_result = await check_all(request)

    if store_result.status != HealthStatus.HEALTHY:
        overall = HealthStatus.UNHEALTHY
    elif cache_result.status != HealthStatus.HEALTHY:
        overall = HealthStatus.DEGRADED
    else:
        overall = HealthStatus.HEALTHY

    return JSONResponse(
        content={
            "status": overall.value,
            "components": [store_result.to_dict(), cache_result.to_dict()],
        },
        status_code=503 if overall == HealthStatus.UNHEALTHY else 200,
    )
