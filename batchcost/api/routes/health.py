"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Request

from batchcost import __version__
from batchcost.application.dto.responses import ComponentHealthResponse, HealthResponse

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


def _reactor_status(request: Request) -> ComponentHealthResponse:
    runner = getattr(request.app.state, "reactor_runner", None)
    if runner is None:
        return ComponentHealthResponse(status="disabled")
    return ComponentHealthResponse(status="running" if runner.running else "stopped")


@router.get("", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Basic health check.

    Returns service status, uptime and whether the batch reactor runs.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        reactor=_reactor_status(request),
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    from batchcost.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        latency = (time.time() - start) * 1000
        db_status = ComponentHealthResponse(status="available", detail=f"{latency:.2f}ms")

    except Exception as e:
        db_status = ComponentHealthResponse(status="unavailable", detail=str(e))

    return HealthResponse(
        status="healthy" if db_status.status == "available" else "unhealthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )
