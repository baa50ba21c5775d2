"""
Verse API: Health Check Route
==============================

What:  GET /health lists the translations that currently have a live data source.
How:   Reads the DataSourcePool snapshot; performs no database I/O, so it
       stays cheap for frequent load-balancer probes.

The list reflects the Active Pool, never the full static registry: a
translation whose file was missing at startup does not appear.
"""

from fastapi import APIRouter, Request

from verse_api.schemas.verse import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    pool = request.app.state.pool
    return HealthResponse(status="ok", translations=pool.available())
