"""Health endpoints."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from grid_builder import __version__
from grid_builder.cache import get_cache
from grid_builder.dependencies import get_grid_store, get_workspace_manager
from grid_builder.models import DetailedHealthResponse, HealthResponse
from grid_builder.protocols import GridStoreProtocol
from grid_builder.state_managers import WorkspaceManager

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness check for container healthchecks and monitoring.

    For dependency checks, use `/health/ready`.
    """
    return HealthResponse(status="ok", version=__version__)


@router.get(
    "/health/ready",
    response_model=DetailedHealthResponse,
    responses={503: {"model": DetailedHealthResponse, "description": "A dependency is not ready"}},
)
async def readiness_check(
    request: Request,
    store: GridStoreProtocol = Depends(get_grid_store),
    manager: WorkspaceManager = Depends(get_workspace_manager),
):
    """Readiness probe: shared client open and grid store seeded.

    **Returns:**
    - 200: ready to serve the builder and the storage endpoint
    - 503: a dependency failed its check
    """
    checks: dict[str, str] = {}

    client = getattr(request.app.state, "http_client", None)
    checks["http_client"] = "ok" if client is not None and not client.is_closed else "not_initialized"

    templates = await store.list_templates()
    checks["grid_store"] = "ok" if templates else "no_templates"

    healthy = all(result == "ok" for result in checks.values())
    cache = get_cache()
    content = DetailedHealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=__version__,
        timestamp=datetime.now(UTC),
        checks=checks,
        stats={
            "uptime_seconds": int(time.time() - request.app.state.startup_time),
            "requests": request.app.state.request_count,
            "workspaces": await manager.count(),
            "saved_grids": len(await store.list_grids()),
            "cache_entries": len(cache),
        },
    )
    return JSONResponse(status_code=200 if healthy else 503, content=content.model_dump(mode="json"))
