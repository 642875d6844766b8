"""Startup and shutdown of shared resources.

The lifespan owns the storage endpoint HTTP client, the grid store and the
workspace manager. All of them live on ``app.state`` for the dependencies in
``grid_builder.dependencies``.
"""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from grid_builder import __version__
from grid_builder.cache import get_cache
from grid_builder.config import Settings, get_settings
from grid_builder.logging_config import get_logger, log_with_context
from grid_builder.state_managers import StateManager, WorkspaceManager
from grid_builder.storage import InMemoryGridStore

logger = get_logger(__name__)


async def log_request(request: httpx.Request) -> None:
    """httpx hook: log each call to the storage endpoint."""
    request.extensions["grid_builder_started"] = time.perf_counter()
    log_with_context(
        logger,
        "debug",
        "Storage request",
        method=request.method,
        url=str(request.url),
        event_type="storage_request",
    )


async def log_response(response: httpx.Response) -> None:
    """httpx hook: log status and latency of each storage endpoint response."""
    started = response.request.extensions.get("grid_builder_started")
    elapsed_ms = round((time.perf_counter() - started) * 1000, 1) if started is not None else None
    log_with_context(
        logger,
        "info",
        "Storage response",
        method=response.request.method,
        url=str(response.request.url),
        status_code=response.status_code,
        elapsed_ms=elapsed_ms,
        event_type="storage_response",
    )


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Build the shared client for storage endpoint calls."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds, connect=5.0),
        limits=httpx.Limits(max_keepalive_connections=5, max_connections=10, keepalive_expiry=30.0),
        follow_redirects=True,
        event_hooks={"request": [log_request], "response": [log_response]},
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create shared resources on startup and release them on shutdown.

    Errors raised while the app runs are logged and re-raised; cleanup runs
    either way.
    """
    settings = get_settings()
    app.state.startup_time = time.time()
    app.state.request_count = 0

    log_with_context(
        logger,
        "info",
        "Starting Grid Builder",
        version=__version__,
        api_base_url=settings.api_base_url,
        event_type="app_startup",
    )

    client = create_http_client(settings)
    app.state.http_client = client

    app.state.grid_store = InMemoryGridStore()
    app.state.workspace_manager = WorkspaceManager(max_workspaces=settings.max_workspaces)
    managers: list[StateManager] = [app.state.grid_store, app.state.workspace_manager]
    for manager in managers:
        await manager.initialize()
    log_with_context(
        logger,
        "info",
        "Shared resources ready",
        state_managers=[type(manager).__name__ for manager in managers],
        event_type="app_ready",
    )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Grid Builder failed while running",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        for manager in reversed(managers):
            await manager.cleanup()
        await get_cache().clear()
        await client.aclose()
        log_with_context(
            logger,
            "info",
            "Grid Builder stopped",
            requests_served=app.state.request_count,
            event_type="app_shutdown",
        )
