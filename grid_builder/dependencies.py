"""FastAPI dependencies for dependency injection."""

import httpx
from fastapi import Request

from grid_builder.protocols import GridStoreProtocol
from grid_builder.state_managers import WorkspaceManager


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared AsyncClient instance.

    Raises:
        RuntimeError: If HTTP client is not initialized.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    if client is None:
        raise RuntimeError("HTTP client not initialized. This should never happen.")

    return client


async def get_grid_store(request: Request) -> GridStoreProtocol:
    """
    Get the grid store from app state.

    Raises:
        RuntimeError: If the store is not initialized.
    """
    store: GridStoreProtocol | None = getattr(request.app.state, "grid_store", None)

    if store is None:
        raise RuntimeError("Grid store not initialized.")

    return store


async def get_workspace_manager(request: Request) -> WorkspaceManager:
    """
    Get the workspace manager from app state.

    Raises:
        RuntimeError: If the workspace manager is not initialized.
    """
    manager: WorkspaceManager | None = getattr(request.app.state, "workspace_manager", None)

    if manager is None:
        raise RuntimeError("Workspace manager not initialized.")

    return manager
