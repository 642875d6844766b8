"""State managers for handling application-wide mutable state.

This module provides coroutine-safe state management using asyncio.Lock.
All state managers inherit from StateManager ABC.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Sequence

from grid_builder.exceptions import WorkspaceNotFoundException
from grid_builder.logging_config import get_logger, log_with_context
from grid_builder.models.catalog import Product
from grid_builder.services.workspace import GridWorkspace

logger = get_logger(__name__)

DEFAULT_MAX_WORKSPACES = 100


class StateManager(ABC):
    """Base class for all state managers.

    State managers provide coroutine-safe access to mutable application state.
    All subclasses must implement lifecycle methods.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the state manager (called during app startup)."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup resources (called during app shutdown)."""
        pass


class WorkspaceManager(StateManager):
    """Registry of grid workspaces, one per page load.

    Workspaces live in memory until the page discards them, the registry
    evicts them to stay within ``max_workspaces``, or the app shuts down.
    """

    def __init__(self, max_workspaces: int = DEFAULT_MAX_WORKSPACES):
        """Initialize the workspace manager.

        Args:
            max_workspaces: Upper bound on live workspaces; the oldest are evicted past it
        """
        if max_workspaces < 1:
            raise ValueError("max_workspaces must be at least 1")
        self.max_workspaces = max_workspaces
        self._workspaces: dict[str, GridWorkspace] = {}
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Initialize the workspace manager."""
        # No initialization needed for now
        pass

    async def cleanup(self) -> None:
        """Drop all workspaces."""
        async with self._lock:
            self._workspaces.clear()

    async def create(self, products: Sequence[Product], row_count: int | None = None) -> GridWorkspace:
        """Create a workspace with products distributed into rows.

        Args:
            products: Fetched products
            row_count: Requested row count, if any

        Returns:
            The new workspace
        """
        workspace = GridWorkspace(products, row_count)
        async with self._lock:
            self._workspaces[workspace.id] = workspace
            evicted = []
            # Dicts keep insertion order, so the first key is the oldest workspace
            while len(self._workspaces) > self.max_workspaces:
                oldest_id = next(iter(self._workspaces))
                del self._workspaces[oldest_id]
                evicted.append(oldest_id)
        log_with_context(
            logger,
            "info",
            "Workspace created",
            workspace_id=workspace.id,
            products=len(workspace.products),
            rows=len(workspace.rows),
            event_type="workspace_created",
        )
        if evicted:
            log_with_context(
                logger,
                "info",
                "Evicted oldest workspaces",
                workspace_ids=evicted,
                max_workspaces=self.max_workspaces,
                event_type="workspace_evicted",
            )
        return workspace

    async def get(self, workspace_id: str) -> GridWorkspace:
        """Get a workspace by id.

        Raises:
            WorkspaceNotFoundException: If the id is unknown
        """
        async with self._lock:
            workspace = self._workspaces.get(workspace_id)
        if workspace is None:
            raise WorkspaceNotFoundException(workspace_id)
        return workspace

    async def discard(self, workspace_id: str) -> bool:
        """Forget a workspace.

        Returns:
            True if the workspace existed, False for unknown ids
        """
        async with self._lock:
            discarded = self._workspaces.pop(workspace_id, None) is not None
        if discarded:
            log_with_context(
                logger,
                "info",
                "Workspace discarded",
                workspace_id=workspace_id,
                event_type="workspace_discarded",
            )
        return discarded

    async def count(self) -> int:
        async with self._lock:
            return len(self._workspaces)
