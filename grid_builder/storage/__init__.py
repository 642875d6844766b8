"""Storage backends for the products, templates and grids endpoints."""

from grid_builder.storage.memory_store import InMemoryGridStore

__all__ = ["InMemoryGridStore"]
