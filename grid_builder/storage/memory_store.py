"""In-memory grid store.

Data lives for the lifetime of the process only. Swap in another
GridStoreProtocol implementation for durable storage.
"""

import asyncio
from collections.abc import Iterable

from grid_builder.logging_config import get_logger, log_with_context
from grid_builder.models.catalog import Product, Template
from grid_builder.models.grid import Grid
from grid_builder.state_managers import StateManager
from grid_builder.storage.seed_data import SEED_PRODUCTS, SEED_TEMPLATES

logger = get_logger(__name__)


class InMemoryGridStore(StateManager):
    """Products, templates and saved grids held in process memory."""

    def __init__(
        self,
        products: Iterable[Product] = SEED_PRODUCTS,
        templates: Iterable[Template] = SEED_TEMPLATES,
    ):
        self._seed_products = tuple(products)
        self._seed_templates = tuple(templates)
        self._products: list[Product] = list(self._seed_products)
        self._templates: list[Template] = list(self._seed_templates)
        self._grids: list[Grid] = []
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Reset the catalog to its seed contents."""
        async with self._lock:
            self._products = list(self._seed_products)
            self._templates = list(self._seed_templates)
        log_with_context(
            logger,
            "info",
            "Grid store initialized",
            products=len(self._products),
            templates=len(self._templates),
            event_type="store_ready",
        )

    async def cleanup(self) -> None:
        """Drop saved grids."""
        async with self._lock:
            self._grids.clear()

    async def get_products(self, product_ids: list[str]) -> list[Product]:
        wanted = set(product_ids)
        async with self._lock:
            return [product for product in self._products if product.id in wanted]

    async def list_templates(self) -> list[Template]:
        async with self._lock:
            return list(self._templates)

    async def list_grids(self) -> list[Grid]:
        async with self._lock:
            return list(self._grids)

    async def add_grid(self, grid: Grid) -> Grid:
        async with self._lock:
            self._grids.append(grid)
            return grid
