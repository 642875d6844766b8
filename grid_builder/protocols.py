"""Protocol definitions for dependency injection."""

from typing import Protocol

from grid_builder.models.catalog import Product, Template
from grid_builder.models.grid import Grid


class GridStoreProtocol(Protocol):
    """Storage behind the products, templates and grids endpoints.

    Request handlers depend on this interface only, so the bundled in-memory
    store can be swapped for a persistent one.
    """

    async def get_products(self, product_ids: list[str]) -> list[Product]:
        """Return the catalog products whose id is in ``product_ids``.

        Unknown ids are skipped. Order follows the catalog.
        """
        ...

    async def list_templates(self) -> list[Template]:
        """Return all alignment templates."""
        ...

    async def list_grids(self) -> list[Grid]:
        """Return saved grids in creation order."""
        ...

    async def add_grid(self, grid: Grid) -> Grid:
        """Append a grid and return it."""
        ...
