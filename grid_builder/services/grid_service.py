"""Storage endpoint operations: product lookup and grid creation."""

from typing import Any

from grid_builder.exceptions import InvalidGridException, InvalidProductQueryException
from grid_builder.logging_config import get_logger, log_with_context
from grid_builder.models.catalog import Product
from grid_builder.models.grid import MAX_PRODUCTS_PER_ROW, MIN_PRODUCTS_PER_ROW, Grid, GridRow, new_id
from grid_builder.protocols import GridStoreProtocol
from grid_builder.services.grid_params import parse_product_ids

INVALID_GRID_MESSAGE = "Invalid grid data. Required fields: name, rows"
INVALID_ROW_MESSAGE = "Invalid row data. Each row must have a templateId and 1-3 products"

logger = get_logger(__name__)


async def get_products(store: GridStoreProtocol, ids: str | None) -> list[Product]:
    """Look up products for a comma-separated id list.

    Raises:
        InvalidProductQueryException: If ids is missing or holds no ids
    """
    product_ids = parse_product_ids(ids)
    if not product_ids:
        raise InvalidProductQueryException(details={"ids": ids})
    return await store.get_products(product_ids)


def _row_is_valid(row: Any) -> bool:
    if not isinstance(row, dict):
        return False
    template_id = row.get("templateId")
    products = row.get("products")
    if not isinstance(template_id, str) or not template_id:
        return False
    if not isinstance(products, list):
        return False
    if not MIN_PRODUCTS_PER_ROW <= len(products) <= MAX_PRODUCTS_PER_ROW:
        return False
    return all(isinstance(product_id, str) and product_id for product_id in products)


def build_grid(payload: Any) -> Grid:
    """Validate a POST /grids body and build the grid to store.

    The grid always gets a fresh id; rows keep a client supplied id and get a
    fresh one otherwise.

    Raises:
        InvalidGridException: If name or rows are missing, or a row is malformed
    """
    if not isinstance(payload, dict):
        raise InvalidGridException(INVALID_GRID_MESSAGE)

    name = payload.get("name")
    rows = payload.get("rows")
    if not isinstance(name, str) or not name.strip() or not isinstance(rows, list):
        raise InvalidGridException(INVALID_GRID_MESSAGE)

    for index, row in enumerate(rows):
        if not _row_is_valid(row):
            raise InvalidGridException(INVALID_ROW_MESSAGE, details={"row_index": index})

    return Grid(
        id=new_id(),
        name=name,
        rows=[
            GridRow(
                id=str(row["id"]) if row.get("id") else new_id(),
                template_id=row["templateId"],
                products=list(row["products"]),
            )
            for row in rows
        ],
    )


async def create_grid(store: GridStoreProtocol, payload: Any) -> Grid:
    """Validate and append a new grid to the store."""
    grid = build_grid(payload)
    saved = await store.add_grid(grid)
    log_with_context(
        logger,
        "info",
        "Grid saved",
        grid_id=saved.id,
        grid_name=saved.name,
        rows=len(saved.rows),
        event_type="grid_saved",
    )
    return saved
