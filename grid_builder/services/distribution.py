"""Row distribution: partition a flat product list into display rows."""

from collections.abc import Sequence

from grid_builder.models.catalog import Alignment, Product
from grid_builder.models.grid import MAX_PRODUCTS_PER_ROW, MIN_PRODUCTS_PER_ROW, GridStats, Row


def _make_row(products: Sequence[Product]) -> Row:
    return Row(products=list(products), alignment=Alignment.LEFT)


def distribute_products_into_rows(products: Sequence[Product], row_count: int | None = None) -> list[Row]:
    """Distribute products into rows of 1-3 products each.

    Without ``row_count`` products are chunked in order, three per row, with a
    possibly shorter last row.

    With ``row_count`` the products are spread as evenly as possible over
    exactly that many rows, earlier rows taking the remainder. Products that
    do not fit (more than ``row_count * 3``) are left out. When there are
    fewer products than requested rows, one row per product is created and
    the result is shorter than ``row_count``.

    Every row gets a fresh id and LEFT alignment.

    Args:
        products: Products in display order
        row_count: Requested number of rows, or None for automatic layout

    Returns:
        Ordered list of rows

    Raises:
        ValueError: If row_count is given and not positive
    """
    if row_count is None:
        return [
            _make_row(products[start : start + MAX_PRODUCTS_PER_ROW])
            for start in range(0, len(products), MAX_PRODUCTS_PER_ROW)
        ]

    if row_count < 1:
        raise ValueError(f"row_count must be a positive integer, got {row_count}")

    usable = min(len(products), row_count * MAX_PRODUCTS_PER_ROW)

    if usable < row_count:
        return [_make_row([product]) for product in products[: min(row_count, len(products))]]

    base_per_row, remainder = divmod(usable, row_count)
    rows: list[Row] = []
    index = 0
    for row_index in range(row_count):
        in_this_row = base_per_row + (1 if row_index < remainder else 0)
        in_this_row = min(in_this_row, MAX_PRODUCTS_PER_ROW)
        if in_this_row < MIN_PRODUCTS_PER_ROW:
            continue
        rows.append(_make_row(products[index : index + in_this_row]))
        index += in_this_row

    return rows


def displayed_product_count(rows: Sequence[Row]) -> int:
    """Total number of products placed in rows."""
    return sum(len(row.products) for row in rows)


def summarize_grid(products: Sequence[Product], rows: Sequence[Row], row_count: int | None = None) -> GridStats:
    """Build display statistics for a distributed grid.

    Args:
        products: All fetched products
        rows: Current rows
        row_count: Row count requested in the URL, if any

    Returns:
        GridStats including whether some products were left out
    """
    displayed = displayed_product_count(rows)
    return GridStats(
        total_products=len(products),
        displayed_products=displayed,
        row_count=len(rows),
        specified_row_count=row_count,
        has_limited_products=displayed < len(products),
    )
