"""Parsing of the grid builder URL contract (?productIds=...&rows=N)."""

from pydantic import BaseModel

MISSING_PRODUCT_IDS_ERROR = (
    "No product IDs specified in URL. Suggested format: ?productIds=prod_001,prod_002,prod_003&rows=3"
)
INVALID_ROWS_ERROR = "Invalid row parameter. Use a positive number."


class GridParams(BaseModel):
    """Parsed URL parameters and the error to show, if any."""

    product_ids: list[str] | None = None
    row_count: int | None = None
    error: str | None = None


def parse_product_ids(raw: str | None) -> list[str] | None:
    """Split a comma-separated id list, dropping blanks."""
    if raw is None:
        return None
    ids = [part.strip() for part in raw.split(",")]
    ids = [part for part in ids if part]
    return ids or None


def parse_grid_params(product_ids: str | None, rows: str | None) -> GridParams:
    """Parse the raw ``productIds`` and ``rows`` query values.

    A bad ``rows`` value wins over a missing product id list when choosing
    the error message.
    """
    ids = parse_product_ids(product_ids)
    error = None if ids else MISSING_PRODUCT_IDS_ERROR

    row_count: int | None = None
    if rows is not None:
        try:
            parsed = int(rows.strip())
        except ValueError:
            parsed = 0
        if parsed <= 0:
            error = INVALID_ROWS_ERROR
        else:
            row_count = parsed

    return GridParams(product_ids=ids, row_count=row_count, error=error)
