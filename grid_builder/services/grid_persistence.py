"""Grid persistence client: validate a grid and submit it to the storage endpoint."""

from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

from grid_builder.config import Settings, get_settings
from grid_builder.exceptions import GridSaveException, GridValidationException
from grid_builder.logging_config import get_logger, log_with_context
from grid_builder.models.catalog import Alignment
from grid_builder.models.grid import Grid, Row
from grid_builder.storage.seed_data import DEFAULT_TEMPLATE_ID, TEMPLATE_ID_BY_ALIGNMENT

MISSING_NAME_ERROR = "Please enter a name for your grid"
EMPTY_GRID_ERROR = "The grid must have at least one row to save"

logger = get_logger(__name__)


class ValidationResult(BaseModel):
    """Outcome of grid validation with every violation found."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)


def validate_grid(rows: Sequence[Row]) -> ValidationResult:
    """Check that the grid has rows and every row has products and an alignment.

    Row numbers in messages are 1-based.
    """
    if not rows:
        return ValidationResult(is_valid=False, errors=[EMPTY_GRID_ERROR])

    errors: list[str] = []
    for number, row in enumerate(rows, start=1):
        if not row.products:
            errors.append(f"Row {number} has no products. All rows must have at least one product.")
        if row.alignment is None:
            errors.append(f"Row {number} has no template assigned. All rows must have a template.")

    return ValidationResult(is_valid=not errors, errors=errors)


def map_alignment_to_template_id(alignment: Alignment | None) -> str:
    """Template id for an alignment; LEFT's template when unset."""
    if alignment is None:
        return DEFAULT_TEMPLATE_ID
    return TEMPLATE_ID_BY_ALIGNMENT.get(alignment, DEFAULT_TEMPLATE_ID)


def transform_rows_for_api(rows: Sequence[Row]) -> list[dict[str, Any]]:
    """Convert display rows to the storage endpoint's row format."""
    return [
        {
            "id": row.id,
            "templateId": map_alignment_to_template_id(row.alignment),
            "products": [product.id for product in row.products],
        }
        for row in rows
    ]


def _server_error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if body.get("detail"):
            return str(body["detail"])

    return response.text or f"Grid storage responded with HTTP {response.status_code}"


async def save_grid(
    client: httpx.AsyncClient,
    name: str,
    rows: Sequence[Row],
    settings: Settings | None = None,
) -> Grid:
    """Validate and save a grid.

    Nothing is sent when the name is blank or the grid is invalid.

    Args:
        client: Shared HTTP client
        name: Grid name
        rows: Rows to save
        settings: Settings instance (defaults to singleton)

    Returns:
        The grid as stored, with server assigned ids

    Raises:
        GridValidationException: If the name is blank or validation fails
        GridSaveException: If the storage endpoint is unreachable or rejects the grid
    """
    if settings is None:
        settings = get_settings()

    if not name or not name.strip():
        raise GridValidationException([MISSING_NAME_ERROR])

    validation = validate_grid(rows)
    if not validation.is_valid:
        raise GridValidationException(validation.errors)

    url = f"{settings.api_base_url}/grids"
    payload = {"name": name.strip(), "rows": transform_rows_for_api(rows)}

    try:
        response = await client.post(url, json=payload, timeout=settings.http_timeout_seconds)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        message = _server_error_message(e.response)
        log_with_context(
            logger,
            "warning",
            "Grid storage rejected grid",
            status_code=e.response.status_code,
            error=message,
            event_type="grid_save_rejected",
        )
        raise GridSaveException(
            message,
            status_code=e.response.status_code,
            details={"error_type": "http_error"},
        ) from e
    except httpx.HTTPError as e:
        raise GridSaveException(
            f"Failed to reach grid storage: {str(e)}",
            details={"error_type": "network_error"},
        ) from e

    try:
        return Grid.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise GridSaveException(
            f"Grid storage returned an unexpected response: {str(e)}",
            details={"error_type": "parsing_error"},
        ) from e
