"""Unit tests for the grid persistence client."""

from unittest.mock import MagicMock

import httpx
import pytest
from conftest import make_row

from grid_builder.exceptions import GridSaveException, GridValidationException
from grid_builder.models import Alignment, Row
from grid_builder.services.grid_persistence import (
    EMPTY_GRID_ERROR,
    MISSING_NAME_ERROR,
    map_alignment_to_template_id,
    save_grid,
    transform_rows_for_api,
    validate_grid,
)

GRIDS_URL = "http://storage.test/grids"


def grid_response(status_code=201, **kwargs):
    """Real httpx response bound to a POST /grids request."""
    return httpx.Response(status_code, request=httpx.Request("POST", GRIDS_URL), **kwargs)


# Validation


def test_validate_empty_grid():
    """Test a grid with no rows is invalid."""
    result = validate_grid([])

    assert result.is_valid is False
    assert result.errors == [EMPTY_GRID_ERROR]


def test_validate_valid_grid(sample_rows):
    """Test rows with products and alignments are valid."""
    result = validate_grid(sample_rows)

    assert result.is_valid is True
    assert result.errors == []


def test_validate_row_without_products():
    """Test an empty row is reported with its 1-based number."""
    result = validate_grid([Row(id="row-1", products=[])])

    assert result.is_valid is False
    assert result.errors == ["Row 1 has no products. All rows must have at least one product."]


def test_validate_collects_every_error():
    """Test every violation is reported, in row order."""
    rows = [
        make_row("row-1", "a"),
        Row(id="row-2", products=[], alignment=None),
        make_row("row-3", "b", alignment=None),
    ]

    result = validate_grid(rows)

    assert result.errors == [
        "Row 2 has no products. All rows must have at least one product.",
        "Row 2 has no template assigned. All rows must have a template.",
        "Row 3 has no template assigned. All rows must have a template.",
    ]


# Mapping


@pytest.mark.parametrize(
    ("alignment", "template_id"),
    [
        (Alignment.LEFT, "template_001"),
        (Alignment.CENTER, "template_002"),
        (Alignment.RIGHT, "template_003"),
        (None, "template_001"),
    ],
)
def test_map_alignment_to_template_id(alignment, template_id):
    """Test alignments map to their template ids."""
    assert map_alignment_to_template_id(alignment) == template_id


def test_transform_rows_for_api():
    """Test rows become template ids plus product ids."""
    rows = [make_row("row-1", "a", "b", alignment=Alignment.RIGHT), make_row("row-2", "c")]

    assert transform_rows_for_api(rows) == [
        {"id": "row-1", "templateId": "template_003", "products": ["a", "b"]},
        {"id": "row-2", "templateId": "template_001", "products": ["c"]},
    ]


# save_grid


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   "])
async def test_save_grid_requires_name(mock_http_client, mock_settings, sample_rows, name):
    """Test a blank name is rejected without calling the endpoint."""
    with pytest.raises(GridValidationException) as exc_info:
        await save_grid(mock_http_client, name, sample_rows, mock_settings)

    assert exc_info.value.errors == [MISSING_NAME_ERROR]
    mock_http_client.post.assert_not_called()


@pytest.mark.asyncio
async def test_save_grid_invalid_rows_not_sent(mock_http_client, mock_settings):
    """Test an invalid grid is reported and nothing is sent."""
    rows = [make_row("row-1", "a"), Row(id="row-2", products=[])]

    with pytest.raises(GridValidationException) as exc_info:
        await save_grid(mock_http_client, "My grid", rows, mock_settings)

    assert any("Row 2" in error for error in exc_info.value.errors)
    assert exc_info.value.status_code == 422
    mock_http_client.post.assert_not_called()


@pytest.mark.asyncio
async def test_save_grid_row_without_products_mentions_row_one(mock_http_client, mock_settings):
    """Test a lone empty row is reported as row 1."""
    with pytest.raises(GridValidationException) as exc_info:
        await save_grid(mock_http_client, "My grid", [Row(id="row-1", products=[])], mock_settings)

    assert "Row 1" in exc_info.value.message
    mock_http_client.post.assert_not_called()


@pytest.mark.asyncio
async def test_save_grid_success(mock_http_client, mock_settings):
    """Test a valid grid is posted and the stored grid returned."""
    rows = [make_row("row-1", "a", "b", alignment=Alignment.CENTER)]
    mock_response = MagicMock()
    mock_response.raise_for_status = MagicMock()
    mock_response.json = MagicMock(
        return_value={
            "id": "grid-1",
            "name": "Summer",
            "rows": [{"id": "row-1", "templateId": "template_002", "products": ["a", "b"]}],
        }
    )
    mock_http_client.post.return_value = mock_response

    grid = await save_grid(mock_http_client, "  Summer ", rows, mock_settings)

    assert grid.id == "grid-1"
    assert grid.rows[0].template_id == "template_002"
    mock_http_client.post.assert_called_once_with(
        GRIDS_URL,
        json={
            "name": "Summer",
            "rows": [{"id": "row-1", "templateId": "template_002", "products": ["a", "b"]}],
        },
        timeout=5.0,
    )


@pytest.mark.asyncio
async def test_save_grid_server_error_message(mock_http_client, mock_settings, sample_rows):
    """Test the endpoint's error message is surfaced."""
    mock_http_client.post.return_value = grid_response(
        400,
        json={"error": {"code": "INVALID_GRID", "message": "Invalid grid data. Required fields: name, rows"}},
    )

    with pytest.raises(GridSaveException) as exc_info:
        await save_grid(mock_http_client, "Summer", sample_rows, mock_settings)

    assert exc_info.value.message == "Invalid grid data. Required fields: name, rows"
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_save_grid_plain_string_error(mock_http_client, mock_settings, sample_rows):
    """Test a plain string error body is surfaced."""
    mock_http_client.post.return_value = grid_response(500, json={"error": "Storage unavailable"})

    with pytest.raises(GridSaveException) as exc_info:
        await save_grid(mock_http_client, "Summer", sample_rows, mock_settings)

    assert exc_info.value.message == "Storage unavailable"
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_save_grid_empty_error_body(mock_http_client, mock_settings, sample_rows):
    """Test an empty error body falls back to the status code."""
    mock_http_client.post.return_value = grid_response(503)

    with pytest.raises(GridSaveException) as exc_info:
        await save_grid(mock_http_client, "Summer", sample_rows, mock_settings)

    assert exc_info.value.message == "Grid storage responded with HTTP 503"


@pytest.mark.asyncio
async def test_save_grid_network_error(mock_http_client, mock_settings, sample_rows):
    """Test network failures become GridSaveException."""
    mock_http_client.post.side_effect = httpx.ConnectError("Connection refused")

    with pytest.raises(GridSaveException) as exc_info:
        await save_grid(mock_http_client, "Summer", sample_rows, mock_settings)

    assert exc_info.value.message.startswith("Failed to reach grid storage")
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_save_grid_malformed_response(mock_http_client, mock_settings, sample_rows):
    """Test an unexpected success body becomes GridSaveException."""
    mock_http_client.post.return_value = grid_response(201, json={"unexpected": True})

    with pytest.raises(GridSaveException) as exc_info:
        await save_grid(mock_http_client, "Summer", sample_rows, mock_settings)

    assert exc_info.value.details["error_type"] == "parsing_error"
