"""Unit tests for grid URL parameter parsing."""

import pytest

from grid_builder.services.grid_params import (
    INVALID_ROWS_ERROR,
    MISSING_PRODUCT_IDS_ERROR,
    parse_grid_params,
    parse_product_ids,
)


def test_parse_product_ids_strips_and_drops_blanks():
    """Test ids are trimmed and empty entries removed."""
    assert parse_product_ids(" prod_001, prod_002 ,,prod_003,") == ["prod_001", "prod_002", "prod_003"]


@pytest.mark.parametrize("raw", [None, "", " , ,"])
def test_parse_product_ids_empty(raw):
    """Test missing or blank id lists give None."""
    assert parse_product_ids(raw) is None


def test_valid_params():
    """Test product ids and a positive row count."""
    params = parse_grid_params("prod_001,prod_002", "3")

    assert params.product_ids == ["prod_001", "prod_002"]
    assert params.row_count == 3
    assert params.error is None


def test_rows_are_optional():
    """Test no rows parameter means automatic layout."""
    params = parse_grid_params("prod_001", None)

    assert params.row_count is None
    assert params.error is None


def test_missing_product_ids():
    """Test the suggested URL format is shown when ids are missing."""
    params = parse_grid_params(None, None)

    assert params.product_ids is None
    assert params.error == MISSING_PRODUCT_IDS_ERROR
    assert "?productIds=prod_001,prod_002,prod_003&rows=3" in params.error


@pytest.mark.parametrize("rows", ["abc", "0", "-2", "2.5", ""])
def test_invalid_rows(rows):
    """Test non-numeric or non-positive rows are rejected."""
    params = parse_grid_params("prod_001", rows)

    assert params.row_count is None
    assert params.error == INVALID_ROWS_ERROR


def test_invalid_rows_wins_over_missing_ids():
    """Test the rows error is reported when both parameters are bad."""
    params = parse_grid_params(None, "abc")

    assert params.error == INVALID_ROWS_ERROR
