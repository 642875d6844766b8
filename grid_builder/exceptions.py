"""Custom exceptions for Grid Builder with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    GRID_BUILDER_ERROR = "GRID_BUILDER_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Storage endpoint errors
    INVALID_GRID = "INVALID_GRID"
    INVALID_PRODUCT_QUERY = "INVALID_PRODUCT_QUERY"

    # Grid builder client errors
    GRID_VALIDATION_ERROR = "GRID_VALIDATION_ERROR"
    GRID_SAVE_ERROR = "GRID_SAVE_ERROR"
    PRODUCT_FETCH_ERROR = "PRODUCT_FETCH_ERROR"

    # Workspace errors
    WORKSPACE_NOT_FOUND = "WORKSPACE_NOT_FOUND"
    ROW_NOT_FOUND = "ROW_NOT_FOUND"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"


class GridBuilderException(Exception):
    """Base exception for grid builder errors with HTTP status code support.

    All custom exceptions should inherit from this class to ensure
    consistent error handling across the application.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.GRID_BUILDER_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize grid builder exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class InvalidGridException(GridBuilderException):
    """Grid payload rejected by the storage endpoint."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.INVALID_GRID,
            status_code=400,
            details=details,
        )


class InvalidProductQueryException(GridBuilderException):
    """Product lookup called without usable ids."""

    def __init__(self, message: str = "Missing required parameter: ids", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.INVALID_PRODUCT_QUERY,
            status_code=400,
            details=details,
        )


class GridValidationException(GridBuilderException):
    """Grid failed client-side validation before saving.

    ``errors`` holds every violation found, in row order.
    """

    def __init__(self, errors: list[str], message: str | None = None):
        self.errors = list(errors)
        super().__init__(
            message or ". ".join(self.errors),
            code=ErrorCode.GRID_VALIDATION_ERROR,
            status_code=422,
            details={"errors": self.errors},
        )


class GridSaveException(GridBuilderException):
    """Saving a grid to the storage endpoint failed (network or HTTP error)."""

    def __init__(self, message: str, status_code: int = 502, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.GRID_SAVE_ERROR,
            status_code=status_code,
            details=details,
        )


class ProductFetchException(GridBuilderException):
    """Fetching products from the storage endpoint failed."""

    def __init__(self, message: str = "Failed to load products", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.PRODUCT_FETCH_ERROR,
            status_code=502,
            details=details,
        )


class WorkspaceNotFoundException(GridBuilderException):
    """No grid workspace with the requested id."""

    def __init__(self, workspace_id: str):
        super().__init__(
            f"Workspace {workspace_id} not found",
            code=ErrorCode.WORKSPACE_NOT_FOUND,
            status_code=404,
            details={"workspace_id": workspace_id},
        )


class RowNotFoundException(GridBuilderException):
    """No row with the requested id in the workspace."""

    def __init__(self, row_id: str):
        super().__init__(
            f"Row {row_id} not found",
            code=ErrorCode.ROW_NOT_FOUND,
            status_code=404,
            details={"row_id": row_id},
        )


class ProductNotFoundException(GridBuilderException):
    """Product is not placed in the given row."""

    def __init__(self, product_id: str, row_id: str):
        super().__init__(
            f"Product {product_id} not found in row {row_id}",
            code=ErrorCode.PRODUCT_NOT_FOUND,
            status_code=404,
            details={"product_id": product_id, "row_id": row_id},
        )
