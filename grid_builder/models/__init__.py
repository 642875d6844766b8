"""Grid Builder models"""

from grid_builder.models.base_models import DetailedHealthResponse, ErrorResponse, HealthResponse
from grid_builder.models.catalog import Alignment, Price, Product, Template
from grid_builder.models.grid import Grid, GridRow, GridStats, Row

__all__ = [
    "Alignment",
    "DetailedHealthResponse",
    "ErrorResponse",
    "Grid",
    "GridRow",
    "GridStats",
    "HealthResponse",
    "Price",
    "Product",
    "Row",
    "Template",
]
