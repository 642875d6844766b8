"""Grid models: editable rows and the persisted grid form."""

import uuid

from pydantic import BaseModel, ConfigDict, Field

from grid_builder.models.catalog import Alignment, Product

MIN_PRODUCTS_PER_ROW = 1
MAX_PRODUCTS_PER_ROW = 3


def new_id() -> str:
    """Generate a fresh unique identifier."""
    return str(uuid.uuid4())


class Row(BaseModel):
    """A display row holding full products and an alignment.

    Rows built by the distributor or changed by the drag controllers always
    hold 1-3 products. The model itself accepts other lengths so that grid
    validation can report them.
    """

    id: str = Field(default_factory=new_id)
    products: list[Product] = Field(default_factory=list)
    alignment: Alignment | None = Alignment.LEFT


class GridRow(BaseModel):
    """A persisted row: template reference plus product ids."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    template_id: str = Field(..., alias="templateId")
    products: list[str]


class Grid(BaseModel):
    """A saved grid as stored by the storage endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    rows: list[GridRow]


class GridStats(BaseModel):
    """Display statistics for a grid being built."""

    total_products: int
    displayed_products: int
    row_count: int
    specified_row_count: int | None = None
    has_limited_products: bool
