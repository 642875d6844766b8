"""Grid workspace: one browser session's grid being built."""

from collections.abc import Sequence

from grid_builder.exceptions import ProductNotFoundException, RowNotFoundException
from grid_builder.models.catalog import Alignment, Product
from grid_builder.models.grid import GridStats, Row, new_id
from grid_builder.services.distribution import distribute_products_into_rows, displayed_product_count, summarize_grid
from grid_builder.services.drag_and_drop import ProductDragController, RowDragController
from grid_builder.services.zoom import GridZoom


class GridWorkspace:
    """Rows, drag controllers and zoom for one grid.

    Both drag controllers write their results back through ``update_rows``.
    """

    def __init__(
        self,
        products: Sequence[Product],
        row_count: int | None = None,
        workspace_id: str | None = None,
    ):
        self.id = workspace_id or new_id()
        self.products: list[Product] = list(products)
        self.row_count = row_count
        self.rows: list[Row] = distribute_products_into_rows(self.products, row_count) if self.products else []
        self.product_drag = ProductDragController(on_update_rows=self.update_rows)
        self.row_drag = RowDragController(on_update_rows=self.update_rows)
        self.zoom = GridZoom(min_zoom=0.5, max_zoom=1.5, zoom_step=0.1)
        self.saved_grid_id: str | None = None

    def update_rows(self, rows: list[Row]) -> None:
        self.rows = list(rows)

    def get_row(self, row_id: str) -> Row:
        for row in self.rows:
            if row.id == row_id:
                return row
        raise RowNotFoundException(row_id)

    def get_product(self, row_id: str, product_id: str) -> Product:
        """Find a product placed in the given row."""
        for product in self.get_row(row_id).products:
            if product.id == product_id:
                return product
        raise ProductNotFoundException(product_id, row_id)

    def update_row_alignment(self, row_id: str, alignment: Alignment) -> Row:
        """Change one row's alignment.

        Raises:
            RowNotFoundException: If no row has ``row_id``
        """
        self.get_row(row_id)
        self.rows = [row.model_copy(update={"alignment": alignment}) if row.id == row_id else row for row in self.rows]
        return self.get_row(row_id)

    @property
    def displayed_product_count(self) -> int:
        return displayed_product_count(self.rows)

    @property
    def has_limited_products(self) -> bool:
        return self.displayed_product_count < len(self.products)

    def stats(self) -> GridStats:
        return summarize_grid(self.products, self.rows, self.row_count)
