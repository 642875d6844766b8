"""Drag-and-drop controllers for products and rows.

Controllers are explicit state machines: ``start`` records what is being
dragged, ``drop`` applies the move to a row list, ``end`` resets. They do not
know about any UI event system; the views translate browser events into
these calls.
"""

from collections.abc import Callable, Sequence

from pydantic import BaseModel

from grid_builder.logging_config import get_logger, log_with_context
from grid_builder.models.catalog import Product
from grid_builder.models.grid import MAX_PRODUCTS_PER_ROW, MIN_PRODUCTS_PER_ROW, Row

logger = get_logger(__name__)

RowsCallback = Callable[[list[Row]], None]


class ProductDragState(BaseModel):
    """What product is being dragged and from which row."""

    is_dragging: bool = False
    dragged_product: Product | None = None
    source_row_id: str | None = None


class RowDragState(BaseModel):
    """Which row is being dragged."""

    is_dragging: bool = False
    source_row_id: str | None = None


def _find_row_index(rows: Sequence[Row], row_id: str) -> int:
    for index, row in enumerate(rows):
        if row.id == row_id:
            return index
    return -1


def _find_product_index(products: Sequence[Product], product_id: str) -> int:
    for index, product in enumerate(products):
        if product.id == product_id:
            return index
    return -1


class ProductDragController:
    """Moves a product between rows or reorders it within its row.

    Rows never end up with fewer than 1 or more than 3 products; a drop that
    would break that is ignored.
    """

    def __init__(self, on_update_rows: RowsCallback | None = None):
        """Initialize the controller.

        Args:
            on_update_rows: Called with the full updated row list after a successful drop
        """
        self._on_update_rows = on_update_rows
        self.state = ProductDragState()

    def start(self, product: Product, row_id: str) -> None:
        """Begin dragging ``product`` out of row ``row_id``.

        Starting while another drag is active replaces the tracked drag.
        """
        self.state = ProductDragState(is_dragging=True, dragged_product=product, source_row_id=row_id)

    def end(self) -> None:
        """Reset the drag state."""
        self.state = ProductDragState()

    def drop(self, rows: Sequence[Row], target_row_id: str, target_position: int | None = None) -> list[Row] | None:
        """Drop the dragged product onto a row.

        Args:
            rows: Current rows
            target_row_id: Row receiving the product
            target_position: Index in the target row, or None to append

        Returns:
            The updated rows, or None if nothing changed
        """
        try:
            updated = self._apply(rows, target_row_id, target_position)
            if updated is not None and self._on_update_rows is not None:
                self._on_update_rows(updated)
            return updated
        finally:
            self.end()

    def _apply(self, rows: Sequence[Row], target_row_id: str, target_position: int | None) -> list[Row] | None:
        product = self.state.dragged_product
        source_row_id = self.state.source_row_id
        if not self.state.is_dragging or product is None or source_row_id is None:
            return None

        if target_row_id == source_row_id and target_position is None:
            return None

        source_index = _find_row_index(rows, source_row_id)
        target_index = _find_row_index(rows, target_row_id)
        if source_index == -1 or target_index == -1:
            return None

        if source_index == target_index:
            return self._reorder_within_row(rows, source_index, product, target_position)
        return self._move_between_rows(rows, source_index, target_index, product, target_position)

    def _reorder_within_row(
        self,
        rows: Sequence[Row],
        row_index: int,
        product: Product,
        target_position: int | None,
    ) -> list[Row] | None:
        row = rows[row_index]
        current_index = _find_product_index(row.products, product.id)
        if current_index == -1 or target_position is None or target_position < 0:
            return None
        if target_position == current_index:
            return None

        products = list(row.products)
        moved = products.pop(current_index)
        # Removal shifts later slots left by one
        insert_at = target_position - 1 if target_position > current_index else target_position
        insert_at = min(insert_at, len(products))
        products.insert(insert_at, moved)

        if [p.id for p in products] == [p.id for p in row.products]:
            return None

        updated = list(rows)
        updated[row_index] = row.model_copy(update={"products": products})
        log_with_context(
            logger,
            "debug",
            "Product reordered within row",
            product_id=product.id,
            row_id=row.id,
            position=insert_at,
            event_type="product_reorder",
        )
        return updated

    def _move_between_rows(
        self,
        rows: Sequence[Row],
        source_index: int,
        target_index: int,
        product: Product,
        target_position: int | None,
    ) -> list[Row] | None:
        source = rows[source_index]
        target = rows[target_index]

        if len(target.products) >= MAX_PRODUCTS_PER_ROW:
            log_with_context(
                logger,
                "debug",
                "Drop rejected, target row is full",
                product_id=product.id,
                target_row_id=target.id,
                event_type="product_drop_rejected",
            )
            return None

        source_products = [p for p in source.products if p.id != product.id]
        if len(source_products) == len(source.products):
            return None
        if len(source_products) < MIN_PRODUCTS_PER_ROW:
            log_with_context(
                logger,
                "debug",
                "Drop rejected, source row would be empty",
                product_id=product.id,
                source_row_id=source.id,
                event_type="product_drop_rejected",
            )
            return None

        target_products = list(target.products)
        if target_position is not None and 0 <= target_position <= len(target_products):
            target_products.insert(target_position, product)
        else:
            target_products.append(product)

        updated = list(rows)
        updated[source_index] = source.model_copy(update={"products": source_products})
        updated[target_index] = target.model_copy(update={"products": target_products})
        log_with_context(
            logger,
            "debug",
            "Product moved between rows",
            product_id=product.id,
            source_row_id=source.id,
            target_row_id=target.id,
            event_type="product_move",
        )
        return updated


class RowDragController:
    """Reorders whole rows."""

    def __init__(self, on_update_rows: RowsCallback | None = None):
        self._on_update_rows = on_update_rows
        self.state = RowDragState()

    def start(self, row_id: str) -> None:
        """Begin dragging row ``row_id``."""
        self.state = RowDragState(is_dragging=True, source_row_id=row_id)

    def end(self) -> None:
        """Reset the drag state."""
        self.state = RowDragState()

    def drop(self, rows: Sequence[Row], target_row_id: str) -> list[Row] | None:
        """Move the dragged row to the position of ``target_row_id``.

        Returns:
            The reordered rows, or None if nothing changed
        """
        try:
            updated = self._apply(rows, target_row_id)
            if updated is not None and self._on_update_rows is not None:
                self._on_update_rows(updated)
            return updated
        finally:
            self.end()

    def _apply(self, rows: Sequence[Row], target_row_id: str) -> list[Row] | None:
        source_row_id = self.state.source_row_id
        if not self.state.is_dragging or source_row_id is None or source_row_id == target_row_id:
            return None

        source_index = _find_row_index(rows, source_row_id)
        target_index = _find_row_index(rows, target_row_id)
        if source_index == -1 or target_index == -1:
            return None

        updated = list(rows)
        moved = updated.pop(source_index)
        updated.insert(target_index, moved)
        log_with_context(
            logger,
            "debug",
            "Row reordered",
            row_id=source_row_id,
            from_index=source_index,
            to_index=target_index,
            event_type="row_reorder",
        )
        return updated
