"""Unit tests for the product and row drag controllers."""

from unittest.mock import MagicMock

from conftest import make_product, make_row

from grid_builder.services.drag_and_drop import ProductDragController, RowDragController


def ids(row):
    return [p.id for p in row.products]


def row_by_id(rows, row_id):
    return next(row for row in rows if row.id == row_id)


# ProductDragController Tests


def test_product_drag_start_and_end():
    """Test start records the drag and end resets it."""
    controller = ProductDragController()
    product = make_product("a")

    controller.start(product, "row-1")

    assert controller.state.is_dragging is True
    assert controller.state.dragged_product == product
    assert controller.state.source_row_id == "row-1"

    controller.end()

    assert controller.state.is_dragging is False
    assert controller.state.dragged_product is None
    assert controller.state.source_row_id is None


def test_reorder_within_row_to_end(sample_rows):
    """Test dropping the first product at position 3 moves it last."""
    callback = MagicMock()
    controller = ProductDragController(on_update_rows=callback)
    controller.start(sample_rows[0].products[0], "row-1")

    updated = controller.drop(sample_rows, "row-1", 3)

    assert ids(updated[0]) == ["b", "c", "a"]
    callback.assert_called_once_with(updated)
    assert controller.state.is_dragging is False


def test_reorder_within_row_to_front(sample_rows):
    """Test dropping the last product at position 0 moves it first."""
    controller = ProductDragController()
    controller.start(sample_rows[0].products[2], "row-1")

    updated = controller.drop(sample_rows, "row-1", 0)

    assert ids(updated[0]) == ["c", "a", "b"]


def test_reorder_to_same_position_is_noop(sample_rows):
    """Test dropping a product where it already is changes nothing."""
    callback = MagicMock()
    controller = ProductDragController(on_update_rows=callback)
    controller.start(sample_rows[0].products[1], "row-1")

    assert controller.drop(sample_rows, "row-1", 1) is None
    callback.assert_not_called()


def test_reorder_to_next_slot_is_noop(sample_rows):
    """Test dropping just after itself keeps the order."""
    controller = ProductDragController()
    controller.start(sample_rows[0].products[1], "row-1")

    assert controller.drop(sample_rows, "row-1", 2) is None


def test_same_row_without_position_is_noop(sample_rows):
    """Test dropping on the source row without a position changes nothing."""
    callback = MagicMock()
    controller = ProductDragController(on_update_rows=callback)
    controller.start(sample_rows[1].products[0], "row-2")

    assert controller.drop(sample_rows, "row-2") is None
    callback.assert_not_called()
    assert controller.state.is_dragging is False


def test_move_between_rows_appends(sample_rows):
    """Test moving a product to another row without a position appends it."""
    callback = MagicMock()
    controller = ProductDragController(on_update_rows=callback)
    controller.start(sample_rows[1].products[0], "row-2")

    updated = controller.drop(sample_rows, "row-3")

    assert ids(row_by_id(updated, "row-2")) == ["e"]
    assert ids(row_by_id(updated, "row-3")) == ["f", "d"]
    callback.assert_called_once_with(updated)


def test_move_between_rows_at_position(sample_rows):
    """Test moving a product to a position in another row."""
    controller = ProductDragController()
    controller.start(sample_rows[0].products[2], "row-1")

    updated = controller.drop(sample_rows, "row-3", 0)

    assert ids(row_by_id(updated, "row-1")) == ["a", "b"]
    assert ids(row_by_id(updated, "row-3")) == ["c", "f"]


def test_move_with_out_of_range_position_appends(sample_rows):
    """Test an out of range position falls back to appending."""
    controller = ProductDragController()
    controller.start(sample_rows[0].products[0], "row-1")

    updated = controller.drop(sample_rows, "row-2", 10)

    assert ids(row_by_id(updated, "row-2")) == ["d", "e", "a"]


def test_move_to_full_row_rejected(sample_rows):
    """Test a drop on a row holding three products is ignored and resets state."""
    callback = MagicMock()
    controller = ProductDragController(on_update_rows=callback)
    controller.start(sample_rows[1].products[0], "row-2")

    result = controller.drop(sample_rows, "row-1")

    assert result is None
    callback.assert_not_called()
    assert controller.state.is_dragging is False
    assert ids(sample_rows[0]) == ["a", "b", "c"]
    assert ids(sample_rows[1]) == ["d", "e"]


def test_move_emptying_source_row_rejected(sample_rows):
    """Test moving a row's only product away is ignored."""
    callback = MagicMock()
    controller = ProductDragController(on_update_rows=callback)
    controller.start(sample_rows[2].products[0], "row-3")

    assert controller.drop(sample_rows, "row-2") is None
    callback.assert_not_called()


def test_drop_without_drag_is_noop(sample_rows):
    """Test dropping when nothing is dragged changes nothing."""
    controller = ProductDragController()

    assert controller.drop(sample_rows, "row-2") is None


def test_drop_on_unknown_row_is_noop(sample_rows):
    """Test dropping on a row that does not exist changes nothing."""
    controller = ProductDragController()
    controller.start(sample_rows[1].products[0], "row-2")

    assert controller.drop(sample_rows, "missing", 0) is None
    assert controller.state.is_dragging is False


def test_drop_does_not_mutate_input(sample_rows):
    """Test drop returns new rows and leaves the input untouched."""
    controller = ProductDragController()
    controller.start(sample_rows[0].products[0], "row-1")

    updated = controller.drop(sample_rows, "row-2", 0)

    assert updated is not sample_rows
    assert ids(sample_rows[0]) == ["a", "b", "c"]
    assert ids(sample_rows[1]) == ["d", "e"]


def test_rows_stay_within_limits_after_moves(sample_rows):
    """Test a chain of moves never breaks the 1-3 products per row rule."""
    controller = ProductDragController()
    rows = sample_rows

    moves = [("a", "row-1", "row-2"), ("b", "row-1", "row-2"), ("f", "row-3", "row-1"), ("d", "row-2", "row-3")]
    for product_id, source, target in moves:
        source_row = row_by_id(rows, source)
        product = next((p for p in source_row.products if p.id == product_id), None)
        if product is None:
            continue
        controller.start(product, source)
        rows = controller.drop(rows, target) or rows

    assert all(1 <= len(row.products) <= 3 for row in rows)
    assert sorted(p.id for row in rows for p in row.products) == ["a", "b", "c", "d", "e", "f"]


# RowDragController Tests


def test_row_drag_start_and_end():
    """Test start records the dragged row and end resets it."""
    controller = RowDragController()

    controller.start("row-1")
    assert controller.state.is_dragging is True
    assert controller.state.source_row_id == "row-1"

    controller.end()
    assert controller.state.is_dragging is False
    assert controller.state.source_row_id is None


def test_row_moves_down():
    """Test dropping the first row on the last moves it last."""
    rows = [make_row("A", "a"), make_row("B", "b"), make_row("C", "c")]
    callback = MagicMock()
    controller = RowDragController(on_update_rows=callback)
    controller.start("A")

    updated = controller.drop(rows, "C")

    assert [row.id for row in updated] == ["B", "C", "A"]
    callback.assert_called_once_with(updated)
    assert controller.state.is_dragging is False


def test_row_moves_up():
    """Test dropping the last row on the first moves it first."""
    rows = [make_row("A", "a"), make_row("B", "b"), make_row("C", "c")]
    controller = RowDragController()
    controller.start("C")

    updated = controller.drop(rows, "A")

    assert [row.id for row in updated] == ["C", "A", "B"]


def test_row_drop_on_itself_is_noop():
    """Test dropping a row on itself changes nothing."""
    rows = [make_row("A", "a"), make_row("B", "b")]
    callback = MagicMock()
    controller = RowDragController(on_update_rows=callback)
    controller.start("A")

    assert controller.drop(rows, "A") is None
    callback.assert_not_called()
    assert controller.state.is_dragging is False


def test_row_drop_on_unknown_row_is_noop():
    """Test dropping on an unknown row changes nothing."""
    rows = [make_row("A", "a"), make_row("B", "b")]
    controller = RowDragController()
    controller.start("A")

    assert controller.drop(rows, "Z") is None


def test_row_drop_keeps_row_contents():
    """Test reordering rows keeps each row's products and alignment."""
    rows = [make_row("A", "a", "b"), make_row("B", "c")]
    controller = RowDragController()
    controller.start("B")

    updated = controller.drop(rows, "A")

    assert [ids(row) for row in updated] == [["c"], ["a", "b"]]
