from domain.entities.column import Box, Column
from domain.value_objects.chart_types import BoxType, ColumnType


def test_duplicate_box_is_rejected():
    column = Column(ColumnType.X)

    assert column.add_box(100.0, BoxType.X) is True
    assert column.add_box(100.0, BoxType.X) is False
    assert column.box_count == 1


def test_extremes_follow_the_boxes_held():
    column = Column(ColumnType.O)
    assert column.highest_price == 0.0
    assert column.lowest_price == 0.0

    for price in (104.0, 103.0, 102.0):
        column.add_box(price, BoxType.O)

    assert column.highest_price == 104.0
    assert column.lowest_price == 102.0

    assert column.remove_box(104.0) is True
    assert column.highest_price == 103.0
    assert column.remove_box(104.0) is False


def test_prices_are_normalized_before_comparison():
    column = Column()
    column.add_box(100.1 + 0.2, BoxType.X)

    assert column.has_box(100.3)
    assert column.add_box(100.3, BoxType.X) is False


def test_markers_replace_the_box_symbol():
    column = Column()
    column.add_box(100.0, BoxType.X, marker="1")
    column.add_box(101.0, BoxType.X)

    assert column.get_box_marker(100.0) == "1"
    assert column.get_box_marker(101.0) == ""
    assert column.get_box_marker(150.0) == ""
    assert column.box_at(0).render() == "1"
    assert column.box_at(1).render() == "X"

    assert column.set_box_marker(101.0, "A") is True
    assert column.get_box(101.0).has_marker
    assert column.set_box_marker(150.0, "A") is False


def test_boxes_keep_insertion_order_and_copy_on_read():
    column = Column(ColumnType.O)
    for price in (103.0, 102.0, 101.0):
        column.add_box(price, BoxType.O)

    boxes = column.boxes
    boxes.clear()

    assert [box.price for box in column] == [103.0, 102.0, 101.0]
    assert column.box_count == 3

    column.clear()
    assert column.box_count == 0


def test_box_string_includes_price_and_symbol():
    assert str(Box(price=100.5, box_type=BoxType.O)) == "100.500000O"


def test_extremes_recover_after_removing_an_inner_and_outer_box():
    column = Column(ColumnType.X)
    for price in (100.0, 101.0, 102.0):
        column.add_box(price, BoxType.X)

    column.remove_box(101.0)
    assert (column.lowest_price, column.highest_price) == (100.0, 102.0)

    column.remove_box(100.0)
    assert (column.lowest_price, column.highest_price) == (102.0, 102.0)

    column.remove_box(102.0)
    assert (column.lowest_price, column.highest_price) == (0.0, 0.0)
    assert column.add_box(100.0, BoxType.X) is True
