from __future__ import annotations

from domain.value_objects.trend import TrendLinePoint, TrendLineType


class TrendLine:
    """
    A 45-degree Point-and-Figure trend line.

    The line rises (support) or falls (resistance) by one box per column from
    its anchor. Once deactivated its touch statistics are frozen.
    """

    def __init__(
        self,
        line_type: TrendLineType,
        start_column: int,
        start_price: float,
        start_box_index: int,
        box_size: float,
    ) -> None:
        self.line_type = line_type
        self.start_point = TrendLinePoint(
            column_index=start_column, price=start_price, box_index=start_box_index
        )
        self.end_point = self.start_point
        self.box_size = box_size
        self.is_active = True
        self.was_touched = False
        self.touch_count = 0

    @property
    def is_support(self) -> bool:
        return self.line_type is TrendLineType.BULLISH_SUPPORT

    def price_at_column(self, column_index: int) -> float:
        """Projected price at a column; 0.0 before the anchor column."""
        if column_index < self.start_point.column_index:
            return 0.0

        offset = (column_index - self.start_point.column_index) * self.box_size
        if self.is_support:
            return self.start_point.price + offset
        return self.start_point.price - offset

    def update_end_point(self, column_index: int, price: float, box_index: int = 0) -> None:
        self.end_point = TrendLinePoint(column_index=column_index, price=price, box_index=box_index)

    def deactivate(self) -> None:
        self.is_active = False

    def is_broken(self, column_index: int, price: float) -> bool:
        """True when the price closes more than one box beyond the projected line."""
        if not self.is_active or column_index <= self.start_point.column_index:
            return False

        line_price = self.price_at_column(column_index)
        if self.is_support:
            return price < line_price - self.box_size
        return price > line_price + self.box_size

    def test(self, column_index: int, price: float) -> bool:
        """Record a touch when the price comes within half a box of the line."""
        if not self.is_active or column_index <= self.start_point.column_index:
            return False

        if abs(price - self.price_at_column(column_index)) < self.box_size * 0.5:
            self.was_touched = True
            self.touch_count += 1
            return True
        return False

    def describe(self) -> str:
        return (
            f"{self.line_type.label} Line: Start(Col:{self.start_point.column_index}, "
            f"Price:{self.start_point.price:.5f}) Active:{'Yes' if self.is_active else 'No'} "
            f"Touched:{self.touch_count} times"
        )

    def __repr__(self) -> str:
        return (
            f"<TrendLine(type={self.line_type.value}, start={self.start_point.column_index}, "
            f"price={self.start_point.price}, active={self.is_active})>"
        )
