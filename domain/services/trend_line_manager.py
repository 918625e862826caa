"""
Trend-line tracking for Point-and-Figure charts.

Keeps the full history of 45-degree trend lines and at most one active line.
The chart notifies the manager every time a new column is appended; the
manager then tests the active line against that column, retires it when
broken, and anchors a new line at the most recent significant swing.
"""

from __future__ import annotations

import logging
from typing import Sequence

from domain.entities.column import Column
from domain.entities.trend_line import TrendLine
from domain.value_objects.chart_types import ColumnType
from domain.value_objects.trend import TrendBias, TrendLineType

logger = logging.getLogger(__name__)


class TrendLineManager:
    """Owns every trend line drawn on a chart and tracks the active one by index."""

    # Earlier columns checked when deciding whether an extreme is a local one
    SIGNIFICANCE_LOOKBACK = 3

    def __init__(self, box_size: float = 0.0) -> None:
        self.box_size = box_size
        self._trend_lines: list[TrendLine] = []
        self._active_index: int | None = None

    @property
    def trend_lines(self) -> list[TrendLine]:
        """Every line ever drawn, oldest first, broken ones included."""
        return list(self._trend_lines)

    @property
    def active_trend_line(self) -> TrendLine | None:
        if self._active_index is None:
            return None
        return self._trend_lines[self._active_index]

    @property
    def active_line_count(self) -> int:
        return sum(1 for line in self._trend_lines if line.is_active)

    def clear(self) -> None:
        self._trend_lines.clear()
        self._active_index = None

    def update_trend_lines(
        self,
        columns: Sequence[Column],
        new_column_index: int,
        box_size: float | None = None,
    ) -> None:
        """React to a newly completed column."""
        if box_size is not None:
            self.box_size = box_size
        self.check_trend_line_break(columns, new_column_index)
        self.process_new_column(columns, new_column_index)

    def check_trend_line_break(self, columns: Sequence[Column], column_index: int) -> None:
        """Retire the active line if the column closes beyond it, otherwise test it for a touch."""
        line = self.active_trend_line
        if line is None or not line.is_active:
            return
        if column_index < 0 or column_index >= len(columns):
            return

        column = columns[column_index]
        price = column.lowest_price if line.is_support else column.highest_price

        if line.is_broken(column_index, price):
            self._retire_active_line(column_index, price)
            return

        if line.test(column_index, price):
            logger.debug("%s touched at column %d (touches=%d)", line.line_type.value, column_index, line.touch_count)
        if column_index > line.start_point.column_index:
            line.update_end_point(column_index, line.price_at_column(column_index))

    def process_new_column(self, columns: Sequence[Column], column_index: int) -> None:
        """Open a new line on a direction change when none is active or the opposing one is broken."""
        if column_index < 1 or column_index >= len(columns):
            return

        current = columns[column_index]
        previous = columns[column_index - 1]

        if current.column_type is ColumnType.X and previous.column_type is ColumnType.O:
            self._replace_line_on_reversal(
                columns,
                column_index,
                opposing=TrendLineType.BEARISH_RESISTANCE,
                breaking_price=current.highest_price,
                new_type=TrendLineType.BULLISH_SUPPORT,
            )
        elif current.column_type is ColumnType.O and previous.column_type is ColumnType.X:
            self._replace_line_on_reversal(
                columns,
                column_index,
                opposing=TrendLineType.BULLISH_SUPPORT,
                breaking_price=current.lowest_price,
                new_type=TrendLineType.BEARISH_RESISTANCE,
            )

    def _replace_line_on_reversal(
        self,
        columns: Sequence[Column],
        column_index: int,
        opposing: TrendLineType,
        breaking_price: float,
        new_type: TrendLineType,
    ) -> None:
        line = self.active_trend_line
        if line is not None:
            if line.line_type is not opposing or not line.is_broken(column_index, breaking_price):
                return
            self._retire_active_line(column_index, breaking_price)

        if new_type is TrendLineType.BULLISH_SUPPORT:
            anchor_index = self.find_significant_low(columns, column_index - 1)
        else:
            anchor_index = self.find_significant_high(columns, column_index - 1)

        if anchor_index is not None:
            self._open_line(new_type, columns[anchor_index], anchor_index)

    def _open_line(self, line_type: TrendLineType, column: Column, column_index: int) -> TrendLine:
        if line_type is TrendLineType.BULLISH_SUPPORT:
            price = column.lowest_price
        else:
            price = column.highest_price
        box_index = next(
            (idx for idx, box in enumerate(column.boxes) if box.price == price),
            0,
        )

        line = TrendLine(line_type, column_index, price, box_index, self.box_size)
        self._trend_lines.append(line)
        self._active_index = len(self._trend_lines) - 1
        logger.info(
            "New %s line anchored at column %d price %s", line_type.value, column_index, price
        )
        return line

    def _retire_active_line(self, column_index: int, price: float) -> None:
        line = self.active_trend_line
        if line is None:
            return
        line.update_end_point(column_index, line.price_at_column(column_index))
        line.deactivate()
        self._active_index = None
        logger.info("%s line broken at column %d by price %s", line.line_type.value, column_index, price)

    @classmethod
    def is_significant_low(cls, columns: Sequence[Column], column_index: int) -> bool:
        """
        An O column whose low undercuts the preceding X column's high and is
        not undercut by any of the few columns before it.
        """
        if column_index < 1:
            return False

        column = columns[column_index]
        if column.column_type is not ColumnType.O:
            return False

        previous = columns[column_index - 1]
        if previous.column_type is not ColumnType.X:
            return False

        current_low = column.lowest_price
        if current_low >= previous.highest_price:
            return False

        lookback = min(cls.SIGNIFICANCE_LOOKBACK, column_index)
        return all(
            columns[column_index - offset].lowest_price >= current_low
            for offset in range(1, lookback + 1)
        )

    @classmethod
    def is_significant_high(cls, columns: Sequence[Column], column_index: int) -> bool:
        """Mirror image of is_significant_low for X columns."""
        if column_index < 1:
            return False

        column = columns[column_index]
        if column.column_type is not ColumnType.X:
            return False

        previous = columns[column_index - 1]
        if previous.column_type is not ColumnType.O:
            return False

        current_high = column.highest_price
        if current_high <= previous.lowest_price:
            return False

        lookback = min(cls.SIGNIFICANCE_LOOKBACK, column_index)
        return all(
            columns[column_index - offset].highest_price <= current_high
            for offset in range(1, lookback + 1)
        )

    @classmethod
    def find_significant_low(cls, columns: Sequence[Column], from_column: int) -> int | None:
        """Scan backwards from from_column; None when no column qualifies."""
        for index in range(min(from_column, len(columns) - 1), -1, -1):
            if cls.is_significant_low(columns, index):
                return index
        return None

    @classmethod
    def find_significant_high(cls, columns: Sequence[Column], from_column: int) -> int | None:
        for index in range(min(from_column, len(columns) - 1), -1, -1):
            if cls.is_significant_high(columns, index):
                return index
        return None

    def is_above_bullish_support(self, column_index: int, price: float) -> bool:
        line = self.active_trend_line
        if line is None or not line.is_active or line.line_type is not TrendLineType.BULLISH_SUPPORT:
            return False
        return price > line.price_at_column(column_index)

    def is_below_bearish_resistance(self, column_index: int, price: float) -> bool:
        line = self.active_trend_line
        if line is None or not line.is_active or line.line_type is not TrendLineType.BEARISH_RESISTANCE:
            return False
        return price < line.price_at_column(column_index)

    def has_bullish_bias(self) -> bool:
        return self.bias is TrendBias.BULLISH

    def has_bearish_bias(self) -> bool:
        return self.bias is TrendBias.BEARISH

    @property
    def bias(self) -> TrendBias:
        line = self.active_trend_line
        if line is None or not line.is_active:
            return TrendBias.none()
        if line.line_type is TrendLineType.BULLISH_SUPPORT:
            return TrendBias.BULLISH
        return TrendBias.BEARISH

    def describe(self) -> str:
        line = self.active_trend_line
        active = line.describe() if line is not None else "None"
        bias = {TrendBias.BULLISH: "Bullish", TrendBias.BEARISH: "Bearish"}.get(self.bias, "None")
        return (
            f"P&F Trendline Manager - Total Lines: {len(self._trend_lines)}\n"
            f"Active: {active}\n"
            f"Bias: {bias}\n"
        )
