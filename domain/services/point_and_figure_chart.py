"""
Point-and-Figure chart construction engine.

Consumes price observations one at a time and grows a sequence of X/O
columns. Each observation is resolved against the chart's current state
(derived from the last column) into exactly one action:

    state       | reversal fires            | no reversal
    ------------+---------------------------+-------------------------------
    NO_COLUMN   | -                         | open first X column
    UP          | open O column             | extend upward on a new high
    DOWN        | open X column             | extend downward on a new low
    MIXED       | open X or O column        | extend either way

With a reversal count of 1 every new column is MIXED. Whenever a column is
appended the trend-line manager is notified with the full column history.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from domain.entities.column import Column
from domain.entities.price_bar import PriceBar
from domain.exceptions.errors import ChartConfigurationError
from domain.services.box_size_policy import BoxSizePolicy, box_count_between
from domain.services.trend_line_manager import TrendLineManager
from domain.value_objects.chart_settings import PnFChartSettings
from domain.value_objects.chart_types import (
    BoxSizeMode,
    BoxType,
    ChartState,
    ColumnType,
    ConstructionType,
)
from domain.value_objects.month_marker import is_month_marker, marker_for_month, month_changed
from domain.value_objects.trend import TrendBias

logger = logging.getLogger(__name__)

# Tolerances for de-duplicating prices across columns and for boundary comparisons
_PRICE_EPSILON = 0.00001
_BOUNDARY_FRACTION = 1e-9


class PointAndFigureChart:
    """
    A Point-and-Figure chart and its trend-line manager.

    Single-writer: observations must be fed in chronological order from
    one thread.
    """

    def __init__(
        self,
        settings: PnFChartSettings | None = None,
        trend_line_manager: TrendLineManager | None = None,
    ) -> None:
        self._settings = settings or PnFChartSettings()
        self._construction_type = self._settings.construction_type
        self._reversal_count = self._settings.reversal_count
        self._box_policy = BoxSizePolicy(self._settings.box_size_mode, self._settings.box_size)
        self._columns: list[Column] = []
        self._trend_lines = trend_line_manager or TrendLineManager(self._settings.box_size)
        self._last_processed: datetime | None = None

    # -- configuration -------------------------------------------------

    @property
    def settings(self) -> PnFChartSettings:
        return self._settings

    @property
    def construction_type(self) -> ConstructionType:
        return self._construction_type

    @construction_type.setter
    def construction_type(self, value: ConstructionType) -> None:
        self._construction_type = value

    @property
    def box_size_mode(self) -> BoxSizeMode:
        return self._box_policy.mode

    @property
    def box_size(self) -> float:
        """Configured box size, or the most recently computed one under AUTO mode."""
        return self._box_policy.box_size

    @property
    def reversal_count(self) -> int:
        return self._reversal_count

    @reversal_count.setter
    def reversal_count(self, value: int) -> None:
        if value < 1:
            raise ChartConfigurationError("reversal_count must be at least 1.")
        self._reversal_count = value

    @property
    def trend_line_manager(self) -> TrendLineManager:
        return self._trend_lines

    def calculate_box_size(self, price: float) -> float:
        return self._box_policy.calculate_box_size(price)

    def round_to_box_size(self, price: float, round_up: bool) -> float:
        return self._box_policy.round_to_box_size(price, round_up)

    # -- construction --------------------------------------------------

    def add_data(self, high: float, low: float, close: float, timestamp: datetime) -> bool:
        """
        Feed one high/low/close observation.

        Returns True once the observation has been processed, whether it moved
        the chart or was absorbed without a box change.
        """
        return self._process(high, low, close, timestamp)

    def add_price(self, price: float, timestamp: datetime) -> bool:
        """Feed a single traded price."""
        return self._process(price, price, price, timestamp)

    def add_bar(self, bar: PriceBar) -> bool:
        return self._process(bar.high, bar.low, bar.close, bar.timestamp)

    def _process(self, high: float, low: float, close: float, timestamp: datetime) -> bool:
        if self._trend_lines is None:
            return False

        marker = self._month_marker_for(timestamp)
        if self._construction_type is ConstructionType.HIGH_LOW:
            updated = self._apply(high=high, low=low, reference=high, marker=marker)
        else:
            updated = self._apply(high=close, low=close, reference=close, marker=marker)
        if not updated:
            logger.debug("Observation at %s absorbed without box changes", timestamp)
        self._last_processed = timestamp
        return True

    def _month_marker_for(self, timestamp: datetime) -> str:
        if month_changed(self._last_processed, timestamp):
            return marker_for_month(timestamp.month)
        return ""

    def _apply(self, high: float, low: float, reference: float, marker: str) -> bool:
        box_size = self._box_policy.calculate_box_size(reference)
        state = self.state

        if state is ChartState.NO_COLUMN:
            return self._open_first_column(reference, box_size, marker)

        last = self._columns[-1]
        reversal = self._detect_reversal(last, high, low)
        if reversal is not None:
            box_type, price = reversal
            return self._open_reversal_column(last, box_type, price, box_size, marker)

        return self._extend_column(last, high, low, box_size, marker)

    def _open_first_column(self, price: float, box_size: float, marker: str) -> bool:
        column = Column(ColumnType.X)
        column.add_box(BoxSizePolicy.round_to_multiple(price, box_size, round_up=False), BoxType.X, marker)
        self._columns.append(column)
        logger.debug("Opened first column at %s", column.lowest_price)
        return True

    def _detect_reversal(self, column: Column, high: float, low: float) -> tuple[BoxType, float] | None:
        """
        Return the new box type and the price that triggered it, or None.

        Each price is tested with the box size implied by that price.
        """
        if column.column_type is ColumnType.O:
            if self.is_reversal(column, high) is BoxType.X:
                return BoxType.X, high
            return None

        if column.column_type is ColumnType.X:
            if self.is_reversal(column, low) is BoxType.O:
                return BoxType.O, low
            return None

        # Mixed: the high is tested first
        if self.is_reversal(column, high) is BoxType.X:
            return BoxType.X, high
        if self.is_reversal(column, low) is BoxType.O:
            return BoxType.O, low
        return None

    def is_reversal(self, column: Column, price: float, box_size: float | None = None) -> BoxType | None:
        """
        Box type of the column a reversal at this price would open, or None.

        Up columns reverse at highest - reversal_count * box, down columns at
        lowest + reversal_count * box. Mixed columns reverse one box beyond
        either extreme.
        """
        if column.box_count == 0:
            return None
        if box_size is None:
            box_size = self._box_policy.box_size_for(price)

        highest = column.highest_price
        lowest = column.lowest_price
        threshold = self._reversal_count * box_size
        # Absorbs float error so a price exactly on the reversal level counts
        tolerance = box_size * _BOUNDARY_FRACTION

        if column.column_type is ColumnType.X:
            return BoxType.O if price <= highest - threshold + tolerance else None
        if column.column_type is ColumnType.O:
            return BoxType.X if price >= lowest + threshold - tolerance else None
        if self._reversal_count == 1:
            if price > highest + box_size + tolerance:
                return BoxType.X
            if price < lowest - box_size - tolerance:
                return BoxType.O
        return None

    def _open_reversal_column(
        self, last: Column, box_type: BoxType, price: float, box_size: float, marker: str
    ) -> bool:
        if self._reversal_count == 1:
            column_type = ColumnType.MIXED
        else:
            column_type = ColumnType.for_box_type(box_type)
        column = Column(column_type)

        if box_type is BoxType.X:
            start = last.lowest_price + box_size
            target = BoxSizePolicy.round_to_multiple(price, box_size, round_up=True)
        else:
            start = last.highest_price - box_size
            target = BoxSizePolicy.round_to_multiple(price, box_size, round_up=False)

        self._fill(column, start, target, box_size, box_type.is_rising, lambda _: box_type, marker)
        self._columns.append(column)
        logger.debug(
            "Reversal to %s column #%d (%s..%s)",
            column_type.value,
            len(self._columns) - 1,
            column.lowest_price,
            column.highest_price,
        )

        assert self._trend_lines is not None, "chart has no trend-line manager"
        self._trend_lines.update_trend_lines(self._columns, len(self._columns) - 1, box_size=box_size)
        return True

    def _extend_column(self, column: Column, high: float, low: float, box_size: float, marker: str) -> bool:
        column_type = column.column_type
        mixed = column_type is ColumnType.MIXED

        if column_type in (ColumnType.X, ColumnType.MIXED) and high > column.highest_price:
            lowest = column.lowest_price
            added = self._fill(
                column,
                column.highest_price + box_size,
                BoxSizePolicy.round_to_multiple(high, box_size, round_up=True),
                box_size,
                True,
                (lambda p: BoxType.X if p > lowest else BoxType.O) if mixed else (lambda _: BoxType.X),
                marker,
            )
        elif column_type in (ColumnType.O, ColumnType.MIXED) and low < column.lowest_price:
            highest = column.highest_price
            added = self._fill(
                column,
                column.lowest_price - box_size,
                BoxSizePolicy.round_to_multiple(low, box_size, round_up=False),
                box_size,
                False,
                (lambda p: BoxType.O if p < highest else BoxType.X) if mixed else (lambda _: BoxType.O),
                marker,
            )
        else:
            added = 0

        if added:
            logger.debug("Extended column #%d by %d boxes", len(self._columns) - 1, added)
        return added > 0

    @staticmethod
    def _fill(
        column: Column,
        start: float,
        target: float,
        box_size: float,
        rising: bool,
        box_type_for: Callable[[float], BoxType],
        marker: str,
    ) -> int:
        """
        Add boxes from start to target inclusive.

        Prices are computed as start +/- k * box_size from an integer step
        count so long fills do not accumulate floating-point drift. The month
        marker goes on the first box actually added.
        """
        if (rising and target < start) or (not rising and target > start):
            if abs(target - start) > box_size * _BOUNDARY_FRACTION:
                return 0

        direction = 1 if rising else -1
        added = 0
        for step in range(box_count_between(start, target, box_size)):
            price = start + direction * step * box_size
            if column.add_box(price, box_type_for(price), marker if added == 0 else ""):
                added += 1
        return added

    # -- queries -------------------------------------------------------

    @property
    def state(self) -> ChartState:
        if not self._columns:
            return ChartState.NO_COLUMN
        return ChartState.from_column_type(self._columns[-1].column_type)

    @property
    def column_count(self) -> int:
        return len(self._columns)

    @property
    def columns(self) -> tuple[Column, ...]:
        return tuple(self._columns)

    @property
    def last_column(self) -> Column | None:
        return self._columns[-1] if self._columns else None

    def column(self, index: int) -> Column:
        if not 0 <= index < len(self._columns):
            raise IndexError(f"column index {index} out of range (0..{len(self._columns) - 1})")
        return self._columns[index]

    def _indices_of(self, column_type: ColumnType) -> list[int]:
        return [idx for idx, column in enumerate(self._columns) if column.column_type is column_type]

    def x_column_indices(self) -> list[int]:
        return self._indices_of(ColumnType.X)

    def o_column_indices(self) -> list[int]:
        return self._indices_of(ColumnType.O)

    def mixed_column_indices(self) -> list[int]:
        return self._indices_of(ColumnType.MIXED)

    @property
    def x_column_count(self) -> int:
        return len(self.x_column_indices())

    @property
    def o_column_count(self) -> int:
        return len(self.o_column_indices())

    @property
    def mixed_column_count(self) -> int:
        return len(self.mixed_column_indices())

    def all_prices(self) -> list[float]:
        """Every distinct box price on the chart, highest first."""
        candidates = sorted((box.price for column in self._columns for box in column), reverse=True)
        prices: list[float] = []
        for price in candidates:
            if not prices or prices[-1] - price >= _PRICE_EPSILON:
                prices.append(price)
        return prices

    @staticmethod
    def is_month_marker(text: str) -> bool:
        return is_month_marker(text)

    # -- bias ----------------------------------------------------------

    @property
    def bias(self) -> TrendBias:
        return self._trend_lines.bias

    def has_bullish_bias(self) -> bool:
        return self._trend_lines.has_bullish_bias()

    def has_bearish_bias(self) -> bool:
        return self._trend_lines.has_bearish_bias()

    def should_take_bullish_signals(self) -> bool:
        return self.bias is not TrendBias.BEARISH

    def should_take_bearish_signals(self) -> bool:
        return self.bias is not TrendBias.BULLISH

    def is_above_bullish_support(self, price: float) -> bool:
        return self._trend_lines.is_above_bullish_support(len(self._columns) - 1, price)

    def is_below_bearish_resistance(self, price: float) -> bool:
        return self._trend_lines.is_below_bearish_resistance(len(self._columns) - 1, price)

    # -- lifecycle -----------------------------------------------------

    def clear(self) -> None:
        """Drop every column and trend line; configuration is kept."""
        self._columns.clear()
        self._trend_lines.clear()
        self._last_processed = None

    def describe(self) -> str:
        construction = "Closing Price" if self._construction_type is ConstructionType.CLOSING_PRICE else "High/Low"
        lines = [
            "Point & Figure Chart",
            f"Construction: {construction}, Box Size: {self.box_size_mode.value.title()} "
            f"({self.box_size:.5f}), Reversal: {self._reversal_count}",
            f"Columns: {len(self._columns)}",
            f"Trend Bias: {self.bias.value}",
            "",
        ]
        for idx, column in enumerate(self._columns, start=1):
            lines.append(f"Column {idx}:")
            lines.append(column.describe())
            lines.append("")
        lines.append(self._trend_lines.describe())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"<PointAndFigureChart(construction={self._construction_type.value}, "
            f"mode={self.box_size_mode.value}, box={self.box_size}, "
            f"reversal={self._reversal_count}, columns={len(self._columns)})>"
        )
