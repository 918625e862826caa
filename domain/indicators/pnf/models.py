"""
Value objects for the Point-and-Figure indicator.

Contains a read-only summary of a chart and its trend lines after a batch
of bars has been processed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from domain.value_objects.chart_types import ColumnType
from domain.value_objects.trend import TrendBias, TrendLineType


@dataclass(frozen=True)
class TrendLineSnapshot:
    """Frozen copy of a trend line's state."""

    line_type: TrendLineType
    start_column: int
    start_price: float
    end_column: int
    end_price: float
    box_size: float
    is_active: bool
    touch_count: int


@dataclass(frozen=True)
class PnFSignal:
    """
    Result of feeding bars into a Point-and-Figure chart.

    Summarizes column structure and the bias implied by the active trend line.
    """

    column_count: int = 0
    x_column_count: int = 0
    o_column_count: int = 0
    mixed_column_count: int = 0
    bias: TrendBias = TrendBias.NONE
    active_trend_line: TrendLineSnapshot | None = None
    total_trend_lines: int = 0
    last_column_type: ColumnType | None = None
    bars_processed: int = 0
    analysis_period_start: datetime | None = None
    analysis_period_end: datetime | None = None

    @property
    def is_bullish(self) -> bool:
        return self.bias == TrendBias.BULLISH

    @property
    def is_bearish(self) -> bool:
        return self.bias == TrendBias.BEARISH

    @property
    def has_columns(self) -> bool:
        return self.column_count > 0
