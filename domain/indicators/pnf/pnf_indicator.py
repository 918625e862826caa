"""
Point-and-Figure indicator.

Wraps a PointAndFigureChart so it can be driven like any other indicator:
bars go in, a frozen summary of the column structure and trend bias comes out.
"""

from __future__ import annotations

from typing import Sequence

from domain.entities.price_bar import PriceBar
from domain.entities.trend_line import TrendLine
from domain.indicators.base import Indicator
from domain.indicators.pnf.models import PnFSignal, TrendLineSnapshot
from domain.services.point_and_figure_chart import PointAndFigureChart
from domain.value_objects.chart_settings import PnFChartSettings


def snapshot_trend_line(line: TrendLine) -> TrendLineSnapshot:
    return TrendLineSnapshot(
        line_type=line.line_type,
        start_column=line.start_point.column_index,
        start_price=line.start_point.price,
        end_column=line.end_point.column_index,
        end_price=line.end_point.price,
        box_size=line.box_size,
        is_active=line.is_active,
        touch_count=line.touch_count,
    )


class PnFIndicator(Indicator[PnFSignal]):
    """
    Point-and-Figure indicator.

    The chart accumulates across calls to ``analyze`` so bars can be fed
    incrementally; call ``reset`` to start over with the same settings.
    """

    def __init__(self, settings: PnFChartSettings | None = None) -> None:
        self._settings = settings or PnFChartSettings()
        self._chart = PointAndFigureChart(self._settings)
        self._bars_processed = 0
        self._first_bar: PriceBar | None = None
        self._last_bar: PriceBar | None = None

    @property
    def name(self) -> str:
        return "PnFIndicator"

    @property
    def chart(self) -> PointAndFigureChart:
        return self._chart

    def reset(self) -> None:
        """Reset the indicator state."""
        self._chart.clear()
        self._bars_processed = 0
        self._first_bar = None
        self._last_bar = None

    def analyze(self, bars: Sequence[PriceBar]) -> PnFSignal:
        """
        Feed bars into the chart and summarize it.

        Args:
            bars: Price bars, oldest first.

        Returns:
            PnFSignal describing the chart after the last bar.
        """
        for bar in bars:
            self._chart.add_bar(bar)
            if self._first_bar is None:
                self._first_bar = bar
            self._last_bar = bar
            self._bars_processed += 1

        chart = self._chart
        manager = chart.trend_line_manager
        active = manager.active_trend_line
        last_column = chart.last_column

        return PnFSignal(
            column_count=chart.column_count,
            x_column_count=chart.x_column_count,
            o_column_count=chart.o_column_count,
            mixed_column_count=chart.mixed_column_count,
            bias=chart.bias,
            active_trend_line=snapshot_trend_line(active) if active is not None else None,
            total_trend_lines=len(manager.trend_lines),
            last_column_type=last_column.column_type if last_column is not None else None,
            bars_processed=self._bars_processed,
            analysis_period_start=self._first_bar.timestamp if self._first_bar else None,
            analysis_period_end=self._last_bar.timestamp if self._last_bar else None,
        )
