from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from application.policies.chronology_policy import ChronologyPolicy
from domain.entities.price_bar import PriceBar
from domain.indicators.pnf import PnFChartSettings, PnFIndicator, PnFSignal
from domain.services.point_and_figure_chart import PointAndFigureChart


@dataclass(frozen=True)
class ChartBuildResult:
    """A populated chart together with its summary signal."""

    chart: PointAndFigureChart
    signal: PnFSignal


class BuildPnFChart:
    """Use case for building a Point-and-Figure chart from price bars."""

    def __init__(
        self,
        chart_settings: PnFChartSettings,
        chronology_policy: ChronologyPolicy | None = None,
    ) -> None:
        self.chart_settings = chart_settings
        self.chronology_policy = chronology_policy or ChronologyPolicy()

    def execute(self, bars: Sequence[PriceBar]) -> ChartBuildResult:
        """Build a fresh chart (bars may arrive newest first; they are fed oldest first)."""
        ordered = self.chronology_policy.ensure_ordered(bars)

        indicator = PnFIndicator(settings=self.chart_settings)
        indicator.reset()
        signal = indicator.analyze(ordered)
        return ChartBuildResult(chart=indicator.chart, signal=signal)
