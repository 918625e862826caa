from __future__ import annotations

from typing import Sequence

from application.use_cases.build_pnf_chart import BuildPnFChart, ChartBuildResult
from application.use_cases.load_price_history import LoadPriceHistory
from domain.entities.price_bar import PriceBar
from domain.services.price_data_source import PriceDataSource


class ChartController:
    """Controller that coordinates loading bars and building a chart."""

    def __init__(self, build_chart: BuildPnFChart) -> None:
        self.build_chart = build_chart

    def build_from_bars(self, bars: Sequence[PriceBar]) -> ChartBuildResult:
        return self.build_chart.execute(bars)

    def build_from_source(self, source: PriceDataSource, limit: int | None = None) -> ChartBuildResult:
        load_history = LoadPriceHistory(
            price_data_source=source,
            chronology_policy=self.build_chart.chronology_policy,
        )
        return self.build_chart.execute(load_history.execute(limit=limit))
