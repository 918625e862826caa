from datetime import datetime, timedelta
from typing import Sequence

import pytest

from application.use_cases.build_pnf_chart import BuildPnFChart
from application.use_cases.load_price_history import LoadPriceHistory
from domain.entities.price_bar import PriceBar
from domain.exceptions.errors import UnorderedPriceDataError
from domain.services.price_data_source import PriceDataSource
from domain.value_objects.chart_settings import PnFChartSettings
from domain.value_objects.chart_types import BoxSizeMode, ColumnType
from domain.value_objects.trend import TrendBias
from interfaces.controllers.chart_controller import ChartController

SETTINGS = PnFChartSettings(box_size_mode=BoxSizeMode.FIXED, box_size=1.0, reversal_count=3)


def make_bars(prices) -> list[PriceBar]:
    base = datetime(2024, 1, 1)
    return [PriceBar.from_price(price, base + timedelta(days=idx)) for idx, price in enumerate(prices)]


class StubSource(PriceDataSource):
    def __init__(self, bars: Sequence[PriceBar]) -> None:
        self.bars = list(bars)
        self.calls = 0

    def load_bars(self) -> Sequence[PriceBar]:
        self.calls += 1
        return self.bars


def test_build_chart_from_ascending_bars():
    result = BuildPnFChart(chart_settings=SETTINGS).execute(make_bars([100.0, 105.0, 98.0, 102.0]))

    assert result.chart.column_count == 3
    assert result.signal.column_count == 3
    assert result.signal.x_column_count == 2
    assert result.signal.o_column_count == 1
    assert result.signal.bias is TrendBias.BULLISH
    assert result.signal.last_column_type is ColumnType.X
    assert result.signal.bars_processed == 4


def test_newest_first_bars_give_the_same_chart():
    bars = make_bars([100.0, 105.0, 98.0, 102.0])
    use_case = BuildPnFChart(chart_settings=SETTINGS)

    forward = use_case.execute(bars)
    backward = use_case.execute(list(reversed(bars)))

    assert backward.chart.all_prices() == forward.chart.all_prices()
    assert backward.signal.analysis_period_start == bars[0].timestamp
    assert backward.signal.analysis_period_end == bars[-1].timestamp


def test_each_execution_builds_a_fresh_chart():
    use_case = BuildPnFChart(chart_settings=SETTINGS)

    first = use_case.execute(make_bars([100.0, 101.0]))
    second = use_case.execute(make_bars([50.0]))

    assert first.chart is not second.chart
    assert second.chart.column_count == 1
    assert second.chart.column(0).highest_price == 50.0


def test_unordered_bars_are_rejected():
    bars = make_bars([100.0, 101.0, 102.0])
    bars = [bars[1], bars[2], bars[0]]

    with pytest.raises(UnorderedPriceDataError):
        BuildPnFChart(chart_settings=SETTINGS).execute(bars)


def test_load_price_history_orders_and_limits():
    source = StubSource(list(reversed(make_bars([100.0, 101.0, 102.0, 103.0]))))

    bars = LoadPriceHistory(price_data_source=source).execute(limit=2)

    assert [bar.close for bar in bars] == [102.0, 103.0]
    assert source.calls == 1


def test_controller_builds_from_source():
    controller = ChartController(build_chart=BuildPnFChart(chart_settings=SETTINGS))
    source = StubSource(make_bars([100.0, 101.0, 102.0, 99.0]))

    result = controller.build_from_source(source)

    assert result.chart.column_count == 2
    assert controller.build_from_bars(make_bars([100.0])).chart.column_count == 1


@pytest.mark.parametrize("limit", [0, -2])
def test_load_price_history_rejects_non_positive_limit(limit):
    source = StubSource(make_bars([100.0, 101.0]))

    with pytest.raises(ValueError):
        LoadPriceHistory(price_data_source=source).execute(limit=limit)
    assert source.calls == 0
