"""
Point-and-Figure indicator module.

Contains the chart-backed indicator and the value objects it reports.
"""

from domain.indicators.pnf.models import PnFSignal, TrendLineSnapshot
from domain.indicators.pnf.pnf_indicator import PnFIndicator, snapshot_trend_line
from domain.value_objects.chart_settings import PnFChartSettings

__all__ = [
    "PnFChartSettings",
    "PnFIndicator",
    "PnFSignal",
    "TrendLineSnapshot",
    "snapshot_trend_line",
]
