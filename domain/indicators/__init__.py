"""
Indicators module.

Indicators consume price bars and report analysis results; the
Point-and-Figure indicator is built on the chart construction engine.
"""

from domain.indicators.base import Indicator
from domain.indicators.pnf import (
    PnFChartSettings,
    PnFIndicator,
    PnFSignal,
    TrendLineSnapshot,
)

__all__ = [
    "Indicator",
    "PnFChartSettings",
    "PnFIndicator",
    "PnFSignal",
    "TrendLineSnapshot",
]
