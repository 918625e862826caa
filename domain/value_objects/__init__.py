from .chart_types import BoxSizeMode, BoxType, ChartState, ColumnType, ConstructionType
from .month_marker import MONTH_MARKERS, MonthMarker, is_month_marker, marker_for_month
from .trend import TrendBias, TrendLinePoint, TrendLineType

__all__ = [
    "BoxSizeMode",
    "BoxType",
    "ChartState",
    "ColumnType",
    "ConstructionType",
    "MONTH_MARKERS",
    "MonthMarker",
    "TrendBias",
    "TrendLinePoint",
    "TrendLineType",
    "is_month_marker",
    "marker_for_month",
]
