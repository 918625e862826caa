from .box_size_policy import BoxSizePolicy, auto_box_size
from .point_and_figure_chart import PointAndFigureChart
from .price_data_source import PriceDataSource
from .trend_line_manager import TrendLineManager

__all__ = [
    "BoxSizePolicy",
    "PointAndFigureChart",
    "PriceDataSource",
    "TrendLineManager",
    "auto_box_size",
]
