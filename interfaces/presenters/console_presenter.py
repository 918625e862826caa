from __future__ import annotations

from domain.services.point_and_figure_chart import PointAndFigureChart
from domain.services.trend_line_manager import TrendLineManager

EMPTY_CELL = "."


def _price_label(price: float) -> str:
    return f"{price:g}"


def format_chart(chart: PointAndFigureChart) -> str:
    """Return the chart as a text grid, highest price on top, one character per column."""
    prices = chart.all_prices()
    if not prices:
        return "(empty chart)"

    width = max(len(_price_label(price)) for price in prices)
    lines: list[str] = []
    for price in prices:
        cells = []
        for column in chart.columns:
            box = column.get_box(price)
            cells.append(box.render() if box is not None else EMPTY_CELL)
        label = _price_label(price).rjust(width)
        lines.append(f"{label} | {' '.join(cells)} | {label}")
    return "\n".join(lines)


def format_trend_lines(manager: TrendLineManager) -> str:
    lines = [line.describe() for line in manager.trend_lines]
    if not lines:
        return "No trend lines."
    return "\n".join(lines)


def format_summary(chart: PointAndFigureChart) -> str:
    return "\n".join(
        [
            f"Chart created with {chart.column_count} columns",
            f"X Columns: {chart.x_column_count}",
            f"O Columns: {chart.o_column_count}",
            f"Mixed Columns: {chart.mixed_column_count}",
            f"Trend Bias: {chart.bias.value}",
        ]
    )
