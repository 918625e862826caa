"""
Boxes and columns of a Point-and-Figure chart.

A column owns its boxes exclusively. Highest and lowest prices are cached
on insert and recomputed from the held boxes when an extreme is removed.
"""

from __future__ import annotations

from dataclasses import dataclass

from domain.value_objects.chart_types import BoxType, ColumnType

PRICE_PRECISION = 10


def normalize_price(price: float) -> float:
    """Snap box-boundary arithmetic to a fixed precision before storing or comparing."""
    return round(price, PRICE_PRECISION)


@dataclass
class Box:
    """One printed price level within a column."""

    price: float
    box_type: BoxType
    marker: str = ""

    @property
    def has_marker(self) -> bool:
        return bool(self.marker)

    def render(self) -> str:
        """Return the character printed for this box: its marker, else X or O."""
        return self.marker if self.marker else self.box_type.value

    def __str__(self) -> str:
        return f"{self.price:f}{self.render()}"


class Column:
    """A run of boxes in one nominal direction, kept in insertion order."""

    def __init__(self, column_type: ColumnType = ColumnType.X) -> None:
        self.column_type = column_type
        self._boxes: list[Box] = []
        # Boxes keyed by normalized price, with cached extremes
        self._by_price: dict[float, Box] = {}
        self._highest: float | None = None
        self._lowest: float | None = None

    @property
    def boxes(self) -> list[Box]:
        return list(self._boxes)

    @property
    def box_count(self) -> int:
        return len(self._boxes)

    @property
    def highest_price(self) -> float:
        return self._highest if self._highest is not None else 0.0

    @property
    def lowest_price(self) -> float:
        return self._lowest if self._lowest is not None else 0.0

    def add_box(self, price: float, box_type: BoxType, marker: str = "") -> bool:
        """Append a box; returns False without changing anything if the price is already present."""
        price = normalize_price(price)
        if price in self._by_price:
            return False
        box = Box(price=price, box_type=box_type, marker=marker)
        self._boxes.append(box)
        self._by_price[price] = box
        if self._highest is None or price > self._highest:
            self._highest = price
        if self._lowest is None or price < self._lowest:
            self._lowest = price
        return True

    def remove_box(self, price: float) -> bool:
        box = self._by_price.pop(normalize_price(price), None)
        if box is None:
            return False
        self._boxes.remove(box)
        if box.price in (self._highest, self._lowest):
            self._refresh_extremes()
        return True

    def _refresh_extremes(self) -> None:
        self._highest = max(self._by_price) if self._by_price else None
        self._lowest = min(self._by_price) if self._by_price else None

    def has_box(self, price: float) -> bool:
        return normalize_price(price) in self._by_price

    def get_box(self, price: float) -> Box | None:
        return self._by_price.get(normalize_price(price))

    def box_at(self, index: int) -> Box:
        return self._boxes[index]

    def get_box_marker(self, price: float) -> str:
        box = self.get_box(price)
        return box.marker if box is not None else ""

    def set_box_marker(self, price: float, marker: str) -> bool:
        box = self.get_box(price)
        if box is None:
            return False
        box.marker = marker
        return True

    def clear(self) -> None:
        self._boxes.clear()
        self._by_price.clear()
        self._highest = None
        self._lowest = None

    def describe(self) -> str:
        lines = [f"Column Type: {self.column_type.value}, Boxes: {len(self._boxes)}"]
        lines.extend(str(box) for box in self._boxes)
        return "\n".join(lines)

    def __iter__(self):
        return iter(list(self._boxes))

    def __repr__(self) -> str:
        return (
            f"<Column(type={self.column_type.value}, boxes={len(self._boxes)}, "
            f"low={self.lowest_price}, high={self.highest_price})>"
        )
