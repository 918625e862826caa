from __future__ import annotations

from enum import Enum


class BoxType(str, Enum):
    """Rising (X) or falling (O) classification of a single box."""

    X = "X"
    O = "O"  # noqa: E741

    @property
    def is_rising(self) -> bool:
        return self is BoxType.X


class ColumnType(str, Enum):
    """Nominal direction of a column."""

    X = "X"
    O = "O"  # noqa: E741
    MIXED = "MIXED"  # only produced when the reversal count is 1

    @classmethod
    def for_box_type(cls, box_type: BoxType) -> "ColumnType":
        return cls.X if box_type is BoxType.X else cls.O


class ConstructionType(str, Enum):
    """Which prices of an observation drive the chart."""

    CLOSING_PRICE = "CLOSE"
    HIGH_LOW = "HIGH_LOW"


class BoxSizeMode(str, Enum):
    """How the box size is derived from the configured value and the price."""

    FIXED = "FIXED"
    AUTO = "AUTO"  # tiered lookup by price level
    POINTS = "POINTS"
    PERCENTAGE = "PERCENTAGE"

    @property
    def requires_box_size(self) -> bool:
        return self is not BoxSizeMode.AUTO


class ChartState(str, Enum):
    """Construction state of a chart, derived from its last column."""

    NO_COLUMN = "NO_COLUMN"
    UP = "UP"
    DOWN = "DOWN"
    MIXED = "MIXED"

    @classmethod
    def from_column_type(cls, column_type: ColumnType | None) -> "ChartState":
        if column_type is None:
            return cls.NO_COLUMN
        return {
            ColumnType.X: cls.UP,
            ColumnType.O: cls.DOWN,
            ColumnType.MIXED: cls.MIXED,
        }[column_type]
