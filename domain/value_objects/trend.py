from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TrendLineType(str, Enum):
    """Kind of diagonal trend line."""

    BULLISH_SUPPORT = "BULLISH_SUPPORT"  # ascends from a significant low
    BEARISH_RESISTANCE = "BEARISH_RESISTANCE"  # descends from a significant high

    @property
    def label(self) -> str:
        return "Bullish Support" if self is TrendLineType.BULLISH_SUPPORT else "Bearish Resistance"


class TrendBias(str, Enum):
    """Bias implied by the currently active trend line."""

    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NONE = "NONE"

    @classmethod
    def none(cls) -> "TrendBias":
        """Return a consistent neutral bias value."""

        return cls.NONE


@dataclass(frozen=True)
class TrendLinePoint:
    """Anchor of a trend line on the column grid."""

    column_index: int
    price: float
    box_index: int = 0
