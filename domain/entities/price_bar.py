from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PriceBar:
    """Represents one price observation fed to a chart."""

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float

    @classmethod
    def from_price(cls, price: float, timestamp: datetime) -> "PriceBar":
        """Build a bar for a single traded price."""
        return cls(timestamp=timestamp, open=price, high=price, low=price, close=price)
