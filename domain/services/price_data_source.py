from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from domain.entities.price_bar import PriceBar


class PriceDataSource(ABC):
    """Abstract source of historical price observations."""

    @abstractmethod
    def load_bars(self) -> Sequence[PriceBar]:
        """Return every available bar in the order the source stores them."""
