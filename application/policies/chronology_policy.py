from __future__ import annotations

from typing import Sequence

from domain.entities.price_bar import PriceBar
from domain.exceptions.errors import UnorderedPriceDataError


class ChronologyPolicy:
    """Ensures bars reach the chart oldest first."""

    def __init__(self, allow_reversed: bool = True) -> None:
        self.allow_reversed = allow_reversed

    def ensure_ordered(self, bars: Sequence[PriceBar]) -> list[PriceBar]:
        """
        Return the bars in non-decreasing timestamp order.

        Newest-first input is flipped when allowed; any other disorder is
        rejected because month markers depend on chronological order.
        """
        ordered = list(bars)
        if self._is_non_decreasing(ordered):
            return ordered

        if self.allow_reversed:
            flipped = list(reversed(ordered))
            if self._is_non_decreasing(flipped):
                return flipped

        raise UnorderedPriceDataError("Price bars are not in chronological order")

    @staticmethod
    def _is_non_decreasing(bars: list[PriceBar]) -> bool:
        return all(bars[i - 1].timestamp <= bars[i].timestamp for i in range(1, len(bars)))
