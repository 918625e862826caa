"""
Base indicator interface.

Defines the abstract base class that chart-derived indicators implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Sequence, TypeVar

from domain.entities.price_bar import PriceBar

T = TypeVar("T")


class Indicator(ABC, Generic[T]):
    """
    Abstract base class for indicators fed with price bars.

    Implementations may keep state between calls to ``analyze``; ``reset``
    returns them to their initial state.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the indicator name."""
        ...

    @abstractmethod
    def analyze(self, bars: Sequence[PriceBar]) -> T:
        """
        Feed the given bars and return a result.

        Args:
            bars: Price bars to process, oldest first.

        Returns:
            Analysis result of type T specific to the indicator.
        """
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset the indicator's internal state."""
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name})>"
