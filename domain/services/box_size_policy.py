"""
Box sizing for Point-and-Figure charts.

Computes the box size for a price under the configured mode and snaps
arbitrary prices onto box boundaries.
"""

from __future__ import annotations

import logging
import math

from domain.entities.column import normalize_price
from domain.exceptions.errors import ChartConfigurationError
from domain.value_objects.chart_types import BoxSizeMode

logger = logging.getLogger(__name__)

# (upper price bound, box size) pairs, checked in order
AUTO_BOX_SIZE_TIERS: tuple[tuple[float, float], ...] = (
    (0.25, 0.0625),
    (1.0, 0.125),
    (5.0, 0.25),
    (20.0, 0.5),
    (100.0, 1.0),
    (200.0, 2.0),
    (500.0, 4.0),
    (1000.0, 5.0),
    (25000.0, 50.0),
)
AUTO_BOX_SIZE_CEILING = 500.0

# Quotients this close to an integer are treated as lying on a boundary
_BOUNDARY_TOLERANCE = 1e-9


def auto_box_size(price: float) -> float:
    """Tiered box size by price level."""
    for upper_bound, size in AUTO_BOX_SIZE_TIERS:
        if price < upper_bound:
            return size
    return AUTO_BOX_SIZE_CEILING


def box_count_between(start: float, end: float, box_size: float) -> int:
    """Number of box boundaries from start to end inclusive, stepping by box_size."""
    span = abs(end - start) / box_size
    nearest = round(span)
    if abs(span - nearest) < _BOUNDARY_TOLERANCE:
        span = nearest
    return int(math.floor(span)) + 1


class BoxSizePolicy:
    """
    Resolves box sizes for a chart.

    Under AUTO mode the most recently computed size is written back to
    ``box_size`` so callers can read the chart's current nominal box size.
    """

    def __init__(self, mode: BoxSizeMode, box_size: float = 0.0) -> None:
        if mode.requires_box_size and box_size <= 0:
            raise ChartConfigurationError(
                f"box_size must be greater than zero for {mode.value} mode."
            )
        self.mode = mode
        self.box_size = box_size

    def box_size_for(self, price: float) -> float:
        """Box size implied by a price, without touching the nominal AUTO size."""
        if self.mode is BoxSizeMode.PERCENTAGE:
            size = price * self.box_size / 100.0
            if size <= 0:
                raise ChartConfigurationError(
                    f"Percentage box size is not positive for price {price}."
                )
            return size

        if self.mode is BoxSizeMode.AUTO:
            return auto_box_size(price)

        # FIXED and POINTS share the same arithmetic
        return self.box_size

    def calculate_box_size(self, price: float) -> float:
        size = self.box_size_for(price)
        if self.mode is BoxSizeMode.AUTO:
            if size != self.box_size:
                logger.debug("Auto box size changed from %s to %s at price %s", self.box_size, size, price)
            self.box_size = size
        return size

    def round_to_box_size(self, price: float, round_up: bool) -> float:
        """Snap a price to the box grid for the box size implied by that price."""
        return self.round_to_multiple(price, self.calculate_box_size(price), round_up)

    @staticmethod
    def round_to_multiple(price: float, box_size: float, round_up: bool) -> float:
        quotient = price / box_size
        nearest = round(quotient)
        if abs(quotient - nearest) < _BOUNDARY_TOLERANCE:
            return normalize_price(nearest * box_size)
        if round_up:
            return normalize_price(math.ceil(quotient) * box_size)
        return normalize_price(math.floor(quotient) * box_size)
