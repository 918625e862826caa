from __future__ import annotations

import math
from dataclasses import dataclass

from domain.exceptions.errors import ChartConfigurationError
from domain.value_objects.chart_types import BoxSizeMode, ConstructionType


@dataclass(frozen=True)
class PnFChartSettings:
    """Construction configuration of a Point-and-Figure chart."""

    construction_type: ConstructionType = ConstructionType.CLOSING_PRICE
    box_size_mode: BoxSizeMode = BoxSizeMode.AUTO
    # Price units for FIXED/POINTS, percent of price for PERCENTAGE, ignored by AUTO
    box_size: float = 0.0
    reversal_count: int = 3

    def __post_init__(self) -> None:
        if self.reversal_count < 1:
            raise ChartConfigurationError("reversal_count must be at least 1.")
        if not math.isfinite(self.box_size):
            raise ChartConfigurationError("box_size must be a finite number.")
        if self.box_size_mode.requires_box_size and self.box_size <= 0:
            raise ChartConfigurationError(
                f"box_size must be greater than zero for {self.box_size_mode.value} mode."
            )
        if self.box_size < 0:
            raise ChartConfigurationError("box_size cannot be negative.")

    @property
    def is_one_box_reversal(self) -> bool:
        return self.reversal_count == 1
