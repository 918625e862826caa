from __future__ import annotations

from application.policies.chronology_policy import ChronologyPolicy
from domain.entities.price_bar import PriceBar
from domain.services.price_data_source import PriceDataSource


class LoadPriceHistory:
    """Use case to load price bars from a source in chronological order."""

    def __init__(
        self,
        price_data_source: PriceDataSource,
        chronology_policy: ChronologyPolicy | None = None,
    ) -> None:
        self.price_data_source = price_data_source
        self.chronology_policy = chronology_policy or ChronologyPolicy()

    def execute(self, limit: int | None = None) -> list[PriceBar]:
        """Return the ordered bars, keeping only the most recent ``limit`` when given."""
        if limit is not None and limit <= 0:
            raise ValueError("limit must be greater than zero.")

        bars = self.chronology_policy.ensure_ordered(self.price_data_source.load_bars())
        if limit is not None:
            bars = bars[-limit:]
        return bars
