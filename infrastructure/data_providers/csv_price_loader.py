from __future__ import annotations

import csv
from datetime import datetime
from pathlib import Path
from typing import Sequence

from domain.entities.price_bar import PriceBar
from domain.exceptions.errors import DataProviderError
from domain.services.price_data_source import PriceDataSource

TIMESTAMP_FORMAT = "%Y.%m.%d %H:%M:%S"


class CsvPriceLoader(PriceDataSource):
    """
    Loads bars from a CSV export with the columns
    ``timestamp,date,open,high,low,close`` and one header row.
    """

    def __init__(self, path: str | Path, timestamp_format: str = TIMESTAMP_FORMAT) -> None:
        self.path = Path(path)
        self.timestamp_format = timestamp_format

    def load_bars(self) -> Sequence[PriceBar]:
        if not self.path.is_file():
            raise DataProviderError(f"Failed to open file: {self.path}")

        bars: list[PriceBar] = []
        with self.path.open(newline="", encoding="utf-8") as handle:
            reader = csv.reader(handle)
            next(reader, None)
            for line_number, row in enumerate(reader, start=2):
                if not row or all(not cell.strip() for cell in row):
                    continue
                bars.append(self._build_bar(row, line_number))
        return bars

    def _build_bar(self, row: list[str], line_number: int) -> PriceBar:
        if len(row) < 6:
            raise DataProviderError(
                f"{self.path}:{line_number}: expected 6 columns, got {len(row)}"
            )
        try:
            return PriceBar(
                timestamp=self._parse_timestamp(row[0].strip()),
                open=float(row[2]),
                high=float(row[3]),
                low=float(row[4]),
                close=float(row[5]),
            )
        except ValueError as exc:
            raise DataProviderError(f"{self.path}:{line_number}: {exc}") from exc

    def _parse_timestamp(self, value: str) -> datetime:
        try:
            return datetime.strptime(value, self.timestamp_format)
        except ValueError:
            return datetime.fromisoformat(value)
