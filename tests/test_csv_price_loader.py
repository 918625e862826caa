from datetime import datetime

import pytest

from domain.exceptions.errors import DataProviderError
from infrastructure.data_providers.csv_price_loader import CsvPriceLoader

HEADER = "timestamp,date,open,high,low,close\n"


def test_load_bars_parses_rows(tmp_path):
    path = tmp_path / "prices.csv"
    path.write_text(
        HEADER
        + "2024.01.02 10:00:00,2024-01-02,100.0,101.5,99.5,101.0\n"
        + "\n"
        + "2024.01.02 11:00:00,2024-01-02,101.0,103.0,100.5,102.5\n",
        encoding="utf-8",
    )

    bars = CsvPriceLoader(path).load_bars()

    assert len(bars) == 2
    first = bars[0]
    assert first.timestamp == datetime(2024, 1, 2, 10, 0, 0)
    assert (first.open, first.high, first.low, first.close) == (100.0, 101.5, 99.5, 101.0)
    assert bars[1].close == 102.5


def test_iso_timestamps_are_accepted(tmp_path):
    path = tmp_path / "iso.csv"
    path.write_text(HEADER + "2024-02-01T09:30:00,2024-02-01,1,2,0.5,1.5\n", encoding="utf-8")

    bars = CsvPriceLoader(path).load_bars()

    assert bars[0].timestamp == datetime(2024, 2, 1, 9, 30)


def test_missing_file_raises(tmp_path):
    with pytest.raises(DataProviderError):
        CsvPriceLoader(tmp_path / "missing.csv").load_bars()


def test_malformed_row_reports_line_number(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text(
        HEADER
        + "2024.01.02 10:00:00,2024-01-02,100.0,101.5,99.5,101.0\n"
        + "2024.01.02 11:00:00,2024-01-02,101.0,oops,100.5,102.5\n",
        encoding="utf-8",
    )

    with pytest.raises(DataProviderError, match=r"bad\.csv:3"):
        CsvPriceLoader(path).load_bars()


def test_short_row_is_rejected(tmp_path):
    path = tmp_path / "short.csv"
    path.write_text(HEADER + "2024.01.02 10:00:00,100.0\n", encoding="utf-8")

    with pytest.raises(DataProviderError, match="expected 6 columns"):
        CsvPriceLoader(path).load_bars()
