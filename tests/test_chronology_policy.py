from datetime import datetime, timedelta

import pytest

from application.policies.chronology_policy import ChronologyPolicy
from domain.entities.price_bar import PriceBar
from domain.exceptions.errors import UnorderedPriceDataError


def make_bars(*hours: int) -> list[PriceBar]:
    base = datetime(2024, 1, 1)
    return [PriceBar.from_price(100.0 + hour, base + timedelta(hours=hour)) for hour in hours]


def test_ascending_bars_are_kept():
    bars = make_bars(0, 1, 2)

    assert ChronologyPolicy().ensure_ordered(bars) == bars


def test_descending_bars_are_reversed():
    bars = make_bars(2, 1, 0)

    ordered = ChronologyPolicy().ensure_ordered(bars)

    assert [bar.close for bar in ordered] == [100.0, 101.0, 102.0]


def test_descending_bars_rejected_when_reversal_not_allowed():
    with pytest.raises(UnorderedPriceDataError):
        ChronologyPolicy(allow_reversed=False).ensure_ordered(make_bars(2, 1, 0))


def test_shuffled_bars_are_rejected():
    with pytest.raises(UnorderedPriceDataError):
        ChronologyPolicy().ensure_ordered(make_bars(0, 2, 1))


def test_empty_input():
    assert ChronologyPolicy().ensure_ordered([]) == []
