from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MonthMarker:
    """Single-character label printed in the first box of a new month."""

    month: int
    marker: str


MONTH_MARKERS: tuple[MonthMarker, ...] = tuple(
    MonthMarker(month=month, marker=str(month) if month < 10 else "ABC"[month - 10])
    for month in range(1, 13)
)


def marker_for_month(month: int) -> str:
    """Return the label for a calendar month (1-12), or an empty string when out of range."""
    if 1 <= month <= 12:
        return MONTH_MARKERS[month - 1].marker
    return ""


def is_month_marker(text: str) -> bool:
    return any(entry.marker == text for entry in MONTH_MARKERS)


def month_changed(previous: datetime | None, current: datetime) -> bool:
    """True for the first observation or when the calendar month/year differs."""
    if previous is None:
        return True
    return (current.year, current.month) != (previous.year, previous.month)
