from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ============ Request Models ============

class ObservationRequest(BaseModel):
    """One price observation: either a single price or a high/low/close triple."""
    timestamp: datetime
    price: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None


class ChartSettingsRequest(BaseModel):
    """Construction settings; omitted fields fall back to the server defaults."""
    construction_type: Optional[str] = None  # 'CLOSE' or 'HIGH_LOW'
    box_size_mode: Optional[str] = None  # 'FIXED', 'AUTO', 'POINTS', 'PERCENTAGE'
    box_size: Optional[float] = None
    reversal_count: Optional[int] = None


class ChartRequest(BaseModel):
    """Observations to build a chart from, oldest first (newest first is accepted)."""
    settings: ChartSettingsRequest = Field(default_factory=ChartSettingsRequest)
    observations: List[ObservationRequest]


# ============ Chart Models ============

class BoxResponse(BaseModel):
    """A single box of a column."""
    price: float
    type: str  # 'X' or 'O'
    marker: str = ""


class ColumnResponse(BaseModel):
    """A chart column with its boxes in insertion order."""
    index: int
    type: str  # 'X', 'O' or 'MIXED'
    highest_price: float
    lowest_price: float
    boxes: List[BoxResponse]


class TrendLineResponse(BaseModel):
    """Trend line anchored on the column grid."""
    type: str  # 'BULLISH_SUPPORT' or 'BEARISH_RESISTANCE'
    start_column: int
    start_price: float
    end_column: int
    end_price: float
    box_size: float
    is_active: bool
    touch_count: int


class ChartResponse(BaseModel):
    """Full chart for grid rendering, with trend lines and bias."""
    construction_type: str
    box_size_mode: str
    box_size: float
    reversal_count: int
    column_count: int
    bias: str  # 'BULLISH', 'BEARISH' or 'NONE'
    columns: List[ColumnResponse]
    trend_lines: List[TrendLineResponse]
    active_trend_line: Optional[TrendLineResponse] = None
    prices: List[float]


class BoxSizeResponse(BaseModel):
    """Box size resolved for a price, with the price snapped to the box grid."""
    price: float
    mode: str
    box_size: float
    rounded_up: float
    rounded_down: float
