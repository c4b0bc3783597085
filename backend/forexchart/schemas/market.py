"""
CONTRACT 1: Candle Ingestion

Input: CSV text (header row + data rows)
Output: list[Candle]

Raw tabular rows are normalized into typed, immutable candles.
"""

from datetime import datetime
from pydantic import BaseModel


# =============================================================================
# CSV COLUMN LAYOUT
# =============================================================================

DATE_COLUMN = 1
OPEN_COLUMN = 3
HIGH_COLUMN = 4
LOW_COLUMN = 5
CLOSE_COLUMN = 6
VOLUME_COLUMN = 7


# =============================================================================
# OUTPUT: Candle
# =============================================================================


class Candle(BaseModel):
    """Single OHLCV sample for one time period."""

    date: datetime
    open: float
    high: float
    low: float
    close: float
    volume: int

    class Config:
        frozen = True

