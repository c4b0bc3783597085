"""
Volume Profile

Distribution of traded volume across price levels.

Each candle's entire volume is attributed to the bin containing its close.
This is a modeling simplification, not an intrabar volume distribution.
"""

import logging
from typing import Sequence

import numpy as np

from forexchart.schemas.market import Candle
from forexchart.schemas.indicators import VolumeProfileLevel

logger = logging.getLogger(__name__)


def calculate_volume_profile(
    candles: Sequence[Candle], levels: int = 30
) -> list[VolumeProfileLevel]:
    """
    Bin candle volume by closing price.

    Bins have equal width and cover [min(low), max(high)]. A close outside
    [min, max) is discarded, including a close exactly on max(high).
    When every candle has the same price the profile is a single bin
    holding all volume.

    Args:
        candles: Candle sequence
        levels: Number of bins (>= 1)

    Returns:
        Bins ordered by ascending price
    """
    if levels < 1:
        raise ValueError(f"levels must be >= 1, got {levels}")
    if not candles:
        return []

    lows = np.array([c.low for c in candles], dtype=float)
    highs = np.array([c.high for c in candles], dtype=float)
    closes = np.array([c.close for c in candles], dtype=float)
    volumes = np.array([c.volume for c in candles], dtype=np.int64)

    min_price = float(lows.min())
    max_price = float(highs.max())
    price_range = max_price - min_price

    if price_range == 0:
        logger.debug("Zero price range, single volume bin")
        return [VolumeProfileLevel(price=min_price, volume=int(volumes.sum()))]

    level_size = price_range / levels

    indices = np.floor((closes - min_price) / level_size).astype(np.int64)
    in_range = (indices >= 0) & (indices < levels) & (closes < max_price)

    totals = np.zeros(levels, dtype=np.int64)
    np.add.at(totals, indices[in_range], volumes[in_range])

    return [
        VolumeProfileLevel(price=min_price + i * level_size, volume=int(totals[i]))
        for i in range(levels)
    ]
