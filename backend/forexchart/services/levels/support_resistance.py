"""
Support/Resistance Detection

Local extrema of closing price using a symmetric look-around window,
deduplicated by relative price proximity.
"""

import logging
from enum import Enum
from typing import Sequence

from forexchart.schemas.market import Candle
from forexchart.schemas.indicators import LevelType, SupportResistanceLevel

logger = logging.getLogger(__name__)


class Proximity(str, Enum):
    """How the distance between two levels is normalized."""

    RELATIVE = "relative"  # |a - b| / b, b being the level under test
    SYMMETRIC = "symmetric"  # |a - b| / min(|a|, |b|)


def is_near(
    other: float,
    price: float,
    threshold: float,
    proximity: Proximity = Proximity.RELATIVE,
) -> bool:
    """Whether `other` lies within `threshold` of `price`."""
    if proximity == Proximity.SYMMETRIC:
        denominator = min(abs(other), abs(price))
    else:
        denominator = price
    if denominator == 0:
        return other == price
    return abs(other - price) / denominator < threshold


def find_extrema(
    candles: Sequence[Candle], periods: int = 14
) -> list[SupportResistanceLevel]:
    """
    Collect raw support/resistance candidates.

    A close is support when it is strictly below every close in the
    `periods` candles before and after it, resistance when strictly above.
    """
    if periods < 1:
        raise ValueError(f"periods must be >= 1, got {periods}")

    closes = [c.close for c in candles]
    levels: list[SupportResistanceLevel] = []

    for i in range(periods, len(closes) - periods):
        current = closes[i]
        left = closes[i - periods : i]
        right = closes[i + 1 : i + periods + 1]

        if current < min(left) and current < min(right):
            levels.append(SupportResistanceLevel(price=current, type=LevelType.SUPPORT))
        elif current > max(left) and current > max(right):
            levels.append(
                SupportResistanceLevel(price=current, type=LevelType.RESISTANCE)
            )

    return levels


def deduplicate_levels(
    levels: Sequence[SupportResistanceLevel],
    threshold: float = 0.01,
    proximity: Proximity = Proximity.RELATIVE,
) -> list[SupportResistanceLevel]:
    """
    Drop levels that sit too close to an earlier one.

    A level is kept only if no earlier level is within `threshold` of it.
    With RELATIVE proximity the distance is divided by the price of the
    level being tested, so the test is not symmetric in its two prices.
    """
    kept: list[SupportResistanceLevel] = []
    for index, level in enumerate(levels):
        matches = (
            i
            for i, other in enumerate(levels)
            if is_near(other.price, level.price, threshold, proximity)
        )
        first_match = next(matches, index)
        if first_match == index:
            kept.append(level)
    return kept


def calculate_support_resistance(
    candles: Sequence[Candle],
    periods: int = 14,
    threshold: float = 0.01,
    proximity: Proximity = Proximity.RELATIVE,
) -> list[SupportResistanceLevel]:
    """Find support and resistance levels in chronological order."""
    candidates = find_extrema(candles, periods)
    levels = deduplicate_levels(candidates, threshold, proximity)
    logger.debug(f"Support/resistance: {len(candidates)} candidates, {len(levels)} kept")
    return levels
