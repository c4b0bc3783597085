"""
Price Level Aggregates

CONTRACT:
    Input:  list[Candle]
    Output: list[VolumeProfileLevel] / list[SupportResistanceLevel]

RESPONSIBILITIES:
    - Volume-by-price profile
    - Support/resistance detection from local extrema
"""

from forexchart.services.levels.volume_profile import calculate_volume_profile
from forexchart.services.levels.support_resistance import (
    Proximity,
    calculate_support_resistance,
    deduplicate_levels,
    find_extrema,
    is_near,
)

__all__ = [
    "calculate_volume_profile",
    "calculate_support_resistance",
    "deduplicate_levels",
    "find_extrema",
    "is_near",
    "Proximity",
]
