"""
Indicator Engine Service

CONTRACT:
    Input:  IndicatorRequest (candles + IndicatorConfig)
    Output: list[EnrichedCandle]

RESPONSIBILITIES:
    - Moving averages (SMA 20, EMA 50)
    - Momentum (RSI 14, MACD 12/26/9)
    - Volatility (Bollinger Bands 20/2, ATR 14)

Each indicator is an independent transform; the order in which they are
applied does not change the result.
"""

from forexchart.services.indicators.interface import IndicatorServiceInterface
from forexchart.services.indicators.service import (
    IndicatorService,
    get_indicator_service,
    enrich,
    calculate_fields,
)

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
    "enrich",
    "calculate_fields",
]
