"""
Indicator Engine Service Implementation

Applies the enabled indicators to a candle sequence.
Pure Python/NumPy calculations.
"""

import asyncio
import logging
from typing import Any, Callable, Optional, Sequence

import numpy as np

from forexchart.schemas.market import Candle
from forexchart.schemas.indicators import (
    BollingerBands,
    EnrichedCandle,
    IndicatorConfig,
    IndicatorName,
    IndicatorRequest,
    MACDValue,
)
from forexchart.services.indicators.interface import IndicatorServiceInterface
from forexchart.services.indicators.calculations import (
    OHLCVData,
    sma,
    ema,
    rsi,
    macd,
    atr,
    bollinger_bands,
    to_optional,
)

logger = logging.getLogger(__name__)

# Indicator parameters
SMA_PERIOD = 20
EMA_PERIOD = 50
BB_PERIOD = 20
BB_STD_DEV = 2.0
RSI_PERIOD = 14
MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9
ATR_PERIOD = 14

FieldValues = list[Optional[Any]]


# =============================================================================
# TRANSFORMS
# Each takes the OHLCV arrays and returns one value (or None) per candle.
# =============================================================================


def _sma_field(data: OHLCVData) -> FieldValues:
    return [to_optional(v) for v in sma(data.closes, SMA_PERIOD)]


def _ema_field(data: OHLCVData) -> FieldValues:
    return [to_optional(v) for v in ema(data.closes, EMA_PERIOD)]


def _bb_field(data: OHLCVData) -> FieldValues:
    upper, middle, lower = bollinger_bands(data.closes, BB_PERIOD, BB_STD_DEV)
    values: FieldValues = []
    for top, mid, bottom in zip(upper, middle, lower):
        if np.isnan(top) or np.isnan(mid) or np.isnan(bottom):
            values.append(None)
        else:
            values.append(
                BollingerBands(top=float(top), middle=float(mid), bottom=float(bottom))
            )
    return values


def _rsi_field(data: OHLCVData) -> FieldValues:
    return [to_optional(v) for v in rsi(data.closes, RSI_PERIOD)]


def _macd_field(data: OHLCVData) -> FieldValues:
    macd_line, signal_line, histogram = macd(
        data.closes, MACD_FAST, MACD_SLOW, MACD_SIGNAL
    )
    values: FieldValues = []
    for m, s, h in zip(macd_line, signal_line, histogram):
        if np.isnan(m) or np.isnan(s) or np.isnan(h):
            values.append(None)
        else:
            values.append(MACDValue(macd=float(m), signal=float(s), histogram=float(h)))
    return values


def _atr_field(data: OHLCVData) -> FieldValues:
    return [to_optional(v) for v in atr(data.highs, data.lows, data.closes, ATR_PERIOD)]


# indicator -> (EnrichedCandle field, transform)
TRANSFORMS: dict[IndicatorName, tuple[str, Callable[[OHLCVData], FieldValues]]] = {
    IndicatorName.SMA: ("sma20", _sma_field),
    IndicatorName.EMA: ("ema50", _ema_field),
    IndicatorName.BB: ("bb", _bb_field),
    IndicatorName.RSI: ("rsi", _rsi_field),
    IndicatorName.MACD: ("macd", _macd_field),
    IndicatorName.ATR: ("atr", _atr_field),
}


def calculate_fields(
    candles: Sequence[Candle], config: IndicatorConfig
) -> dict[str, FieldValues]:
    """
    Compute every enabled indicator independently.

    Returns: field name -> per-candle values
    """
    data = OHLCVData.from_candles(candles)
    fields: dict[str, FieldValues] = {}
    for indicator in config.enabled():
        field, transform = TRANSFORMS[indicator]
        logger.debug(f"Calculating {indicator.value.upper()}")
        fields[field] = transform(data)
    return fields


def enrich(candles: Sequence[Candle], config: IndicatorConfig) -> list[EnrichedCandle]:
    """
    Apply the enabled indicators to a candle sequence.

    The result has the same length and order as the input. Input candles
    are never modified; derived fields present on the input (from an earlier
    run) are ignored and recomputed from the OHLCV fields.
    """
    logger.info(f"Starting indicator calculations ({len(candles)} candles)")
    fields = calculate_fields(candles, config)

    enriched = [
        EnrichedCandle(
            date=candle.date,
            open=candle.open,
            high=candle.high,
            low=candle.low,
            close=candle.close,
            volume=candle.volume,
            **{field: values[i] for field, values in fields.items()},
        )
        for i, candle in enumerate(candles)
    ]

    logger.info("Indicator calculations complete")
    return enriched


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    All calculations are deterministic and reproducible.
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(self, input_data: IndicatorRequest) -> list[EnrichedCandle]:
        """Enrich the request's candles in a worker thread."""
        return await asyncio.to_thread(
            self.calculate, input_data.candles, input_data.indicators
        )

    def calculate(
        self, candles: Sequence[Candle], config: IndicatorConfig
    ) -> list[EnrichedCandle]:
        """Synchronous entry point for worker threads."""
        return enrich(candles, config)

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
