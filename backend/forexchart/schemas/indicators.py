"""
CONTRACT 2: Indicator Engine

Input: list[Candle] + IndicatorConfig
Output: list[EnrichedCandle]

This module defines the enriched candle and the aggregate structures
(volume profile, support/resistance) derived from a candle sequence.
Pure Python/NumPy - all math is deterministic.
"""

from enum import Enum
from typing import Any, Mapping, Optional
from pydantic import BaseModel, Field

from forexchart.schemas.market import Candle


# =============================================================================
# ENUMS
# =============================================================================


class IndicatorName(str, Enum):
    SMA = "sma"
    EMA = "ema"
    BB = "bb"
    RSI = "rsi"
    MACD = "macd"
    ATR = "atr"


class LevelType(str, Enum):
    SUPPORT = "support"
    RESISTANCE = "resistance"


# =============================================================================
# INPUT: IndicatorConfig
# =============================================================================


class IndicatorConfig(BaseModel):
    """
    Which indicators to compute.

    Unknown keys are ignored; absent keys default to disabled.
    """

    sma: bool = False
    ema: bool = False
    rsi: bool = False
    macd: bool = False
    bb: bool = Field(default=False, description="Bollinger Bands")
    atr: bool = False

    class Config:
        extra = "ignore"

    @classmethod
    def from_mapping(cls, flags: Optional[Mapping[str, Any]]) -> "IndicatorConfig":
        """Build a config from an arbitrary name -> flag mapping."""
        if not flags:
            return cls()
        known = {name.value for name in IndicatorName}
        return cls(**{k: bool(v) for k, v in flags.items() if k in known})

    @classmethod
    def default(cls) -> "IndicatorConfig":
        """Selection the chart starts with."""
        return cls(sma=True, ema=True, rsi=True, macd=True, bb=False, atr=False)

    def enabled(self) -> list[IndicatorName]:
        """Enabled indicators in computation order."""
        return [name for name in IndicatorName if getattr(self, name.value)]


class IndicatorRequest(BaseModel):
    """
    Request for indicator calculation.
    Sent by: Chart pipeline / API
    Received by: Indicator Service
    """

    candles: list[Candle]
    indicators: IndicatorConfig = Field(default_factory=IndicatorConfig)


# =============================================================================
# OUTPUT: Indicator Components
# =============================================================================


class BollingerBands(BaseModel):
    """Bollinger Bands (20-period, 2 standard deviations)."""

    top: float
    middle: float
    bottom: float

    class Config:
        frozen = True


class MACDValue(BaseModel):
    """MACD(12, 26, 9) values."""

    macd: float
    signal: float
    histogram: float

    class Config:
        frozen = True


class EnrichedCandle(Candle):
    """
    Candle plus derived indicator fields.

    A field is None when its indicator was disabled or when there is not
    enough lookback history at this index.
    """

    sma20: Optional[float] = None
    ema50: Optional[float] = None
    bb: Optional[BollingerBands] = None
    rsi: Optional[float] = Field(default=None, ge=0, le=100)
    macd: Optional[MACDValue] = None
    atr: Optional[float] = None

    def base(self) -> Candle:
        """Strip derived fields."""
        return Candle(
            date=self.date,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.volume,
        )


# =============================================================================
# OUTPUT: Aggregates
# =============================================================================


class VolumeProfileLevel(BaseModel):
    """Volume traded with a close inside one price bin."""

    price: float = Field(..., description="Lower bound of the bin")
    volume: int = Field(..., ge=0)


class SupportResistanceLevel(BaseModel):
    """Local price extremum."""

    price: float
    type: LevelType
