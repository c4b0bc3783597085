"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
Every function returns an array aligned with its input, holding NaN
wherever the lookback window is not yet filled.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence

from forexchart.schemas.market import Candle


@dataclass
class OHLCVData:
    """OHLCV data arrays for calculations."""

    opens: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    volumes: np.ndarray

    @classmethod
    def from_candles(cls, candles: Sequence[Candle]) -> "OHLCVData":
        return cls(
            opens=np.array([c.open for c in candles], dtype=float),
            highs=np.array([c.high for c in candles], dtype=float),
            lows=np.array([c.low for c in candles], dtype=float),
            closes=np.array([c.close for c in candles], dtype=float),
            volumes=np.array([c.volume for c in candles], dtype=np.int64),
        )

    def __len__(self) -> int:
        return len(self.closes)


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: np.ndarray, period: int = 20) -> np.ndarray:
    """Simple Moving Average."""
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")

    result = np.full(len(data), np.nan)
    if len(data) < period:
        return result

    for i in range(period - 1, len(data)):
        result[i] = np.mean(data[i - period + 1 : i + 1])
    return result


def ema(data: np.ndarray, period: int = 50) -> np.ndarray:
    """
    Exponential Moving Average.

    Seeded with the SMA of the first `period` values. Leading NaNs are
    skipped so an EMA can be taken of another indicator's output.
    """
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")

    result = np.full(len(data), np.nan)

    valid = np.flatnonzero(~np.isnan(data))
    if len(valid) == 0:
        return result
    start = valid[0]
    seed = start + period - 1
    if seed >= len(data):
        return result

    multiplier = 2 / (period + 1)

    # Start with SMA
    result[seed] = np.mean(data[start : seed + 1])

    # Calculate EMA
    for i in range(seed + 1, len(data)):
        result[i] = data[i] * multiplier + result[i - 1] * (1 - multiplier)

    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: np.ndarray, period: int = 14) -> np.ndarray:
    """Relative Strength Index (Wilder smoothing)."""
    result = np.full(len(closes), np.nan)
    if len(closes) < period + 1:
        return result

    # Calculate price changes
    deltas = np.diff(closes)

    # Separate gains and losses
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # First average
    avg_gain = np.mean(gains[:period])
    avg_loss = np.mean(losses[:period])
    result[period] = _rsi_value(avg_gain, avg_loss)

    # Subsequent RSI values using smoothed averages
    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result[i + 1] = _rsi_value(avg_gain, avg_loss)

    return np.clip(result, 0, 100)


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        # Flat window: no momentum either way
        return 50.0 if avg_gain == 0 else 100.0
    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def macd(
    closes: np.ndarray,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    MACD (Moving Average Convergence Divergence).

    Returns: (macd_line, signal_line, histogram)
    """
    fast_ema = ema(closes, fast_period)
    slow_ema = ema(closes, slow_period)

    macd_line = fast_ema - slow_ema

    # Signal line is EMA of MACD line
    signal_line = ema(macd_line, signal_period)

    # Histogram
    histogram = macd_line - signal_line

    return macd_line, signal_line, histogram


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def true_range(highs: np.ndarray, lows: np.ndarray, closes: np.ndarray) -> np.ndarray:
    """True Range. Undefined for the first candle (no previous close)."""
    tr = np.full(len(closes), np.nan)

    for i in range(1, len(closes)):
        tr[i] = max(
            highs[i] - lows[i],
            abs(highs[i] - closes[i - 1]),
            abs(lows[i] - closes[i - 1]),
        )

    return tr


def atr(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, period: int = 14
) -> np.ndarray:
    """Average True Range (Wilder smoothing of true range)."""
    result = np.full(len(closes), np.nan)
    if len(closes) < period + 1:
        return result

    tr = true_range(highs, lows, closes)

    # First ATR is the mean of the first `period` true ranges
    result[period] = np.mean(tr[1 : period + 1])

    for i in range(period + 1, len(closes)):
        result[i] = (result[i - 1] * (period - 1) + tr[i]) / period

    return result


def bollinger_bands(
    closes: np.ndarray, period: int = 20, std_dev: float = 2.0
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Bollinger Bands.

    Returns: (upper, middle, lower)
    """
    middle = sma(closes, period)

    # Sample standard deviation over the trailing window
    std = np.full(len(closes), np.nan)
    if period > 1:
        for i in range(period - 1, len(closes)):
            std[i] = np.std(closes[i - period + 1 : i + 1], ddof=1)
    else:
        std[~np.isnan(middle)] = 0.0

    upper = middle + (std_dev * std)
    lower = middle - (std_dev * std)

    return upper, middle, lower


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def to_optional(value: float) -> Optional[float]:
    """Convert a NaN-or-number array element to float or None."""
    return None if np.isnan(value) else float(value)
