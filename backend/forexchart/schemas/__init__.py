"""
ForexChart Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from forexchart.schemas.market import Candle
from forexchart.schemas.indicators import (
    IndicatorName,
    IndicatorConfig,
    IndicatorRequest,
    EnrichedCandle,
    BollingerBands,
    MACDValue,
    VolumeProfileLevel,
    SupportResistanceLevel,
    LevelType,
)
from forexchart.schemas.chart import (
    ChartUploadRequest,
    ChartData,
    ChartResponse,
    Notification,
    NotificationSeverity,
)
from forexchart.schemas.layout import ChartLayout, ChartType
from forexchart.schemas.news import NewsEvent, NewsImpact

__all__ = [
    # Market
    "Candle",
    # Indicators
    "IndicatorName",
    "IndicatorConfig",
    "IndicatorRequest",
    "EnrichedCandle",
    "BollingerBands",
    "MACDValue",
    "VolumeProfileLevel",
    "SupportResistanceLevel",
    "LevelType",
    # Chart
    "ChartUploadRequest",
    "ChartData",
    "ChartResponse",
    "Notification",
    "NotificationSeverity",
    # Layout
    "ChartLayout",
    "ChartType",
    # News
    "NewsEvent",
    "NewsImpact",
]
