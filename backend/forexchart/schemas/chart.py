"""
CONTRACT 3: Chart Pipeline

Input: ChartUploadRequest (CSV text + indicator selection)
Output: ChartResponse

Upload, enrichment and aggregate results handed to the presentation layer.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from forexchart.schemas.indicators import (
    EnrichedCandle,
    IndicatorConfig,
    SupportResistanceLevel,
    VolumeProfileLevel,
)


class NotificationSeverity(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    """User-facing message about the outcome of an action."""

    message: str
    severity: NotificationSeverity = NotificationSeverity.INFO


# =============================================================================
# INPUT
# =============================================================================


class ChartUploadRequest(BaseModel):
    """CSV upload from the front end."""

    csv_text: str = Field(..., description="Raw CSV file contents")
    indicators: IndicatorConfig = Field(default_factory=IndicatorConfig.default)
    target_length: Optional[int] = Field(
        default=None,
        ge=1,
        description="Display size bound (defaults to settings.display_target_length)",
    )


# =============================================================================
# OUTPUT
# =============================================================================


class ChartData(BaseModel):
    """Full result of one pipeline run."""

    candles: list[EnrichedCandle]
    volume_profile: list[VolumeProfileLevel]
    levels: list[SupportResistanceLevel]
    indicators: IndicatorConfig


class ChartResponse(BaseModel):
    """What the chart renders."""

    candles: list[EnrichedCandle]
    total_count: int = Field(..., ge=0)
    display_count: int = Field(..., ge=0)
    volume_profile: list[VolumeProfileLevel] = Field(default_factory=list)
    levels: list[SupportResistanceLevel] = Field(default_factory=list)
    indicators: IndicatorConfig = Field(default_factory=IndicatorConfig)
    notification: Optional[Notification] = None
