"""
Chart Session

Holds the dataset currently on display and is the upload boundary:
every pipeline error is turned into a user-facing notification here, and
a failed upload leaves the previously displayed data untouched.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from forexchart.core.config import settings
from forexchart.schemas.chart import (
    ChartData,
    ChartResponse,
    ChartUploadRequest,
    Notification,
    NotificationSeverity,
)
from forexchart.schemas.indicators import (
    IndicatorConfig,
    SupportResistanceLevel,
    VolumeProfileLevel,
)
from forexchart.services.base import (
    EmptyResultError,
    ParseError,
    ProcessingTimeoutError,
    ServiceError,
)
from forexchart.services.chart.downsample import downsample, show_all
from forexchart.services.chart.service import ChartService, get_chart_service
from forexchart.services.levels import (
    Proximity,
    calculate_support_resistance,
    calculate_volume_profile,
)

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = (
    "Failed to process the file. Please check the file format and try again."
)


@dataclass
class UploadOutcome:
    """Result of an upload attempt, successful or not."""

    response: ChartResponse
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def notification_for(error: Exception) -> Notification:
    """User-facing message for a pipeline error."""
    if isinstance(error, EmptyResultError):
        message = "No valid data found in the file"
    elif isinstance(error, ProcessingTimeoutError):
        message = "Data processing timed out"
    elif isinstance(error, ParseError):
        message = f"Error loading data: {error.message}"
    elif isinstance(error, ServiceError):
        message = error.message or DEFAULT_ERROR_MESSAGE
    else:
        message = DEFAULT_ERROR_MESSAGE
    return Notification(message=message, severity=NotificationSeverity.ERROR)


class ChartSession:
    """
    The chart currently shown to the user.

    A completed upload replaces the stored data wholesale; concurrent
    uploads are not coalesced, the last one to finish wins.
    """

    def __init__(
        self,
        service: Optional[ChartService] = None,
        target_length: Optional[int] = None,
    ):
        self._service = service or get_chart_service()
        self._target_length = target_length or settings.display_target_length
        self._data: Optional[ChartData] = None
        self._indicators = IndicatorConfig.default()

    @property
    def data(self) -> Optional[ChartData]:
        return self._data

    @property
    def indicators(self) -> IndicatorConfig:
        return self._indicators

    @property
    def has_data(self) -> bool:
        return self._data is not None and len(self._data.candles) > 0

    async def upload(self, request: ChartUploadRequest) -> UploadOutcome:
        """Run the pipeline for an upload and update the display on success."""
        target_length = request.target_length or self._target_length
        try:
            data = await self._service.process_upload(request.csv_text, request.indicators)
        except ServiceError as e:
            logger.error(f"Error processing file: {e}")
            return self._failed(e)
        except Exception as e:
            logger.exception("Unexpected error processing file")
            return self._failed(
                ServiceError("ChartSession", DEFAULT_ERROR_MESSAGE, {"cause": str(e)})
            )

        self._data = data
        self._indicators = request.indicators
        self._target_length = target_length
        logger.info(
            f"Data loaded: {len(data.candles)} candles, "
            f"display target {self._target_length}"
        )
        return UploadOutcome(
            response=self.view(
                notification=Notification(
                    message="Data loaded successfully",
                    severity=NotificationSeverity.SUCCESS,
                )
            )
        )

    async def set_indicators(self, indicators: IndicatorConfig) -> UploadOutcome:
        """Recompute the stored candles with a new indicator selection."""
        if not self.has_data:
            self._indicators = indicators
            return UploadOutcome(response=self.view())

        base = [candle.base() for candle in self._data.candles]
        try:
            data = await self._service.recalculate(base, indicators)
        except ServiceError as e:
            logger.error(f"Error recalculating indicators: {e}")
            return self._failed(e)

        self._data = data
        self._indicators = indicators
        return UploadOutcome(response=self.view())

    def _failed(self, error: ServiceError) -> UploadOutcome:
        """Outcome for a failed action; the displayed data is kept."""
        return UploadOutcome(
            response=self.view(notification=notification_for(error)),
            error=error,
        )

    def view(
        self,
        full: bool = False,
        notification: Optional[Notification] = None,
    ) -> ChartResponse:
        """Displayed series; `full=True` bypasses downsampling."""
        if self._data is None:
            return ChartResponse(
                candles=[],
                total_count=0,
                display_count=0,
                indicators=self._indicators,
                notification=notification,
            )

        candles = self._data.candles
        display = show_all(candles) if full else downsample(candles, self._target_length)
        return ChartResponse(
            candles=display,
            total_count=len(candles),
            display_count=len(display),
            volume_profile=self._data.volume_profile,
            levels=self._data.levels,
            indicators=self._data.indicators,
            notification=notification,
        )

    def volume_profile(self, levels: int) -> list[VolumeProfileLevel]:
        """Volume profile of the stored candles with a custom bin count."""
        if self._data is None:
            return []
        return calculate_volume_profile(self._data.candles, levels)

    def support_resistance(
        self,
        periods: int,
        threshold: float,
        proximity: Proximity = Proximity.RELATIVE,
    ) -> list[SupportResistanceLevel]:
        """Support/resistance of the stored candles with custom parameters."""
        if self._data is None:
            return []
        return calculate_support_resistance(
            self._data.candles, periods, threshold, proximity
        )

    def clear(self) -> None:
        self._data = None


# Singleton instance
_session: Optional[ChartSession] = None


def get_chart_session() -> ChartSession:
    """Get or create the chart session."""
    global _session
    if _session is None:
        _session = ChartSession()
    return _session
