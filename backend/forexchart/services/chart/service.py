"""
Chart Pipeline Service Implementation

Runs CSV parsing and indicator calculation in a worker thread so the
event loop stays responsive. Inputs are immutable candles and configs;
the worker hands back a complete ChartData and shares nothing else.
"""

import asyncio
import functools
import logging
from concurrent.futures import Executor
from typing import Callable, Optional, Sequence, TypeVar

from forexchart.core.config import settings
from forexchart.schemas.chart import ChartData, ChartUploadRequest
from forexchart.schemas.indicators import IndicatorConfig
from forexchart.schemas.market import Candle
from forexchart.services.base import EmptyResultError, ProcessingTimeoutError
from forexchart.services.chart.interface import ChartServiceInterface
from forexchart.services.indicators import IndicatorServiceInterface, get_indicator_service
from forexchart.services.ingestion import parse_csv
from forexchart.services.levels import calculate_support_resistance, calculate_volume_profile

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ChartService(ChartServiceInterface):
    """
    Chart Pipeline Service.

    CSV text -> candles -> enriched candles -> {volume profile, levels}.
    Waiting on the worker is bounded by a timeout; on expiry the caller
    stops waiting but the worker thread is left to finish on its own.
    """

    def __init__(
        self,
        indicator_service: Optional[IndicatorServiceInterface] = None,
        executor: Optional[Executor] = None,
    ):
        self._indicators = indicator_service or get_indicator_service()
        self._executor = executor  # None -> the loop's default thread pool

    @property
    def name(self) -> str:
        return "ChartService"

    async def execute(self, input_data: ChartUploadRequest) -> ChartData:
        """Run the full pipeline for an upload."""
        return await self.process_upload(input_data.csv_text, input_data.indicators)

    async def process_upload(
        self,
        csv_text: str,
        indicators: IndicatorConfig,
        timeout: Optional[float] = None,
    ) -> ChartData:
        """Parse CSV text and compute indicators off the event loop."""
        logger.info(f"File content loaded, length: {len(csv_text)}")
        return await self._run_in_worker(
            self._pipeline_from_csv, csv_text, indicators, timeout=timeout
        )

    async def recalculate(
        self,
        candles: list[Candle],
        indicators: IndicatorConfig,
        timeout: Optional[float] = None,
    ) -> ChartData:
        """Recompute indicators and aggregates for already-parsed candles."""
        return await self._run_in_worker(
            self.build_chart_data, list(candles), indicators, timeout=timeout
        )

    def _pipeline_from_csv(self, csv_text: str, indicators: IndicatorConfig) -> ChartData:
        candles = parse_csv(csv_text)
        if not candles:
            raise EmptyResultError(self.name, "No valid data found in the file")
        return self.build_chart_data(candles, indicators)

    def build_chart_data(
        self, candles: Sequence[Candle], indicators: IndicatorConfig
    ) -> ChartData:
        """Enrich candles and compute aggregates (synchronous)."""
        enriched = self._indicators.calculate(candles, indicators)
        volume_profile = calculate_volume_profile(enriched, settings.volume_profile_levels)
        levels = calculate_support_resistance(
            enriched, settings.sr_periods, settings.sr_threshold
        )
        return ChartData(
            candles=enriched,
            volume_profile=volume_profile,
            levels=levels,
            indicators=indicators,
        )

    async def _run_in_worker(
        self,
        func: Callable[..., T],
        *args,
        timeout: Optional[float] = None,
    ) -> T:
        """Run `func` in the executor; whichever of result or timer comes first wins."""
        if timeout is None:
            timeout = settings.processing_timeout_seconds

        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(self._executor, functools.partial(func, *args))
        try:
            return await asyncio.wait_for(future, timeout=timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"Data processing timed out after {timeout}s")
            raise ProcessingTimeoutError(
                self.name,
                "Data processing timed out",
                {"timeout_seconds": timeout},
            ) from e

    async def health_check(self) -> bool:
        """Pipeline is healthy when the indicator engine is."""
        return await self._indicators.health_check()


# Singleton instance
_service_instance: Optional[ChartService] = None


def get_chart_service() -> ChartService:
    """Get or create chart service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = ChartService()
    return _service_instance
