"""
Chart Pipeline Service Interface

Defines the contract for the upload -> enrichment -> aggregates pipeline.
"""

from abc import abstractmethod
from typing import Optional

from forexchart.services.base import BaseService
from forexchart.schemas.chart import ChartData, ChartUploadRequest
from forexchart.schemas.indicators import IndicatorConfig
from forexchart.schemas.market import Candle


class ChartServiceInterface(BaseService[ChartUploadRequest, ChartData]):
    """
    Chart Pipeline Service Contract.

    INPUT: ChartUploadRequest
        - csv_text: Raw CSV contents
        - indicators: Which indicators to compute

    OUTPUT: ChartData
        - candles: Enriched candles (full series)
        - volume_profile: Volume-by-price bins
        - levels: Support/resistance levels

    Raises ParseError, EmptyResultError or ProcessingTimeoutError.
    """

    @property
    def name(self) -> str:
        return "ChartService"

    @abstractmethod
    async def execute(self, input_data: ChartUploadRequest) -> ChartData:
        """Run the full pipeline for an upload."""
        pass

    @abstractmethod
    async def process_upload(
        self,
        csv_text: str,
        indicators: IndicatorConfig,
        timeout: Optional[float] = None,
    ) -> ChartData:
        """
        Parse CSV text and compute indicators off the event loop.

        Args:
            csv_text: Raw CSV contents
            indicators: Which indicators to compute
            timeout: Seconds to wait before giving up (default from settings)

        Returns:
            Enriched candles and aggregates
        """
        pass

    @abstractmethod
    async def recalculate(
        self,
        candles: list[Candle],
        indicators: IndicatorConfig,
        timeout: Optional[float] = None,
    ) -> ChartData:
        """Recompute indicators and aggregates for already-parsed candles."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Pipeline is healthy when the indicator engine is."""
        pass
