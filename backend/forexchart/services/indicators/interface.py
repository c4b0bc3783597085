"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from typing import Sequence

from forexchart.services.base import BaseService
from forexchart.schemas.market import Candle
from forexchart.schemas.indicators import (
    EnrichedCandle,
    IndicatorConfig,
    IndicatorRequest,
)


class IndicatorServiceInterface(BaseService[IndicatorRequest, list[EnrichedCandle]]):
    """
    Indicator Engine Service Contract.

    INPUT: IndicatorRequest
        - candles: Ordered OHLCV candles
        - indicators: Which indicators to compute

    OUTPUT: list[EnrichedCandle]
        - Same length and order as the input
        - Derived fields set only where enough history exists
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: IndicatorRequest) -> list[EnrichedCandle]:
        """Calculate indicators for the request's candles."""
        pass

    @abstractmethod
    def calculate(
        self, candles: Sequence[Candle], config: IndicatorConfig
    ) -> list[EnrichedCandle]:
        """
        Calculate indicators without awaiting.

        Args:
            candles: Ordered candle sequence
            config: Enabled indicators

        Returns:
            Enriched candle sequence
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
