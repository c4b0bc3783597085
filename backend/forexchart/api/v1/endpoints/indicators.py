"""
Indicator API Endpoints

Stateless indicator calculation on caller-supplied candles.
"""

import logging

from fastapi import APIRouter, HTTPException

from forexchart.schemas.indicators import EnrichedCandle, IndicatorRequest
from forexchart.services.indicators import get_indicator_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=list[EnrichedCandle], response_model_exclude_none=True)
async def calculate_indicators(request: IndicatorRequest):
    """
    Enrich candles with the requested indicators.

    Returns one enriched candle per input candle, in the same order.
    Indicator fields are omitted where there is not enough history.
    """
    indicator_service = get_indicator_service()
    try:
        return await indicator_service.execute(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Indicator calculation failed: {e}")
        raise HTTPException(status_code=500, detail=f"Indicator calculation failed: {e}")
