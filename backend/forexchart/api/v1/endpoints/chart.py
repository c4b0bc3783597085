"""
Chart API Endpoints

CSV upload, indicator selection and the displayed series.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from forexchart.core.config import settings
from forexchart.schemas.chart import ChartResponse, ChartUploadRequest
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
from forexchart.services.chart import UploadOutcome, get_chart_session
from forexchart.services.levels import Proximity

logger = logging.getLogger(__name__)

router = APIRouter()


def _status_for(error: ServiceError) -> int:
    if isinstance(error, (ParseError, EmptyResultError)):
        return 422
    if isinstance(error, ProcessingTimeoutError):
        return 504
    return 500


def _unwrap(outcome: UploadOutcome) -> ChartResponse:
    """Return the response, or raise with the outcome's notification."""
    if outcome.ok:
        return outcome.response
    notification = outcome.response.notification
    raise HTTPException(
        status_code=_status_for(outcome.error),
        detail=notification.model_dump(mode="json") if notification else str(outcome.error),
    )


@router.post("/upload", response_model=ChartResponse, response_model_exclude_none=True)
async def upload_csv(request: ChartUploadRequest):
    """
    Upload CSV text and compute the enabled indicators.

    Columns used (0-indexed): 1 date, 3 open, 4 high, 5 low, 6 close, 7 volume.
    Rows with non-numeric values are skipped.

    Errors:
        - 422: malformed CSV or no valid rows
        - 504: processing timed out
    The previously loaded chart stays available after a failure.
    """
    session = get_chart_session()
    outcome = await session.upload(request)
    return _unwrap(outcome)


@router.get("", response_model=ChartResponse, response_model_exclude_none=True)
async def get_chart():
    """Currently displayed (downsampled) series."""
    return get_chart_session().view()


@router.get("/all", response_model=ChartResponse, response_model_exclude_none=True)
async def get_full_chart():
    """Full series without downsampling."""
    return get_chart_session().view(full=True)


@router.post("/indicators", response_model=ChartResponse, response_model_exclude_none=True)
async def set_indicators(indicators: IndicatorConfig):
    """
    Change the enabled indicators and recompute the loaded series.

    Example body: `{"sma": true, "ema": false, "rsi": true}`
    """
    session = get_chart_session()
    outcome = await session.set_indicators(indicators)
    return _unwrap(outcome)


@router.get("/volume-profile", response_model=list[VolumeProfileLevel])
async def get_volume_profile(
    levels: Optional[int] = Query(default=None, ge=1, le=1000),
):
    """Volume-by-price profile of the loaded series."""
    session = get_chart_session()
    if not session.has_data:
        raise HTTPException(status_code=404, detail="No chart data loaded")
    return session.volume_profile(levels or settings.volume_profile_levels)


@router.get("/levels", response_model=list[SupportResistanceLevel])
async def get_levels(
    periods: Optional[int] = Query(default=None, ge=1, le=500),
    threshold: Optional[float] = Query(default=None, ge=0, le=1),
    proximity: Proximity = Proximity.RELATIVE,
):
    """Support/resistance levels of the loaded series."""
    session = get_chart_session()
    if not session.has_data:
        raise HTTPException(status_code=404, detail="No chart data loaded")
    return session.support_resistance(
        periods or settings.sr_periods,
        settings.sr_threshold if threshold is None else threshold,
        proximity,
    )
