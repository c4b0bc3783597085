"""
News API Endpoints

News events for chart annotations.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Query

from forexchart.schemas.news import NewsEvent, NewsImpact
from forexchart.services.news import get_news_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/events", response_model=list[NewsEvent])
async def get_news_events(
    start: Optional[datetime] = Query(default=None, description="Earliest event date"),
    end: Optional[datetime] = Query(default=None, description="Latest event date"),
    impact: Optional[NewsImpact] = Query(default=None),
):
    """
    Get news events within a date window.

    Example: `/news/events?start=2023-06-01T00:00:00&end=2023-06-30T00:00:00`
    """
    return await get_news_service().get_events(start, end, impact)
