"""
News Events Service

Supplies scheduled news events used as chart annotations.
Events come from a fixed mock calendar; a real feed is not integrated.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from forexchart.schemas.news import NewsEvent, NewsImpact

logger = logging.getLogger(__name__)


MOCK_NEWS_EVENTS = [
    NewsEvent(date=datetime(2023, 6, 15), title="Interest Rate Decision", impact=NewsImpact.HIGH),
    NewsEvent(date=datetime(2023, 6, 20), title="GDP Report", impact=NewsImpact.MEDIUM),
    NewsEvent(date=datetime(2023, 6, 25), title="Unemployment Rate", impact=NewsImpact.HIGH),
]


class NewsEventService:
    """
    Service for chart news annotations.

    Sources:
    - Built-in mock calendar
    - Can be replaced with an economic-calendar feed
    """

    def __init__(self, events: Optional[list[NewsEvent]] = None):
        self._events = list(MOCK_NEWS_EVENTS if events is None else events)

    async def get_events(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        impact: Optional[NewsImpact] = None,
    ) -> list[NewsEvent]:
        """
        Events within [start, end], oldest first.

        Args:
            start: Earliest event date (inclusive)
            end: Latest event date (inclusive)
            impact: Only events with this impact
        """
        start, end = _naive_utc(start), _naive_utc(end)
        events = [
            e
            for e in self._events
            if (start is None or e.date >= start)
            and (end is None or e.date <= end)
            and (impact is None or e.impact == impact)
        ]
        events.sort(key=lambda e: e.date)
        logger.debug(f"News events: {len(events)} of {len(self._events)} in window")
        return events


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Mock events carry naive timestamps; compare aware bounds in UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


# Singleton instance
_news_service: Optional[NewsEventService] = None


def get_news_service() -> NewsEventService:
    """Get or create the news events service."""
    global _news_service
    if _news_service is None:
        _news_service = NewsEventService()
    return _news_service
