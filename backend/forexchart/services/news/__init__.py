"""
News Annotation Service

Supplies news events drawn as markers over the chart.
"""

from forexchart.services.news.service import (
    NewsEventService,
    get_news_service,
    MOCK_NEWS_EVENTS,
)

__all__ = [
    "NewsEventService",
    "get_news_service",
    "MOCK_NEWS_EVENTS",
]
