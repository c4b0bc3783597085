"""
CONTRACT 5: News Annotations

Event markers drawn over the chart. Consumed only by the presentation layer.
"""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel


class NewsImpact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class NewsEvent(BaseModel):
    """Single scheduled news event."""

    date: datetime
    title: str
    impact: NewsImpact = NewsImpact.LOW
