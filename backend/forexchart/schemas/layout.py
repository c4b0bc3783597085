"""
CONTRACT 4: Chart Layout

A user's chart layout snapshot, persisted as opaque JSON.
Field aliases keep the camelCase shape the front end stores.
"""

from enum import Enum
from pydantic import BaseModel, Field

from forexchart.schemas.indicators import IndicatorConfig


class ChartType(str, Enum):
    CANDLESTICK = "candlestick"
    LINE = "line"
    BAR = "bar"


class ChartLayout(BaseModel):
    """Saved chart layout: chart type, enabled indicators, timeframe."""

    chart_type: ChartType = Field(default=ChartType.CANDLESTICK, alias="chartType")
    indicators: IndicatorConfig = Field(default_factory=IndicatorConfig.default)
    timeframe: str = "1D"

    class Config:
        populate_by_name = True

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str) -> "ChartLayout":
        return cls.model_validate_json(raw)
