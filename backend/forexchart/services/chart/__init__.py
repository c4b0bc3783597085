"""
Chart Pipeline

CONTRACT:
    Input:  ChartUploadRequest (CSV text + IndicatorConfig)
    Output: ChartResponse

RESPONSIBILITIES:
    - Run parsing and indicator calculation off the event loop, with a timeout
    - Compute volume profile and support/resistance on the enriched series
    - Downsample the series for display
    - Turn pipeline errors into user-facing notifications
"""

from forexchart.services.chart.downsample import downsample, show_all
from forexchart.services.chart.interface import ChartServiceInterface
from forexchart.services.chart.service import ChartService, get_chart_service
from forexchart.services.chart.session import (
    ChartSession,
    UploadOutcome,
    get_chart_session,
    notification_for,
)

__all__ = [
    "downsample",
    "show_all",
    "ChartServiceInterface",
    "ChartService",
    "get_chart_service",
    "ChartSession",
    "UploadOutcome",
    "get_chart_session",
    "notification_for",
]
