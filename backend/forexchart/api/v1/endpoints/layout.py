"""
Layout API Endpoints

Save and restore the chart layout (chart type, indicators, timeframe).
"""

import logging

from fastapi import APIRouter, HTTPException

from forexchart.schemas.layout import ChartLayout
from forexchart.services.cache import get_layout_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ChartLayout, response_model_by_alias=True)
async def load_layout():
    """Load the saved layout."""
    layout = await get_layout_store().load_layout()
    if layout is None:
        raise HTTPException(status_code=404, detail="No saved layout")
    return layout


@router.put("", response_model=ChartLayout, response_model_by_alias=True)
async def save_layout(layout: ChartLayout):
    """
    Save the current layout.

    Example body: `{"chartType": "line", "indicators": {"sma": true}, "timeframe": "1D"}`
    """
    await get_layout_store().save_layout(layout)
    logger.info(f"Layout saved ({layout.chart_type.value}, {layout.timeframe})")
    return layout


@router.delete("", status_code=204)
async def clear_layout():
    """Forget the saved layout."""
    await get_layout_store().clear()
