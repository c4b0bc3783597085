"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from forexchart.api.v1.endpoints import chart, indicators, layout, news

router = APIRouter()

# Include all endpoint routers
router.include_router(chart.router, prefix="/chart", tags=["Chart"])
router.include_router(indicators.router, prefix="/indicators", tags=["Indicators"])
router.include_router(layout.router, prefix="/layout", tags=["Layout"])
router.include_router(news.router, prefix="/news", tags=["News Events"])
