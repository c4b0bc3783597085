"""
ForexChart Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forexchart.core.config import settings
from forexchart.api.v1 import router as api_v1_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Processing timeout: {settings.processing_timeout_seconds}s")

    # Initialize Redis (layout persistence)
    from forexchart.services.cache import init_redis, close_redis
    redis_client = await init_redis()
    if redis_client:
        logger.info("Redis layout store connected")
    else:
        logger.info("Redis unavailable - layouts kept in memory")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await close_redis()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    ForexChart Indicator API

    ## Architecture
    - **Candle Ingestion**: Parses uploaded OHLCV CSV files
    - **Indicator Engine**: SMA, EMA, RSI, MACD, Bollinger Bands, ATR (NumPy)
    - **Price Levels**: Volume profile and support/resistance detection
    - **Display**: Downsampled series for charting

    ## Core Principles
    - Deterministic, pure calculations
    - Heavy work runs off the event loop with a timeout
    - A failed upload never discards the chart already shown
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - allow both frontend ports
cors_origins = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:3001",
]
# Add any additional origins from settings
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    from forexchart.services.chart import get_chart_service

    healthy = await get_chart_service().health_check()
    return {
        "status": "healthy" if healthy else "degraded",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "ForexChart Backend API",
        "docs": "/docs",
        "health": "/health",
    }
