"""
Trade Review Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.api import router as api_router
from app.schemas.bars import ErrorResponse, HealthResponse
from app.services.base import ServiceError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    from app.services.bars import get_bars_service
    service = get_bars_service()
    logger.info(f"Data source: {settings.data_source} ({service.source.location})")
    if await service.health_check():
        logger.info("Bars data source found")
    else:
        logger.warning(f"Bars data source not found at {service.source.location} - requests will fail until it exists")

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Trade Review Backend API

    Serves OHLC candles and precomputed indicator series for charting.

    - **/bars**: Candles filtered by contract and inclusive UTC date range
    - **/series**: Indicator lines (VWAP, EMA, RSI, ATR) with pane hints
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Report request-level failures as 400 with a plain message."""
    logger.warning(f"{request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(message=exc.message).model_dump(),
    )


app.include_router(api_router)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness probe used by the frontend at boot."""
    return HealthResponse(status="ok")
