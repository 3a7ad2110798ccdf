"""
District Run API

Strava-backed mileage tracking for runners in the DC metro area, and
mileage-gated access to product drops.

Startup creates missing tables and wires the background importer to the
session factory. The periodic sync loop only runs when Strava
credentials are configured and BACKGROUND_SYNC_ENABLED is set.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.db.session import AsyncSessionLocal, close_db, init_db
from app.api.v1.router import api_router
from app.features.strava.sync import background_sync

__version__ = "0.1.0"


logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"District Run API {__version__} starting")
    await init_db()

    # Post-OAuth imports need the factory even when the loop is off
    background_sync.configure(AsyncSessionLocal)

    if settings.strava_configured and settings.background_sync_enabled:
        await background_sync.start(AsyncSessionLocal)
    elif not settings.strava_configured:
        logger.warning("Strava credentials missing; connect and sync are unavailable")
    else:
        logger.info("Background sync disabled by configuration")

    try:
        yield
    finally:
        await background_sync.stop()
        await close_db()
        logger.info("District Run API stopped")


app = FastAPI(
    title="District Run API",
    description="In-region running mileage and tiered access to product drops",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Liveness probe."""
    return {
        "status": "healthy",
        "version": __version__,
        "strava_configured": settings.strava_configured,
        "background_sync": background_sync.running,
    }
