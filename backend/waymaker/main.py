"""
WayMaker API

FastAPI application for multi-stage hiking route planning.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from waymaker import __version__
from waymaker.config import settings
from waymaker.api.deps import get_profile_catalog
from waymaker.api.v1.router import api_router


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    logger.info("Starting WayMaker API...")
    profiles = get_profile_catalog().load()
    logger.info(f"Loaded {len(profiles)} hiking profiles")
    if not settings.ors_api_key:
        logger.warning("ORS_API_KEY not set: route planning will fail")

    yield

    # Shutdown
    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="WayMaker API",
    description="Multi-stage hiking route planning with elevation and GPX support",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
