"""
WishNest Backend - Main Application

This is the entry point for the FastAPI application.
It handles:
- REST API endpoints (auth, friends, wishlist, items, reservations)
- Mapping service errors to HTTP responses
- Prometheus metrics exposure
"""
from contextlib import asynccontextmanager
import logging
from datetime import datetime, UTC

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wishnest.api import router as api_router
from wishnest.api.errors import register_error_handlers
from wishnest.config.settings import settings
from wishnest.models.database import init_db
from wishnest.services.metrics import start_metrics_server

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # === STARTUP ===
    logger.info("🚀 Starting WishNest Backend...")

    await init_db()
    logger.info("✅ Database tables created")

    if settings.METRICS_PORT:
        start_metrics_server(settings.METRICS_PORT)

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("🛑 Shutting down...")


app = FastAPI(
    title="WishNest Backend",
    description="Social wishlists with friend-only visibility and hidden reservations",
    version="1.0.0",
    lifespan=lifespan
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include REST API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "WishNest",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
    }
