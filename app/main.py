"""
Main FastAPI application entry point.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.db import initialize_database
from app.routers import quotes
from app.middleware import PerformanceMiddleware
from app.cache import rating_config_cache
import logging

logger = logging.getLogger("auto_rating")

app = FastAPI(
    title="Auto Insurance Rating API",
    description="Premium quotes for personal auto coverage",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(PerformanceMiddleware)

# Add CORS middleware (outermost)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    """Initialize database and load the rate table on startup."""
    logger.info("Starting Auto Insurance Rating API...")

    initialize_database()

    config = rating_config_cache.get_config()
    logger.info(f"Rate table loaded | version={config.version} | discounts={len(config.discounts)}")

    logger.info("Startup complete")

@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Auto Insurance Rating API", "status": "healthy"}

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": "1.0.0",
        "rate_table_version": rating_config_cache.get_version()
    }

app.include_router(quotes.router, prefix="/v1", tags=["quotes"])
