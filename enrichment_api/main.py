"""FastAPI application for the company website enrichment API.

This module provides the main FastAPI application instance with CORS
middleware configuration, exception handlers and router registration.
"""

# Load environment variables before any other imports
from dotenv import load_dotenv

load_dotenv()

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from enrichment_api.core import config
from enrichment_api.exception_handlers import setup_exception_handlers
from enrichment_api.routers import enrich
from enrichment_api.services import EnrichmentService

# Configure logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# API version and metadata
API_VERSION = "0.1.0"
API_TITLE = "Company Enrichment API"
API_DESCRIPTION = """
Company Enrichment API.

Turns a company website URL into a structured business summary:
- What the company does, in a sentence or two
- Key activities and keywords
- Growth and traction signals

Results are cached in memory per website URL.
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Builds the EnrichmentService (and the cache it owns) on startup and
    closes its HTTP clients on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup is complete.
    """
    service = EnrichmentService()
    app.state.enrichment_service = service
    logger.info(f"AI enrichment configured: {service.ai_service.is_configured}")
    if not service.ai_service.is_configured:
        logger.warning("No OpenRouter API key configured - will use heuristic extraction")
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    await service.close()
    app.state.enrichment_service = None
    logger.info("Enrichment service closed")


# Create FastAPI application instance
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Allow every origin unless CORS_ORIGINS narrows it down
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS or ["*"],
    allow_credentials=bool(config.CORS_ORIGINS),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    expose_headers=["Content-Length", "Content-Type"],
)

setup_exception_handlers(app)


@app.get("/", tags=["Root"])
async def root() -> dict[str, Any]:
    """Root endpoint returning API information.

    Returns:
        Dict containing API metadata including name, version,
        description, and available documentation URLs.
    """
    return {
        "name": API_TITLE,
        "version": API_VERSION,
        "description": "Company website enrichment API",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc",
            "openapi": "/openapi.json",
        },
        "status": "operational",
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Liveness check for monitoring and load balancers.

    Returns:
        Dict with status "ok"; no dependencies are checked.
    """
    return {"status": "ok"}


app.include_router(enrich.router, prefix="/api", tags=["enrichment"])
