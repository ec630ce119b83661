"""
FastAPI Application Entry Point

This module builds the FastAPI application and configures:
- API routes
- Middleware (logging, CORS)
- The shared URL shortening service
- Application metadata

Design Decisions:
- Clean separation: Routes, middleware, and app config are separate
- create_app() builds a fresh app (and fresh in-memory state) per call,
  which lets tests run against isolated instances
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shortener import __version__
from shortener.api import endpoints
from shortener.api.schemas import HealthResponse
from shortener.core.logging_config import configure_logging
from shortener.core.service_manager import initialize_service, shutdown_service
from shortener.core.setting import Settings, settings as default_settings
from shortener.middleware.logging import add_logging_middleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log final counters on shutdown."""
    yield
    shutdown_service(app)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration override (default: environment settings)
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="URL Shortener Service",
        description="Shortens URLs to fixed-length codes and tracks visits, in memory",
        version=__version__,
        docs_url="/docs",  # Swagger UI documentation
        redoc_url="/redoc",  # ReDoc documentation
        lifespan=lifespan,
    )
    app.state.settings = settings

    add_logging_middleware(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health endpoints defined before router to match before catch-all route
    @app.get("/", tags=["Health"])
    async def root():
        """Service identification."""
        return {
            "message": "URL Shortener Service",
            "version": __version__,
            "docs": "/docs"
        }

    @app.get("/health", tags=["Health"], response_model=HealthResponse)
    async def health_check():
        """Health check endpoint for monitoring."""
        return HealthResponse(status="healthy", timestamp=datetime.now(timezone.utc))

    app.include_router(endpoints.router, tags=["URL Shortener"])

    initialize_service(app, settings)

    return app


app = create_app()
