"""
Application factory for the WhaleScope API.

This module builds the FastAPI application, sets up middleware, error
handlers and routes, and owns the whale tracker for the process lifetime.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import structlog
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from whalescope import __version__
from whalescope.api.error_handlers import register_error_handlers
from whalescope.api.routes import movements, signals, whales
from whalescope.clients.helius_client import HeliusClient
from whalescope.config import (
    HeliusConfig,
    ServerConfig,
    get_helius_config,
    get_server_config,
    get_whale_config,
)
from whalescope.logging_config import RequestIdMiddleware
from whalescope.services.whale_tracker import WhaleTracker

logger = structlog.get_logger("whalescope.api")

# API Documentation tags
tags_metadata = [
    {"name": "whales", "description": "Whale wallets and their holdings"},
    {"name": "tokens", "description": "Whales and whale activity per token"},
    {"name": "movements", "description": "Large token movements by whales"},
    {"name": "signals", "description": "Accumulation, distribution and unusual activity signals"},
    {"name": "system", "description": "Health and service information"},
]


def build_tracker(helius_config: HeliusConfig) -> WhaleTracker:
    """Create the tracker, attaching a Helius client when an API key is set."""
    client = HeliusClient(helius_config) if helius_config.has_api_key else None
    if client is None:
        logger.warning("HELIUS_API_KEY not set, serving mock data")
    return WhaleTracker(client=client, config=get_whale_config())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.

    Args:
        app: The FastAPI application instance
    """
    logger.info("Application started", data_source="helius" if app.state.tracker.has_provider else "mock")

    yield  # Application is running here

    client = app.state.tracker.client
    if client is not None:
        await client.close()
    logger.info("Shutdown complete")


def create_application(
    server_config: Optional[ServerConfig] = None,
    helius_config: Optional[HeliusConfig] = None,
    tracker: Optional[WhaleTracker] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        server_config: Server settings, defaults to the environment ones
        helius_config: Helius settings, defaults to the environment ones
        tracker: Whale tracker to serve, built from ``helius_config`` if omitted

    Returns:
        The configured FastAPI application
    """
    server_config = server_config or get_server_config()
    helius_config = helius_config or get_helius_config()

    app = FastAPI(
        title="WhaleScope API",
        description="Real-time whale tracking and signal detection for Solana",
        version=__version__,
        openapi_tags=tags_metadata,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        debug=server_config.debug,
    )

    app.state.tracker = tracker if tracker is not None else build_tracker(helius_config)
    app.state.server_config = server_config
    app.state.started_at = time.time()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=server_config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )

    # Add request id and logging middleware
    app.add_middleware(RequestIdMiddleware, log_requests=server_config.enable_request_logging)

    # Register error handlers
    register_error_handlers(app, is_production=server_config.is_production)

    # Register API routers
    api_router = APIRouter(prefix="/api")
    api_router.include_router(whales.router)
    api_router.include_router(whales.tokens_router)
    api_router.include_router(movements.router)
    api_router.include_router(signals.router)
    app.include_router(api_router)

    @app.get("/health", tags=["system"])
    async def health_check(request: Request) -> Dict[str, Any]:
        """
        Check the health of the service.

        The rpc service is reported up when a Helius client is configured.
        """
        return {
            "status": "healthy",
            "timestamp": int(time.time() * 1000),
            "version": __version__,
            "environment": server_config.environment,
            "services": {
                "rpc": "up" if request.app.state.tracker.has_provider else "down",
            },
        }

    @app.get("/", tags=["system"])
    async def api_info(request: Request) -> Dict[str, Any]:
        """Return basic API information."""
        return {
            "name": "WhaleScope API",
            "version": __version__,
            "description": "Real-time whale tracking and signal detection for Solana",
            "docs": "/docs",
            "endpoints": {
                "whales": "/api/whales",
                "tokenWhales": "/api/whales/tokens/{mint}",
                "tokenSummary": "/api/tokens/{mint}/summary",
                "movements": "/api/movements",
                "signals": "/api/signals",
                "health": "/health",
            },
            "uptime": int(time.time() - request.app.state.started_at),
        }

    return app
