#!/usr/bin/env python3
"""
Kinship API - HTTP API layer for relationship deduction and six degrees missions.

This is the FastAPI application serving the family network frontend. It
exposes:
- Mission path calculation and next-hop suggestions
- Mission tracking (start, actions, abandon)
- Kinship deduction and family connection suggestions
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kinship.logging_config import configure_logging, get_logger

from .dependencies import auth_state, authenticate_pb, pb
from .errors import register_exception_handlers
from .settings import get_settings

# Configure unified logging format
# Format: 2026-01-06T14:05:52Z [api] LEVEL message
configure_logging(source="api")
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle - startup and shutdown."""
    settings = get_settings()

    # Startup
    if not settings.skip_pb_auth:
        await authenticate_pb()
    else:
        logger.warning("Skipping PocketBase authentication (SKIP_PB_AUTH=true)")
        auth_state.pb_client = pb

    logger.info(
        f"Kinship API ready: max depth {settings.mission_max_depth}, "
        f"{settings.suggestion_limit} suggestions per step"
    )

    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Kinship API",
        description="Kinship deduction and six degrees mission API",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # Load settings
    settings = get_settings()

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Register routers
    from .routers import kinship, missions

    app.include_router(missions.router)
    app.include_router(kinship.router)

    # Core endpoints (not in a router)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "service": "kinship-api"}

    return app


# Create app instance for uvicorn
app = create_app()
