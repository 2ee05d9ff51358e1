# src/nicolas_qui_paie/main.py
"""Main entry point for the Nicolas Qui Paie API."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from nicolas_qui_paie.api.v1 import (
    analytics_router,
    categories_router,
    comments_router,
    proposals_router,
    users_router,
    votes_router,
)
from nicolas_qui_paie.core.logging import configure_logging
from nicolas_qui_paie.core.settings import settings
from nicolas_qui_paie.db.session import create_tables, engine

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Nicolas Qui Paie API",
    description="Civic proposals, votes and contribution levels",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(proposals_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(categories_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(analytics_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    await create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await engine.dispose()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("nicolas_qui_paie.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
