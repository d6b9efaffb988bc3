# src/cooked_court/main.py
"""Main entry point for the Cooked Court application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from cooked_court.api.v1 import (
    auth_router,
    judge_router,
    posts_router,
    reactions_router,
    users_router,
)
from cooked_court.core.logging_config import configure_logging
from cooked_court.core.settings import settings
from cooked_court.db.session import create_tables
from cooked_court.services.feed import get_post_store
from cooked_court.services.judge import get_judge_client

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Cooked Court API",
    description="Submit your disasters, let the AI roast them, let the crowd judge.",
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
app.include_router(auth_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(reactions_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(judge_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    create_tables()
    store = get_post_store()
    if not get_judge_client().enabled:
        logger.warning("GEMINI_API_KEY not set; every judgment will use the fallback verdict.")
    logger.info("%s ready with %d posts in the feed", settings.app_name, len(store))


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await get_judge_client().close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Cooked Court API",
        "version": settings.app_version,
        "description": "Submit your disasters, let the AI roast them, let the crowd judge.",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("cooked_court.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
