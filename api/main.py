"""
Cinestream API - FastAPI application.

Provides endpoints for:
- Searching movies and TV shows (TMDb, hydrated into the content store)
- Browsing popular titles, single titles and season episodes
- Resolving streaming embed servers for the player
- Managing the demo user's watchlist
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import build_tmdb_client
from api.routers import movies, search, servers, tv, watchlist
from cinestream.integrations.tmdb.client import resolve_api_key
from cinestream.store.memory import ContentStore
from cinestream.utils.env import env_list

logger = logging.getLogger(__name__)


def get_cors_origins() -> list[str]:
    """
    Get CORS allowed origins from environment.
    Set CORS_ALLOW_ORIGINS as comma-separated list of origins.
    Example: CORS_ALLOW_ORIGINS=https://cinestream.example,https://app.cinestream.example
    """
    return env_list("CORS_ALLOW_ORIGINS")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the content store and catalog client once per process."""
    # Startup
    logger.info("Starting up Cinestream API...")
    if resolve_api_key() is None:
        logger.warning("TMDB_API_KEY is not set; catalog requests will fail until it is configured")
    app.state.store = ContentStore()
    app.state.catalog_client = build_tmdb_client()
    yield
    # Shutdown
    logger.info("Shutting down Cinestream API...")
    app.state.catalog_client.close()
    app.state.store.clear()


app = FastAPI(
    title="Cinestream API",
    description="Browse, search and stream movies and TV shows, with a personal watchlist",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration
# If no origins configured, allows all origins but disables credentials
cors_origins = get_cors_origins()
allow_credentials = len(cors_origins) > 0

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if cors_origins else ["*"],
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Include routers
app.include_router(search.router, prefix="/api")
app.include_router(movies.router, prefix="/api")
app.include_router(tv.router, prefix="/api")
app.include_router(servers.router, prefix="/api")
app.include_router(watchlist.router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "cinestream"}


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}
