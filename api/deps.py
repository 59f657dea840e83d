"""
Dependency injection for the content store, the TMDb client and settings.

The store and the client are built once in `api.main.lifespan` and kept on
`app.state`; handlers receive them through the dependencies below, which tests
replace via `app.dependency_overrides`.
"""
from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Annotated, NoReturn

from fastapi import Depends, HTTPException, Request

from cinestream.integrations.tmdb.client import DEFAULT_TIMEOUT_SECONDS, TmdbClient
from cinestream.integrations.tmdb.errors import TmdbClientError, TmdbConfigError
from cinestream.services.catalog import CatalogClient, CatalogService, ContentNotFoundError
from cinestream.store.memory import ContentStore
from cinestream.utils.env import env_float, load_env

load_env()

logger = logging.getLogger(__name__)

DEFAULT_WATCHLIST_USER_ID = "default-user"


@lru_cache
def get_watchlist_user_id() -> str:
    """
    The demo user every watchlist request acts on (there is no authentication).
    """
    return (os.getenv("WATCHLIST_USER_ID") or "").strip() or DEFAULT_WATCHLIST_USER_ID


def build_tmdb_client() -> TmdbClient:
    """
    Build the TMDb client from the environment.

    A missing TMDB_API_KEY is not an error here; it fails each request that
    needs the catalog instead.
    """
    return TmdbClient(
        timeout_seconds=env_float("TMDB_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
    )


def get_store(request: Request) -> ContentStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Content store is not initialized (app lifespan did not run)")
    return store


def get_catalog_client(request: Request) -> CatalogClient:
    client = getattr(request.app.state, "catalog_client", None)
    if client is None:
        raise RuntimeError("Catalog client is not initialized (app lifespan did not run)")
    return client


def get_catalog_service(
    store: Annotated[ContentStore, Depends(get_store)],
    client: Annotated[CatalogClient, Depends(get_catalog_client)],
) -> CatalogService:
    return CatalogService(store, client)


# Type aliases for dependency injection
Store = Annotated[ContentStore, Depends(get_store)]
Catalog = Annotated[CatalogService, Depends(get_catalog_service)]
WatchlistUser = Annotated[str, Depends(get_watchlist_user_id)]


def raise_for_catalog_error(exc: Exception, context: str, *, not_found_status: int = 404) -> NoReturn:
    """
    Translate a catalog/store failure into an HTTPException.

    Args:
        exc: The exception raised while resolving content
        context: Description of the operation for logs and fallback messages
        not_found_status: Status used when the content does not exist. List
            endpoints pass 500, since one missing title fails the whole list.

    Raises:
        HTTPException: 404 (or `not_found_status`) for missing content,
            500 for configuration and upstream errors
    """
    if isinstance(exc, ContentNotFoundError):
        raise HTTPException(status_code=not_found_status, detail=exc.message) from exc
    if isinstance(exc, TmdbConfigError):
        logger.error(f"TMDb is not configured ({context}): {exc}")
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    if isinstance(exc, TmdbClientError):
        logger.warning(f"TMDb error during {context}: {exc} (status={exc.status_code})")
        raise HTTPException(status_code=500, detail=str(exc) or f"Failed {context}") from exc
    raise exc
