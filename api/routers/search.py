"""
Combined movie/TV search.
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from api.deps import Catalog, raise_for_catalog_error
from api.schemas import SearchResponse
from cinestream.integrations.tmdb.errors import TmdbClientError
from cinestream.services.catalog import ContentNotFoundError, SearchResults

router = APIRouter(prefix="/search", tags=["search"])


def _require_query(q: str | None) -> str:
    query = (q or "").strip()
    if not query:
        raise HTTPException(status_code=400, detail="Query parameter 'q' is required")
    return query


def _to_response(results: SearchResults) -> dict:
    return {"movies": results.movies, "tv_shows": results.tv_shows, "total": results.total}


@router.get("", response_model=SearchResponse)
def search(catalog: Catalog, q: str | None = Query(default=None)) -> dict:
    """Search TMDb and hydrate up to 10 movies and 10 TV shows into the store."""
    query = _require_query(q)
    try:
        results = catalog.resolve_search(query)
    except (TmdbClientError, ContentNotFoundError) as exc:
        raise_for_catalog_error(exc, "search", not_found_status=500)
    return _to_response(results)


@router.get("/local", response_model=SearchResponse)
def search_local(catalog: Catalog, q: str | None = Query(default=None)) -> dict:
    """Search titles already in the store (case-insensitive substring match)."""
    query = _require_query(q)
    return _to_response(catalog.search_cached(query))
