"""
Movie browse endpoints.
"""
from __future__ import annotations

from fastapi import APIRouter, Query

from api.deps import Catalog, Store, raise_for_catalog_error
from api.schemas import Movie
from cinestream.integrations.tmdb.errors import TmdbClientError
from cinestream.models.content import MovieRecord
from cinestream.services.catalog import ContentNotFoundError

router = APIRouter(tags=["movies"])


@router.get("/movies", response_model=list[Movie])
def list_popular_movies(
    catalog: Catalog,
    store: Store,
    cached: bool = Query(default=False),
    limit: int = Query(default=20, ge=1, le=100),
) -> list[MovieRecord]:
    """
    Popular movies in TMDb order (max 20).

    With `cached=true`, returns the store's highest rated movies instead and
    never calls TMDb.
    """
    if cached:
        return store.movies.list_popular(limit)
    try:
        return catalog.resolve_popular("movie")
    except (TmdbClientError, ContentNotFoundError) as exc:
        raise_for_catalog_error(exc, "listing popular movies", not_found_status=500)


@router.get("/movies/{movie_id}", response_model=Movie)
def get_movie(catalog: Catalog, movie_id: str) -> MovieRecord:
    """Get a movie by internal id or TMDb id."""
    try:
        return catalog.resolve_movie(movie_id)
    except (TmdbClientError, ContentNotFoundError) as exc:
        raise_for_catalog_error(exc, f"fetching movie {movie_id}")


@router.get("/movie/{movie_id}", response_model=Movie, include_in_schema=False)
def get_movie_alias(catalog: Catalog, movie_id: str) -> MovieRecord:
    return get_movie(catalog, movie_id)
