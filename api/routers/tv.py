"""
TV show browse endpoints, including season episode lists.
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Path, Query

from api.deps import Catalog, Store, raise_for_catalog_error
from api.schemas import Episode, TvShow
from cinestream.integrations.tmdb.errors import TmdbClientError
from cinestream.models.content import EpisodeRecord, TvShowRecord
from cinestream.services.catalog import ContentNotFoundError

router = APIRouter(prefix="/tv", tags=["tv"])


@router.get("", response_model=list[TvShow])
def list_popular_tv_shows(
    catalog: Catalog,
    store: Store,
    cached: bool = Query(default=False),
    limit: int = Query(default=20, ge=1, le=100),
) -> list[TvShowRecord]:
    """Popular TV shows in TMDb order (max 20), or the store's top rated with `cached=true`."""
    if cached:
        return store.tv_shows.list_popular(limit)
    try:
        return catalog.resolve_popular("tv")
    except (TmdbClientError, ContentNotFoundError) as exc:
        raise_for_catalog_error(exc, "listing popular TV shows", not_found_status=500)


@router.get("/{show_id}", response_model=TvShow)
def get_tv_show(catalog: Catalog, show_id: str) -> TvShowRecord:
    """Get a TV show by internal id or TMDb id."""
    try:
        return catalog.resolve_tv_show(show_id)
    except (TmdbClientError, ContentNotFoundError) as exc:
        raise_for_catalog_error(exc, f"fetching TV show {show_id}")


@router.get("/{show_id}/seasons/{season_number}/episodes", response_model=list[Episode])
def list_season_episodes(
    catalog: Catalog,
    show_id: str,
    season_number: int = Path(ge=0),
) -> list[EpisodeRecord]:
    """List the episodes of one season, fetching them from TMDb on first access."""
    try:
        return catalog.resolve_season_episodes(show_id, season_number)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except (TmdbClientError, ContentNotFoundError) as exc:
        raise_for_catalog_error(exc, f"listing episodes for show {show_id} season {season_number}")
