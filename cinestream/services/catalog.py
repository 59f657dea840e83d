"""
Lookup/upsert orchestration over the content store and the TMDb catalog.

Resolution always consults the store first and falls back to TMDb on a miss,
writing the normalized record through to the store. Cached records are never
refreshed or invalidated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from cinestream.integrations.tmdb.client import MediaKind
from cinestream.integrations.tmdb.errors import TmdbClientError
from cinestream.integrations.tmdb.normalize import (
    episode_upsert_from_tmdb,
    movie_upsert_from_tmdb,
    tv_show_upsert_from_tmdb,
)
from cinestream.integrations.tmdb.payloads import (
    TmdbMovieDetails,
    TmdbPage,
    TmdbSeasonDetails,
    TmdbTvDetails,
)
from cinestream.models.content import EpisodeRecord, MovieRecord, TvShowRecord
from cinestream.models.watchlist import WatchlistItem
from cinestream.store.memory import ContentStore

logger = logging.getLogger(__name__)

POPULAR_LIMIT = 20
SEARCH_LIMIT_PER_KIND = 10
DETAIL_APPENDS = ["credits"]


class ContentNotFoundError(LookupError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CatalogClient(Protocol):
    def fetch_movie_details(
        self, movie_id: int, *, append_to_response: list[str] | None = None
    ) -> TmdbMovieDetails: ...

    def fetch_tv_details(self, tv_id: int, *, append_to_response: list[str] | None = None) -> TmdbTvDetails: ...

    def fetch_tv_season(self, tv_id: int, season_number: int) -> TmdbSeasonDetails: ...

    def fetch_popular(self, kind: MediaKind, *, page: int = 1) -> TmdbPage: ...

    def search_multi(self, query: str, *, page: int = 1) -> TmdbPage: ...


@dataclass
class SearchResults:
    movies: list[MovieRecord] = field(default_factory=list)
    tv_shows: list[TvShowRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.movies) + len(self.tv_shows)


def parse_tmdb_id(value: str | int) -> int | None:
    """
    Interpret an identifier as a TMDb id.

    Only plain positive integers qualify (`"603"`, `603`); anything else
    (internal uuids, `"603abc"`) returns None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    raw = str(value or "").strip()
    if not raw.isdecimal():
        return None
    parsed = int(raw)
    return parsed if parsed > 0 else None


class CatalogService:
    def __init__(self, store: ContentStore, client: CatalogClient) -> None:
        self.store = store
        self.client = client

    # --- Single titles ---

    def resolve_movie(self, identifier: str | int) -> MovieRecord:
        key = str(identifier).strip()
        record = self.store.movies.get(key)
        if record is not None:
            return record

        tmdb_id = parse_tmdb_id(key)
        if tmdb_id is None:
            raise ContentNotFoundError("Movie not found")

        cached = self.store.movies.get_by_tmdb_id(tmdb_id)
        if cached is not None:
            logger.debug(f"Movie cache hit for tmdb id {tmdb_id}")
            return cached
        return self._hydrate_movie(tmdb_id)

    def resolve_tv_show(self, identifier: str | int) -> TvShowRecord:
        key = str(identifier).strip()
        record = self.store.tv_shows.get(key)
        if record is not None:
            return record

        tmdb_id = parse_tmdb_id(key)
        if tmdb_id is None:
            raise ContentNotFoundError("TV show not found")

        cached = self.store.tv_shows.get_by_tmdb_id(tmdb_id)
        if cached is not None:
            logger.debug(f"TV show cache hit for tmdb id {tmdb_id}")
            return cached
        return self._hydrate_tv_show(tmdb_id)

    def _hydrate_movie(self, tmdb_id: int) -> MovieRecord:
        try:
            details = self.client.fetch_movie_details(tmdb_id, append_to_response=DETAIL_APPENDS)
        except TmdbClientError as exc:
            if exc.is_not_found:
                raise ContentNotFoundError("Movie not found") from exc
            raise
        record, created = self.store.movies.insert_if_absent(movie_upsert_from_tmdb(details))
        if created:
            logger.debug(f"Cached movie tmdb id {tmdb_id} as {record.id}")
        return record

    def _hydrate_tv_show(self, tmdb_id: int) -> TvShowRecord:
        try:
            details = self.client.fetch_tv_details(tmdb_id, append_to_response=DETAIL_APPENDS)
        except TmdbClientError as exc:
            if exc.is_not_found:
                raise ContentNotFoundError("TV show not found") from exc
            raise
        record, created = self.store.tv_shows.insert_if_absent(tv_show_upsert_from_tmdb(details))
        if created:
            logger.debug(f"Cached TV show tmdb id {tmdb_id} as {record.id}")
        return record

    def _movie_for_tmdb_id(self, tmdb_id: int) -> MovieRecord:
        cached = self.store.movies.get_by_tmdb_id(tmdb_id)
        return cached if cached is not None else self._hydrate_movie(tmdb_id)

    def _tv_show_for_tmdb_id(self, tmdb_id: int) -> TvShowRecord:
        cached = self.store.tv_shows.get_by_tmdb_id(tmdb_id)
        return cached if cached is not None else self._hydrate_tv_show(tmdb_id)

    # --- Lists ---

    def resolve_popular(self, kind: MediaKind) -> list[MovieRecord] | list[TvShowRecord]:
        """
        Popular titles in TMDb's order, capped at `POPULAR_LIMIT`.

        Titles already in the store are returned as cached, without refetching.
        """
        page = self.client.fetch_popular(kind)
        items = page.results[:POPULAR_LIMIT]
        if kind == "movie":
            return [self._movie_for_tmdb_id(item.id) for item in items]
        if kind == "tv":
            return [self._tv_show_for_tmdb_id(item.id) for item in items]
        raise ValueError(f"Unsupported media kind: {kind!r}")

    def resolve_search(self, query: str) -> SearchResults:
        """Combined TMDb search, hydrated into at most 10 movies and 10 shows."""
        page = self.client.search_multi(query)
        results = SearchResults()
        for item in page.results:
            if item.media_type == "movie" and len(results.movies) < SEARCH_LIMIT_PER_KIND:
                results.movies.append(self._movie_for_tmdb_id(item.id))
            elif item.media_type == "tv" and len(results.tv_shows) < SEARCH_LIMIT_PER_KIND:
                results.tv_shows.append(self._tv_show_for_tmdb_id(item.id))
            if len(results.movies) >= SEARCH_LIMIT_PER_KIND and len(results.tv_shows) >= SEARCH_LIMIT_PER_KIND:
                break
        return results

    def search_cached(self, query: str) -> SearchResults:
        """Title search over the store only; never calls TMDb."""
        return SearchResults(
            movies=self.store.movies.search(query)[:SEARCH_LIMIT_PER_KIND],
            tv_shows=self.store.tv_shows.search(query)[:SEARCH_LIMIT_PER_KIND],
        )

    # --- Episodes ---

    def resolve_season_episodes(self, show_identifier: str | int, season_number: int) -> list[EpisodeRecord]:
        if season_number < 0:
            raise ValueError("season_number must be >= 0")

        show = self.resolve_tv_show(show_identifier)
        cached = self.store.episodes.list_for_show(show.id, season_number)
        if cached:
            return cached

        try:
            season = self.client.fetch_tv_season(show.tmdb_id, season_number)
        except TmdbClientError as exc:
            if exc.is_not_found:
                raise ContentNotFoundError("Season not found") from exc
            raise

        for episode in season.episodes:
            self.store.episodes.insert_if_absent(episode_upsert_from_tmdb(show.id, episode))
        logger.debug(f"Cached {len(season.episodes)} episodes for show {show.id} season {season_number}")
        return self.store.episodes.list_for_show(show.id, season_number)

    # --- Watchlist ---

    def content_for(self, item: WatchlistItem) -> MovieRecord | TvShowRecord | None:
        if item.content_type == "movie":
            return self.store.movies.get(item.content_id)
        if item.content_type == "tv":
            return self.store.tv_shows.get(item.content_id)
        return None

    def watchlist_entries(self, user_id: str) -> list[tuple[WatchlistItem, MovieRecord | TvShowRecord]]:
        """The user's items paired with their content; items whose content is gone are skipped."""
        entries = []
        for item in self.store.watchlist.list_for_user(user_id):
            content = self.content_for(item)
            if content is not None:
                entries.append((item, content))
        return entries
