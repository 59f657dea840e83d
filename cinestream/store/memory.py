"""
In-memory content store.

Holds every movie, TV show, episode and watchlist record for the lifetime of
the process. The store is constructed explicitly (see `api.main.lifespan`) and
handed to request handlers through a dependency; there is no module-level
instance. Nothing here performs I/O, so no operation fails under normal use.

Fine for a single process, not shared across instances.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Generic, TypeVar
from uuid import uuid4

from cinestream.models.content import (
    DEFAULT_COUNTRY,
    DEFAULT_LANGUAGE,
    EpisodeRecord,
    EpisodeUpsert,
    MovieRecord,
    MovieUpsert,
    TvShowRecord,
    TvShowUpsert,
)
from cinestream.models.watchlist import WatchlistAdd, WatchlistItem

logger = logging.getLogger(__name__)

DEFAULT_POPULAR_LIMIT = 20

RecordT = TypeVar("RecordT", MovieRecord, TvShowRecord)
UpsertT = TypeVar("UpsertT", MovieUpsert, TvShowUpsert)


def _new_id() -> str:
    return str(uuid4())


def _now_utc_iso() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


class CatalogCollection(Generic[RecordT, UpsertT]):
    """
    Records keyed by internal id, with a secondary `tmdb_id -> id` index.

    The secondary index is maintained on every insert so lookups by catalog id
    are O(1). When two records ever share a tmdb id, the first one inserted
    stays indexed.
    """

    def __init__(self, *, lock: threading.RLock, id_factory: Callable[[], str] = _new_id) -> None:
        self._lock = lock
        self._id_factory = id_factory
        self._records: dict[str, RecordT] = {}
        self._by_tmdb_id: dict[int, str] = {}

    def __len__(self) -> int:
        return len(self._records)

    def all(self) -> list[RecordT]:
        with self._lock:
            return list(self._records.values())

    def get(self, record_id: str) -> RecordT | None:
        return self._records.get(record_id)

    def get_by_tmdb_id(self, tmdb_id: int) -> RecordT | None:
        with self._lock:
            record_id = self._by_tmdb_id.get(int(tmdb_id))
            if record_id is None:
                return None
            return self._records.get(record_id)

    def create(self, upsert: UpsertT) -> RecordT:
        """Store a new record with a fresh internal id and defaults applied."""
        with self._lock:
            record = self._build(self._id_factory(), upsert)
            self._records[record.id] = record
            self._by_tmdb_id.setdefault(record.tmdb_id, record.id)
            return record

    def insert_if_absent(self, upsert: UpsertT) -> tuple[RecordT, bool]:
        """
        Atomic check-and-insert on `tmdb_id`.

        Returns `(record, created)`. When a record with the same tmdb id already
        exists it is returned unchanged and nothing is inserted.
        """
        with self._lock:
            existing = self.get_by_tmdb_id(upsert.tmdb_id)
            if existing is not None:
                return existing, False
            return self.create(upsert), True

    def search(self, query: str) -> list[RecordT]:
        needle = (query or "").casefold()
        return [record for record in self.all() if needle in record.title.casefold()]

    def list_popular(self, limit: int = DEFAULT_POPULAR_LIMIT) -> list[RecordT]:
        """Highest rated first; a missing rating counts as zero."""
        if limit <= 0:
            return []
        ranked = sorted(self.all(), key=lambda record: record.rating or 0.0, reverse=True)
        return ranked[:limit]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            self._by_tmdb_id.clear()

    def _build(self, record_id: str, upsert: UpsertT) -> RecordT:
        raise NotImplementedError


class MovieCollection(CatalogCollection[MovieRecord, MovieUpsert]):
    def _build(self, record_id: str, upsert: MovieUpsert) -> MovieRecord:
        return MovieRecord(
            id=record_id,
            tmdb_id=int(upsert.tmdb_id),
            title=upsert.title,
            overview=upsert.overview,
            release_date=upsert.release_date,
            runtime=upsert.runtime,
            rating=upsert.rating,
            genres=list(upsert.genres or []),
            poster_path=upsert.poster_path,
            backdrop_path=upsert.backdrop_path,
            cast=list(upsert.cast or []),
            director=upsert.director,
            studio=upsert.studio,
            language=upsert.language or DEFAULT_LANGUAGE,
            country=upsert.country or DEFAULT_COUNTRY,
        )


class TvShowCollection(CatalogCollection[TvShowRecord, TvShowUpsert]):
    def _build(self, record_id: str, upsert: TvShowUpsert) -> TvShowRecord:
        return TvShowRecord(
            id=record_id,
            tmdb_id=int(upsert.tmdb_id),
            title=upsert.title,
            overview=upsert.overview,
            first_air_date=upsert.first_air_date,
            last_air_date=upsert.last_air_date,
            number_of_seasons=upsert.number_of_seasons or 1,
            number_of_episodes=upsert.number_of_episodes or 1,
            rating=upsert.rating,
            genres=list(upsert.genres or []),
            poster_path=upsert.poster_path,
            backdrop_path=upsert.backdrop_path,
            cast=list(upsert.cast or []),
            creator=upsert.creator,
            studio=upsert.studio,
            language=upsert.language or DEFAULT_LANGUAGE,
            country=upsert.country or DEFAULT_COUNTRY,
        )


class EpisodeCollection:
    """Episodes keyed by internal id and by `(tv_show_id, season, episode)`."""

    def __init__(self, *, lock: threading.RLock, id_factory: Callable[[], str] = _new_id) -> None:
        self._lock = lock
        self._id_factory = id_factory
        self._records: dict[str, EpisodeRecord] = {}
        self._by_key: dict[tuple[str, int, int], str] = {}

    def __len__(self) -> int:
        return len(self._records)

    def get(self, episode_id: str) -> EpisodeRecord | None:
        return self._records.get(episode_id)

    def get_by_number(self, tv_show_id: str, season_number: int, episode_number: int) -> EpisodeRecord | None:
        with self._lock:
            episode_id = self._by_key.get((tv_show_id, int(season_number), int(episode_number)))
            return self._records.get(episode_id) if episode_id else None

    def list_for_show(self, tv_show_id: str, season_number: int | None = None) -> list[EpisodeRecord]:
        with self._lock:
            episodes = [
                ep
                for ep in self._records.values()
                if ep.tv_show_id == tv_show_id and (season_number is None or ep.season_number == season_number)
            ]
        return sorted(episodes, key=lambda ep: (ep.season_number, ep.episode_number))

    def create(self, upsert: EpisodeUpsert) -> EpisodeRecord:
        with self._lock:
            record = EpisodeRecord(
                id=self._id_factory(),
                tv_show_id=upsert.tv_show_id,
                season_number=int(upsert.season_number),
                episode_number=int(upsert.episode_number),
                title=upsert.title,
                overview=upsert.overview,
                air_date=upsert.air_date,
                runtime=upsert.runtime,
                rating=upsert.rating,
                still_path=upsert.still_path,
            )
            self._records[record.id] = record
            self._by_key.setdefault(record.key, record.id)
            return record

    def insert_if_absent(self, upsert: EpisodeUpsert) -> tuple[EpisodeRecord, bool]:
        with self._lock:
            existing = self.get_by_number(*upsert.key)
            if existing is not None:
                return existing, False
            return self.create(upsert), True

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            self._by_key.clear()


class WatchlistCollection:
    """
    Per-user watchlist items in insertion order.

    `(user_id, content_id)` is not enforced unique; duplicate adds are kept.
    """

    def __init__(self, *, lock: threading.RLock, id_factory: Callable[[], str] = _new_id) -> None:
        self._lock = lock
        self._id_factory = id_factory
        self._items: dict[str, WatchlistItem] = {}

    def __len__(self) -> int:
        return len(self._items)

    def list_for_user(self, user_id: str) -> list[WatchlistItem]:
        with self._lock:
            return [item for item in self._items.values() if item.user_id == user_id]

    def add(self, item: WatchlistAdd) -> WatchlistItem:
        with self._lock:
            stored = WatchlistItem(
                id=self._id_factory(),
                user_id=item.user_id,
                content_id=item.content_id,
                content_type=item.content_type,
                added_at=_now_utc_iso(),
            )
            self._items[stored.id] = stored
            return stored

    def _find(self, user_id: str, content_id: str) -> WatchlistItem | None:
        for item in self._items.values():
            if item.user_id == user_id and item.content_id == content_id:
                return item
        return None

    def remove(self, user_id: str, content_id: str) -> bool:
        """Delete the first matching item. Returns False when nothing matched."""
        with self._lock:
            item = self._find(user_id, content_id)
            if item is None:
                return False
            del self._items[item.id]
            return True

    def contains(self, user_id: str, content_id: str) -> bool:
        with self._lock:
            return self._find(user_id, content_id) is not None

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class ContentStore:
    """
    Process-local store for all content and watchlist records.

    A single re-entrant lock serializes every mutation across collections, so
    handlers running in FastAPI's threadpool never see a half-written index.
    """

    def __init__(self, *, id_factory: Callable[[], str] = _new_id) -> None:
        self._lock = threading.RLock()
        self.movies = MovieCollection(lock=self._lock, id_factory=id_factory)
        self.tv_shows = TvShowCollection(lock=self._lock, id_factory=id_factory)
        self.episodes = EpisodeCollection(lock=self._lock, id_factory=id_factory)
        self.watchlist = WatchlistCollection(lock=self._lock, id_factory=id_factory)

    def stats(self) -> dict[str, int]:
        return {
            "movies": len(self.movies),
            "tv_shows": len(self.tv_shows),
            "episodes": len(self.episodes),
            "watchlist": len(self.watchlist),
        }

    def clear(self) -> None:
        with self._lock:
            self.movies.clear()
            self.tv_shows.clear()
            self.episodes.clear()
            self.watchlist.clear()
        logger.debug("Content store cleared")
