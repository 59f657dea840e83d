"""
Process-local storage for content and watchlist records.
"""

from cinestream.store.memory import (
    DEFAULT_POPULAR_LIMIT,
    CatalogCollection,
    ContentStore,
    EpisodeCollection,
    MovieCollection,
    TvShowCollection,
    WatchlistCollection,
)

__all__ = [
    "DEFAULT_POPULAR_LIMIT",
    "CatalogCollection",
    "ContentStore",
    "EpisodeCollection",
    "MovieCollection",
    "TvShowCollection",
    "WatchlistCollection",
]
