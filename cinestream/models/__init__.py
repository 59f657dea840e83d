"""
Domain models shared across the store, services and the API.
"""

from cinestream.models.content import (
    CastMember,
    EpisodeRecord,
    EpisodeUpsert,
    MovieRecord,
    MovieUpsert,
    TvShowRecord,
    TvShowUpsert,
)
from cinestream.models.watchlist import ContentType, WatchlistAdd, WatchlistItem

__all__ = [
    "CastMember",
    "ContentType",
    "EpisodeRecord",
    "EpisodeUpsert",
    "MovieRecord",
    "MovieUpsert",
    "TvShowRecord",
    "TvShowUpsert",
    "WatchlistAdd",
    "WatchlistItem",
]
