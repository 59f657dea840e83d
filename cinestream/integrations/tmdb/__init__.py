"""
TMDb integration clients.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cinestream.integrations.tmdb.client import TmdbClient, resolve_api_key
    from cinestream.integrations.tmdb.errors import TmdbClientError, TmdbConfigError, TmdbPayloadError

__all__ = [
    "TmdbClient",
    "TmdbClientError",
    "TmdbConfigError",
    "TmdbPayloadError",
    "resolve_api_key",
]


def __getattr__(name: str):
    if name in ("TmdbClient", "resolve_api_key"):
        from cinestream.integrations.tmdb import client

        return getattr(client, name)
    if name in __all__:
        from cinestream.integrations.tmdb import errors

        return getattr(errors, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
