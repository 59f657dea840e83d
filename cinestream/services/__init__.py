"""
Application services built on the store and the catalog client.
"""

from cinestream.services.catalog import (
    CatalogClient,
    CatalogService,
    ContentNotFoundError,
    SearchResults,
    parse_tmdb_id,
)

__all__ = [
    "CatalogClient",
    "CatalogService",
    "ContentNotFoundError",
    "SearchResults",
    "parse_tmdb_id",
]
