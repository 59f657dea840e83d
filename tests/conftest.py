from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from cinestream.integrations.tmdb.errors import TmdbClientError
from cinestream.integrations.tmdb.payloads import (
    TmdbMovieDetails,
    TmdbPage,
    TmdbSeasonDetails,
    TmdbTvDetails,
)
from cinestream.services.catalog import CatalogService
from cinestream.store.memory import ContentStore

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures" / "tmdb"


def load_fixture(name: str) -> dict[str, Any]:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


class FakeCatalogClient:
    """
    In-memory stand-in for `TmdbClient`.

    Details are served from the dicts registered on the instance; unknown ids
    raise a 404 `TmdbClientError` like the real API. Every call is recorded.
    """

    def __init__(self) -> None:
        self.movies: dict[int, dict[str, Any]] = {}
        self.tv_shows: dict[int, dict[str, Any]] = {}
        self.seasons: dict[tuple[int, int], dict[str, Any]] = {}
        self.popular: dict[str, list[dict[str, Any]]] = {"movie": [], "tv": []}
        self.search_results: list[dict[str, Any]] = []
        self.error: TmdbClientError | None = None
        self.calls: list[tuple[str, Any]] = []

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    def fetch_movie_details(self, movie_id: int, *, append_to_response: list[str] | None = None) -> TmdbMovieDetails:
        self.calls.append(("movie", movie_id))
        self._check()
        if movie_id not in self.movies:
            raise TmdbClientError("TMDB API error: HTTP 404 Not Found", status_code=404)
        return TmdbMovieDetails.model_validate(self.movies[movie_id])

    def fetch_tv_details(self, tv_id: int, *, append_to_response: list[str] | None = None) -> TmdbTvDetails:
        self.calls.append(("tv", tv_id))
        self._check()
        if tv_id not in self.tv_shows:
            raise TmdbClientError("TMDB API error: HTTP 404 Not Found", status_code=404)
        return TmdbTvDetails.model_validate(self.tv_shows[tv_id])

    def fetch_tv_season(self, tv_id: int, season_number: int) -> TmdbSeasonDetails:
        self.calls.append(("season", (tv_id, season_number)))
        self._check()
        payload = self.seasons.get((tv_id, season_number))
        if payload is None:
            raise TmdbClientError("TMDB API error: HTTP 404 Not Found", status_code=404)
        return TmdbSeasonDetails.model_validate(payload)

    def fetch_popular(self, kind: str, *, page: int = 1) -> TmdbPage:
        self.calls.append(("popular", kind))
        self._check()
        return TmdbPage.model_validate({"page": page, "results": self.popular[kind]})

    def search_multi(self, query: str, *, page: int = 1) -> TmdbPage:
        self.calls.append(("search", query))
        self._check()
        return TmdbPage.model_validate({"page": page, "results": self.search_results})

    def add_movie(self, tmdb_id: int, title: str, **fields: Any) -> dict[str, Any]:
        payload = {"id": tmdb_id, "title": title, **fields}
        self.movies[tmdb_id] = payload
        return payload

    def add_tv_show(self, tmdb_id: int, name: str, **fields: Any) -> dict[str, Any]:
        payload = {"id": tmdb_id, "name": name, **fields}
        self.tv_shows[tmdb_id] = payload
        return payload

    def count(self, kind: str) -> int:
        return sum(1 for call_kind, _ in self.calls if call_kind == kind)


@pytest.fixture
def store() -> ContentStore:
    return ContentStore()


@pytest.fixture
def fake_catalog() -> FakeCatalogClient:
    return FakeCatalogClient()


@pytest.fixture
def service(store: ContentStore, fake_catalog: FakeCatalogClient) -> CatalogService:
    return CatalogService(store, fake_catalog)


@pytest.fixture
def tmdb_fixture():
    """Loader for the sample TMDb payloads under tests/fixtures/tmdb."""
    return load_fixture
