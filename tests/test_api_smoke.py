"""
Smoke tests for the Cinestream API.

These tests run against a fresh in-memory store and a fake catalog client, so
no TMDb API key or network access is required.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api import deps
from api.main import app
from cinestream.integrations.tmdb.errors import TmdbClientError, TmdbConfigError
from cinestream.store.memory import ContentStore


@pytest.fixture
def client(store: ContentStore, fake_catalog):  # noqa: ANN001
    """Create a test client with the store and catalog client overridden."""
    app.dependency_overrides[deps.get_store] = lambda: store
    app.dependency_overrides[deps.get_catalog_client] = lambda: fake_catalog
    app.dependency_overrides[deps.get_watchlist_user_id] = lambda: "test-user"
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthEndpoints:
    """Test health check endpoints."""

    def test_root_returns_ok(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "cinestream"

    def test_health_returns_healthy(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestMoviesEndpoints:
    def test_popular_movies_end_to_end(self, client: TestClient, fake_catalog):  # noqa: ANN001
        """Two upstream items become two normalized movies with defaults applied."""
        fake_catalog.add_movie(603, "The Matrix", vote_average=8.2, genres=[{"id": 28, "name": "Action"}])
        fake_catalog.add_movie(604, "The Matrix Reloaded")
        fake_catalog.popular["movie"] = [{"id": 603, "title": "The Matrix"}, {"id": 604}]

        response = client.get("/api/movies")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 2
        assert [m["tmdbId"] for m in data] == [603, 604]
        assert data[0]["title"] == "The Matrix"
        assert data[0]["genres"] == ["Action"]
        assert data[1]["genres"] == []
        assert all(m["language"] == "en" and m["country"] == "US" for m in data)
        assert "posterPath" in data[0]
        assert "poster_path" not in data[0]

    def test_popular_movies_upstream_error_returns_500(self, client: TestClient, fake_catalog):  # noqa: ANN001
        fake_catalog.error = TmdbClientError("TMDB API error: HTTP 503", status_code=503)

        response = client.get("/api/movies")

        assert response.status_code == 500
        assert "503" in response.json()["detail"]

    def test_missing_api_key_returns_500(self, client: TestClient, fake_catalog):  # noqa: ANN001
        fake_catalog.error = TmdbConfigError("TMDB API key not configured (set TMDB_API_KEY).")

        response = client.get("/api/movies")

        assert response.status_code == 500
        assert "TMDB API key not configured" in response.json()["detail"]

    def test_cached_popular_movies_are_sorted_by_rating(self, client: TestClient, fake_catalog):  # noqa: ANN001
        fake_catalog.add_movie(1, "Low", vote_average=3.0)
        fake_catalog.add_movie(2, "High", vote_average=9.0)
        client.get("/api/movies/1")
        client.get("/api/movies/2")
        calls_before = len(fake_catalog.calls)

        response = client.get("/api/movies", params={"cached": "true", "limit": 1})

        assert response.status_code == 200
        assert [m["title"] for m in response.json()] == ["High"]
        assert len(fake_catalog.calls) == calls_before

    def test_get_movie_by_tmdb_id_then_internal_id(self, client: TestClient, fake_catalog):  # noqa: ANN001
        fake_catalog.add_movie(603, "The Matrix")

        first = client.get("/api/movies/603").json()
        second = client.get(f"/api/movie/{first['id']}").json()

        assert second["id"] == first["id"]
        assert fake_catalog.count("movie") == 1

    def test_get_movie_not_found(self, client: TestClient):
        assert client.get("/api/movies/unknown-id").status_code == 404
        response = client.get("/api/movies/424242")
        assert response.status_code == 404
        assert response.json()["detail"] == "Movie not found"

    @pytest.mark.parametrize("movie_id", ["²", "¹²"])
    def test_get_movie_superscript_id_not_found(self, client: TestClient, fake_catalog, movie_id):  # noqa: ANN001
        response = client.get(f"/api/movies/{movie_id}")

        assert response.status_code == 404
        assert fake_catalog.count("movie") == 0


class TestTvEndpoints:
    def test_popular_tv(self, client: TestClient, fake_catalog):  # noqa: ANN001
        fake_catalog.add_tv_show(1396, "Breaking Bad", number_of_seasons=5)
        fake_catalog.popular["tv"] = [{"id": 1396}]

        response = client.get("/api/tv")

        assert response.status_code == 200
        data = response.json()
        assert data[0]["numberOfSeasons"] == 5
        assert data[0]["numberOfEpisodes"] == 1

    def test_get_tv_show_not_found(self, client: TestClient):
        assert client.get("/api/tv/1").status_code == 404
        assert client.get("/api/tv/¹²").status_code == 404

    def test_season_episodes(self, client: TestClient, fake_catalog, tmdb_fixture):  # noqa: ANN001
        fake_catalog.tv_shows[1396] = tmdb_fixture("tv_details_sample.json")
        fake_catalog.seasons[(1396, 1)] = tmdb_fixture("tv_season_sample.json")

        response = client.get("/api/tv/1396/seasons/1/episodes")

        assert response.status_code == 200
        data = response.json()
        assert [e["episodeNumber"] for e in data] == [1, 2]
        assert data[0]["title"] == "Pilot"

    def test_season_episodes_unknown_season(self, client: TestClient, fake_catalog):  # noqa: ANN001
        fake_catalog.add_tv_show(1396, "Breaking Bad")
        assert client.get("/api/tv/1396/seasons/7/episodes").status_code == 404


class TestSearchEndpoints:
    def test_search_requires_query(self, client: TestClient):
        assert client.get("/api/search").status_code == 400
        assert client.get("/api/search", params={"q": "   "}).status_code == 400

    def test_search_returns_movies_and_shows(self, client: TestClient, fake_catalog):  # noqa: ANN001
        fake_catalog.add_movie(557, "Spider-Man")
        fake_catalog.add_tv_show(1396, "Breaking Bad")
        fake_catalog.search_results = [
            {"id": 557, "media_type": "movie"},
            {"id": 1396, "media_type": "tv"},
        ]

        response = client.get("/api/search", params={"q": "spider"})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["movies"][0]["title"] == "Spider-Man"
        assert data["tvShows"][0]["title"] == "Breaking Bad"

    def test_search_upstream_error_returns_500(self, client: TestClient, fake_catalog):  # noqa: ANN001
        fake_catalog.error = TmdbClientError("TMDb request failed: timeout")
        assert client.get("/api/search", params={"q": "x"}).status_code == 500

    def test_local_search_uses_store_only(self, client: TestClient, fake_catalog):  # noqa: ANN001
        fake_catalog.add_movie(49521, "Man of Steel")
        client.get("/api/movies/49521")

        data = client.get("/api/search/local", params={"q": "steel"}).json()

        assert [m["title"] for m in data["movies"]] == ["Man of Steel"]
        assert data["tvShows"] == []
        assert data["total"] == 1


class TestServersEndpoint:
    def test_servers_requires_video_id(self, client: TestClient):
        response = client.get("/api/servers")
        assert response.status_code == 400
        assert response.json()["detail"] == "video_id is required"

    def test_movie_servers(self, client: TestClient):
        data = client.get("/api/servers", params={"video_id": "603", "type": "movie"}).json()

        assert len(data["servers"]) == 2
        assert data["servers"][0]["url"].endswith("/embed/movie/603")
        assert data["defaultServer"] == data["servers"][0]

    def test_episode_servers(self, client: TestClient):
        params = {"video_id": "1396", "type": "tv", "season": "1", "episode": "2"}
        data = client.get("/api/servers", params=params).json()

        assert data["servers"][0]["url"] == "https://vidsrc.net/embed/tv/1396/1/2"


class TestWatchlistEndpoints:
    def test_add_list_and_remove(self, client: TestClient, fake_catalog):  # noqa: ANN001
        fake_catalog.add_movie(603, "The Matrix")
        movie = client.get("/api/movies/603").json()

        created = client.post("/api/watchlist", json={"contentId": movie["id"], "contentType": "movie"})
        assert created.status_code == 200
        item = created.json()
        assert item["userId"] == "test-user"
        assert item["contentId"] == movie["id"]
        assert item["addedAt"]

        listing = client.get("/api/watchlist").json()
        assert len(listing) == 1
        assert listing[0]["content"]["title"] == "The Matrix"
        assert listing[0]["content"]["director"] is None

        status = client.get(f"/api/watchlist/{movie['id']}").json()
        assert status == {"contentId": movie["id"], "inWatchlist": True}

        removed = client.delete(f"/api/watchlist/{movie['id']}")
        assert removed.status_code == 200
        assert removed.json() == {"message": "Removed from watchlist"}
        assert client.get("/api/watchlist").json() == []

    def test_watchlist_populates_tv_content(self, client: TestClient, fake_catalog):  # noqa: ANN001
        fake_catalog.add_tv_show(1396, "Breaking Bad")
        show = client.get("/api/tv/1396").json()
        client.post("/api/watchlist", json={"contentId": show["id"], "contentType": "tv"})

        listing = client.get("/api/watchlist").json()

        assert listing[0]["content"]["creator"] is None
        assert listing[0]["content"]["numberOfSeasons"] == 1

    def test_watchlist_skips_items_without_content(self, client: TestClient):
        client.post("/api/watchlist", json={"contentId": "missing", "contentType": "movie"})
        assert client.get("/api/watchlist").json() == []

    @pytest.mark.parametrize(
        "payload",
        [{}, {"contentId": "x"}, {"contentId": "x", "contentType": "book"}, {"contentId": "", "contentType": "tv"}],
    )
    def test_add_validates_payload(self, client: TestClient, payload):  # noqa: ANN001
        response = client.post("/api/watchlist", json=payload)
        assert response.status_code == 400

    @pytest.mark.parametrize("body", [b"{not json", b"", b"[1, 2]", b"\xff\xfe"])
    def test_add_rejects_malformed_body(self, client: TestClient, store: ContentStore, body):  # noqa: ANN001
        response = client.post("/api/watchlist", content=body, headers={"content-type": "application/json"})

        assert response.status_code == 400
        assert len(store.watchlist) == 0

    def test_remove_missing_returns_404(self, client: TestClient, store: ContentStore):
        response = client.delete("/api/watchlist/not-there")
        assert response.status_code == 404
        assert len(store.watchlist) == 0


def test_lifespan_builds_store_and_client(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("TMDB_API_KEY", raising=False)
    monkeypatch.delenv("VITE_TMDB_API_KEY", raising=False)

    with TestClient(app) as client:
        assert isinstance(app.state.store, ContentStore)
        # Missing key is reported per request, not at startup.
        response = client.get("/api/movies")
        assert response.status_code == 500
        assert "TMDB API key not configured" in response.json()["detail"]
