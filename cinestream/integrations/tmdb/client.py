from __future__ import annotations

import logging
import os
from typing import Any, Literal, Mapping

import requests

from cinestream.integrations.tmdb.errors import TmdbClientError, TmdbConfigError
from cinestream.integrations.tmdb.payloads import (
    TmdbMovieDetails,
    TmdbPage,
    TmdbSeasonDetails,
    TmdbTvDetails,
    parse_payload,
)

logger = logging.getLogger(__name__)

TMDB_API_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_TIMEOUT_SECONDS = 20.0

MediaKind = Literal["movie", "tv"]


def resolve_api_key(api_key: str | None = None) -> str | None:
    """
    Best-effort API key resolution for callers that want to continue when the key is missing.
    """

    resolved = (api_key or os.getenv("TMDB_API_KEY") or os.getenv("VITE_TMDB_API_KEY") or "").strip()
    return resolved or None


def _require_api_key(api_key: str | None) -> str:
    resolved = resolve_api_key(api_key)
    if not resolved:
        raise TmdbConfigError("TMDB API key not configured (set TMDB_API_KEY).")
    return resolved


def resolve_base_url(base_url: str | None = None) -> str:
    resolved = (base_url or os.getenv("TMDB_API_BASE_URL") or TMDB_API_BASE_URL).strip()
    return resolved.rstrip("/")


def _request_json(
    session: requests.Session,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> dict[str, Any]:
    """
    Single GET against TMDb. No retries: any failure fails the caller immediately.
    """
    headers = {
        "accept": "application/json",
        "user-agent": "cinestream/0.1",
    }
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout_seconds)
    except requests.RequestException as exc:
        raise TmdbClientError(f"TMDb request failed: {exc}") from exc

    if resp.status_code != 200:
        raise TmdbClientError(
            f"TMDB API error: HTTP {resp.status_code} {resp.reason or ''}".strip(),
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        )

    try:
        payload = resp.json()
    except ValueError as exc:
        raise TmdbClientError(
            "TMDb returned non-JSON response.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        ) from exc

    if not isinstance(payload, dict):
        raise TmdbClientError("TMDb returned unexpected JSON shape (not an object).")
    return payload


class TmdbClient:
    """
    Read-only client for the TMDb v3 API.

    The API key is resolved on every call (explicit value first, then the
    environment), so a missing key surfaces as a `TmdbConfigError` on the
    request that needs it rather than at construction time.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        session: requests.Session | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        language: str = "en-US",
    ) -> None:
        self._api_key = api_key
        self.base_url = resolve_base_url(base_url)
        self.session = session or requests.Session()
        self.timeout_seconds = timeout_seconds
        self.language = language

    def close(self) -> None:
        self.session.close()

    def _get(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        api_key = _require_api_key(self._api_key)
        query: dict[str, Any] = {"api_key": api_key, "language": self.language}
        query.update(params or {})
        url = f"{self.base_url}{path}"
        logger.debug(f"TMDb GET {path}")
        return _request_json(self.session, url, params=query, timeout_seconds=self.timeout_seconds)

    def fetch_movie_details(self, movie_id: int, *, append_to_response: list[str] | None = None) -> TmdbMovieDetails:
        """Fetch `/movie/{id}`. Pass `append_to_response=["credits"]` to include cast and crew."""
        params = _append_params(append_to_response)
        payload = self._get(f"/movie/{int(movie_id)}", params)
        return parse_payload(TmdbMovieDetails, payload, context=f"movie {movie_id}")

    def fetch_tv_details(self, tv_id: int, *, append_to_response: list[str] | None = None) -> TmdbTvDetails:
        params = _append_params(append_to_response)
        payload = self._get(f"/tv/{int(tv_id)}", params)
        return parse_payload(TmdbTvDetails, payload, context=f"tv {tv_id}")

    def fetch_tv_season(self, tv_id: int, season_number: int) -> TmdbSeasonDetails:
        payload = self._get(f"/tv/{int(tv_id)}/season/{int(season_number)}")
        return parse_payload(TmdbSeasonDetails, payload, context=f"tv {tv_id} season {season_number}")

    def fetch_popular(self, kind: MediaKind, *, page: int = 1) -> TmdbPage:
        """First page of `/movie/popular` or `/tv/popular`, in provider order."""
        if kind not in ("movie", "tv"):
            raise ValueError(f"Unsupported media kind: {kind!r}")
        payload = self._get(f"/{kind}/popular", {"page": page})
        return parse_payload(TmdbPage, payload, context=f"popular {kind}")

    def search_multi(self, query: str, *, page: int = 1) -> TmdbPage:
        """Combined movie/TV/person search via `/search/multi`."""
        cleaned = (query or "").strip()
        if not cleaned:
            raise ValueError("Search query is empty.")
        payload = self._get("/search/multi", {"query": cleaned, "page": page, "include_adult": "false"})
        return parse_payload(TmdbPage, payload, context="search")


def _append_params(append_to_response: list[str] | None) -> dict[str, Any]:
    parts = [p.strip() for p in (append_to_response or []) if isinstance(p, str) and p.strip()]
    if not parts:
        return {}
    return {"append_to_response": ",".join(sorted(set(parts)))}
