from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_LANGUAGE = "en"
DEFAULT_COUNTRY = "US"


@dataclass(frozen=True)
class CastMember:
    name: str
    character: str
    profile_path: str | None = None


@dataclass(frozen=True)
class MovieRecord:
    """
    Canonical movie record as held by the content store.

    `id` is assigned by the store on insert and never changes; `tmdb_id` is the
    catalog's identifier and is unique across all movie records.
    """

    id: str
    tmdb_id: int
    title: str
    overview: str | None = None
    release_date: str | None = None
    runtime: int | None = None  # minutes
    rating: float | None = None
    genres: list[str] = field(default_factory=list)
    poster_path: str | None = None
    backdrop_path: str | None = None
    cast: list[CastMember] = field(default_factory=list)
    director: str | None = None
    studio: str | None = None
    language: str = DEFAULT_LANGUAGE
    country: str = DEFAULT_COUNTRY


@dataclass(frozen=True)
class TvShowRecord:
    """
    Canonical TV show record (mirrors `MovieRecord` with series-specific fields).
    """

    id: str
    tmdb_id: int
    title: str
    overview: str | None = None
    first_air_date: str | None = None
    last_air_date: str | None = None
    number_of_seasons: int = 1
    number_of_episodes: int = 1
    rating: float | None = None
    genres: list[str] = field(default_factory=list)
    poster_path: str | None = None
    backdrop_path: str | None = None
    cast: list[CastMember] = field(default_factory=list)
    creator: str | None = None
    studio: str | None = None
    language: str = DEFAULT_LANGUAGE
    country: str = DEFAULT_COUNTRY


@dataclass(frozen=True)
class EpisodeRecord:
    id: str
    tv_show_id: str
    season_number: int
    episode_number: int
    title: str
    overview: str | None = None
    air_date: str | None = None
    runtime: int | None = None
    rating: float | None = None
    still_path: str | None = None

    @property
    def key(self) -> tuple[str, int, int]:
        return (self.tv_show_id, self.season_number, self.episode_number)


# --- Upsert shapes (everything except the store-assigned id) ---


@dataclass(frozen=True)
class MovieUpsert:
    tmdb_id: int
    title: str
    overview: str | None = None
    release_date: str | None = None  # YYYY-MM-DD when available
    runtime: int | None = None
    rating: float | None = None
    genres: list[str] | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    cast: list[CastMember] | None = None
    director: str | None = None
    studio: str | None = None
    language: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class TvShowUpsert:
    tmdb_id: int
    title: str
    overview: str | None = None
    first_air_date: str | None = None
    last_air_date: str | None = None
    number_of_seasons: int | None = None
    number_of_episodes: int | None = None
    rating: float | None = None
    genres: list[str] | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    cast: list[CastMember] | None = None
    creator: str | None = None
    studio: str | None = None
    language: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class EpisodeUpsert:
    tv_show_id: str
    season_number: int
    episode_number: int
    title: str
    overview: str | None = None
    air_date: str | None = None
    runtime: int | None = None
    rating: float | None = None
    still_path: str | None = None

    @property
    def key(self) -> tuple[str, int, int]:
        return (self.tv_show_id, self.season_number, self.episode_number)
