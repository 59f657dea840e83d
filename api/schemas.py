"""
Response models shared across routers.

Records are rendered with camelCase keys (`tmdbId`, `posterPath`, ...). Every
field is declared without a default so a movie payload can never validate as
a TV show (and vice versa) inside the watchlist's `content` union.
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CastMember(CamelModel):
    name: str
    character: str
    profile_path: str | None = None


class Movie(CamelModel):
    id: str
    tmdb_id: int
    title: str
    overview: str | None
    release_date: str | None
    runtime: int | None
    rating: float | None
    genres: list[str]
    poster_path: str | None
    backdrop_path: str | None
    cast: list[CastMember]
    director: str | None
    studio: str | None
    language: str
    country: str


class TvShow(CamelModel):
    id: str
    tmdb_id: int
    title: str
    overview: str | None
    first_air_date: str | None
    last_air_date: str | None
    number_of_seasons: int
    number_of_episodes: int
    rating: float | None
    genres: list[str]
    poster_path: str | None
    backdrop_path: str | None
    cast: list[CastMember]
    creator: str | None
    studio: str | None
    language: str
    country: str


class Episode(CamelModel):
    id: str
    tv_show_id: str
    season_number: int
    episode_number: int
    title: str
    overview: str | None
    air_date: str | None
    runtime: int | None
    rating: float | None
    still_path: str | None


class SearchResponse(CamelModel):
    movies: list[Movie]
    tv_shows: list[TvShow]
    total: int


class WatchlistItem(CamelModel):
    id: str
    user_id: str
    content_id: str
    content_type: Literal["movie", "tv"]
    added_at: str


class WatchlistEntry(WatchlistItem):
    content: Movie | TvShow
