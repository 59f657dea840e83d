"""
Typed views of the TMDb v3 payloads this service consumes.

Responses are parsed at the client boundary: a payload that does not fit the
model is rejected with `TmdbPayloadError` instead of leaking loose dicts (and
silent nulls) into canonical records. Unknown keys are ignored.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cinestream.integrations.tmdb.errors import TmdbPayloadError


class _TmdbModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class TmdbGenre(_TmdbModel):
    id: int | None = None
    name: str


class TmdbCompany(_TmdbModel):
    id: int | None = None
    name: str


class TmdbCountry(_TmdbModel):
    iso_3166_1: str | None = None
    name: str | None = None


class TmdbCreator(_TmdbModel):
    id: int | None = None
    name: str


class TmdbCastCredit(_TmdbModel):
    name: str
    character: str | None = None
    profile_path: str | None = None
    order: int | None = None


class TmdbCrewCredit(_TmdbModel):
    name: str
    job: str | None = None
    department: str | None = None


class TmdbCredits(_TmdbModel):
    cast: list[TmdbCastCredit] = Field(default_factory=list)
    crew: list[TmdbCrewCredit] = Field(default_factory=list)


class TmdbMovieDetails(_TmdbModel):
    """`/3/movie/{id}` (optionally with `append_to_response=credits`)."""

    id: int
    title: str
    overview: str | None = None
    release_date: str | None = None
    runtime: int | None = None
    vote_average: float | None = None
    genres: list[TmdbGenre] = Field(default_factory=list)
    poster_path: str | None = None
    backdrop_path: str | None = None
    production_companies: list[TmdbCompany] = Field(default_factory=list)
    production_countries: list[TmdbCountry] = Field(default_factory=list)
    original_language: str | None = None
    credits: TmdbCredits | None = None


class TmdbTvDetails(_TmdbModel):
    """`/3/tv/{id}` (optionally with `append_to_response=credits`)."""

    id: int
    name: str
    overview: str | None = None
    first_air_date: str | None = None
    last_air_date: str | None = None
    number_of_seasons: int | None = None
    number_of_episodes: int | None = None
    vote_average: float | None = None
    genres: list[TmdbGenre] = Field(default_factory=list)
    poster_path: str | None = None
    backdrop_path: str | None = None
    created_by: list[TmdbCreator] = Field(default_factory=list)
    production_companies: list[TmdbCompany] = Field(default_factory=list)
    origin_country: list[str] = Field(default_factory=list)
    original_language: str | None = None
    credits: TmdbCredits | None = None


class TmdbListItem(_TmdbModel):
    """
    One entry of a popular list or a multi-search page.

    `media_type` is only present on multi-search results ("movie", "tv", "person").
    """

    id: int
    media_type: str | None = None


class TmdbPage(_TmdbModel):
    page: int = 1
    results: list[TmdbListItem] = Field(default_factory=list)
    total_pages: int | None = None
    total_results: int | None = None


class TmdbSeasonEpisode(_TmdbModel):
    id: int | None = None
    season_number: int
    episode_number: int
    name: str | None = None
    overview: str | None = None
    air_date: str | None = None
    runtime: int | None = None
    vote_average: float | None = None
    still_path: str | None = None


class TmdbSeasonDetails(_TmdbModel):
    """`/3/tv/{id}/season/{season_number}`."""

    id: int | None = None
    season_number: int
    name: str | None = None
    episodes: list[TmdbSeasonEpisode] = Field(default_factory=list)


ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_payload(model: type[ModelT], payload: Any, *, context: str) -> ModelT:
    """Validate a decoded JSON payload or raise `TmdbPayloadError`."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()})
        raise TmdbPayloadError(
            f"TMDb returned an unexpected payload for {context} (invalid: {', '.join(fields) or 'root'})."
        ) from exc
