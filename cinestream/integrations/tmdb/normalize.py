"""
Map validated TMDb payloads onto canonical upsert shapes.

Blank strings from TMDb (e.g. `"release_date": ""`) become None. Defaults for
language/country and season/episode counts are applied by the store.
"""

from __future__ import annotations

from cinestream.integrations.tmdb.payloads import (
    TmdbCredits,
    TmdbMovieDetails,
    TmdbSeasonEpisode,
    TmdbTvDetails,
)
from cinestream.models.content import CastMember, EpisodeUpsert, MovieUpsert, TvShowUpsert

MAX_CAST_MEMBERS = 10


def _clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def _positive_int(value: int | None) -> int | None:
    return value if isinstance(value, int) and value > 0 else None


def cast_from_credits(credits: TmdbCredits | None, *, limit: int = MAX_CAST_MEMBERS) -> list[CastMember]:
    if credits is None:
        return []
    ordered = sorted(
        enumerate(credits.cast),
        key=lambda pair: (pair[1].order if pair[1].order is not None else pair[0], pair[0]),
    )
    members: list[CastMember] = []
    for _, credit in ordered[:limit]:
        members.append(
            CastMember(
                name=credit.name,
                character=credit.character or "",
                profile_path=_clean_text(credit.profile_path),
            )
        )
    return members


def director_from_credits(credits: TmdbCredits | None) -> str | None:
    if credits is None:
        return None
    for member in credits.crew:
        if (member.job or "").casefold() == "director":
            return _clean_text(member.name)
    return None


def movie_upsert_from_tmdb(details: TmdbMovieDetails) -> MovieUpsert:
    country = None
    if details.production_countries:
        first = details.production_countries[0]
        country = _clean_text(first.iso_3166_1) or _clean_text(first.name)
    return MovieUpsert(
        tmdb_id=details.id,
        title=details.title,
        overview=_clean_text(details.overview),
        release_date=_clean_text(details.release_date),
        runtime=_positive_int(details.runtime),
        rating=details.vote_average,
        genres=[genre.name for genre in details.genres],
        poster_path=_clean_text(details.poster_path),
        backdrop_path=_clean_text(details.backdrop_path),
        cast=cast_from_credits(details.credits),
        director=director_from_credits(details.credits),
        studio=details.production_companies[0].name if details.production_companies else None,
        language=_clean_text(details.original_language),
        country=country,
    )


def tv_show_upsert_from_tmdb(details: TmdbTvDetails) -> TvShowUpsert:
    return TvShowUpsert(
        tmdb_id=details.id,
        title=details.name,
        overview=_clean_text(details.overview),
        first_air_date=_clean_text(details.first_air_date),
        last_air_date=_clean_text(details.last_air_date),
        number_of_seasons=_positive_int(details.number_of_seasons),
        number_of_episodes=_positive_int(details.number_of_episodes),
        rating=details.vote_average,
        genres=[genre.name for genre in details.genres],
        poster_path=_clean_text(details.poster_path),
        backdrop_path=_clean_text(details.backdrop_path),
        cast=cast_from_credits(details.credits),
        creator=details.created_by[0].name if details.created_by else None,
        studio=details.production_companies[0].name if details.production_companies else None,
        language=_clean_text(details.original_language),
        country=_clean_text(details.origin_country[0]) if details.origin_country else None,
    )


def episode_upsert_from_tmdb(tv_show_id: str, episode: TmdbSeasonEpisode) -> EpisodeUpsert:
    title = _clean_text(episode.name) or f"Episode {episode.episode_number}"
    return EpisodeUpsert(
        tv_show_id=tv_show_id,
        season_number=episode.season_number,
        episode_number=episode.episode_number,
        title=title,
        overview=_clean_text(episode.overview),
        air_date=_clean_text(episode.air_date),
        runtime=_positive_int(episode.runtime),
        rating=episode.vote_average,
        still_path=_clean_text(episode.still_path),
    )
