"""
Streaming server list resolution.

Builds the embed URLs for the external players from a TMDb id. Pure string
templating: no network calls and no state.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EmbedServer:
    name: str
    url: str
    quality: str


@dataclass(frozen=True)
class ServerList:
    servers: list[EmbedServer]

    @property
    def default(self) -> EmbedServer:
        return self.servers[0]


@dataclass(frozen=True)
class _EmbedProvider:
    name: str
    quality: str
    movie_template: str
    episode_template: str


# Order matters: the first provider is the default server.
EMBED_PROVIDERS: tuple[_EmbedProvider, ...] = (
    _EmbedProvider(
        name="Vidsrc",
        quality="HD",
        movie_template="https://vidsrc.net/embed/movie/{video_id}",
        episode_template="https://vidsrc.net/embed/tv/{video_id}/{season}/{episode}",
    ),
    _EmbedProvider(
        name="Vipstream",
        quality="4K",
        movie_template="https://vipstream.tv/embed-2/movie?tmdb={video_id}",
        episode_template="https://vipstream.tv/embed-2/tv?tmdb={video_id}&season={season}&episode={episode}",
    ),
)


def _present(value: str | int | None) -> bool:
    if value is None:
        return False
    return bool(str(value).strip())


def is_episode_request(media_type: str | None, season: str | int | None, episode: str | int | None) -> bool:
    """Episode URLs need `type=tv` plus both a season and an episode number."""
    return media_type == "tv" and _present(season) and _present(episode)


def resolve_servers(
    video_id: str | int,
    media_type: str | None = None,
    season: str | int | None = None,
    episode: str | int | None = None,
) -> ServerList:
    """
    Build the ordered embed server list for a title.

    TV requests missing either the season or the episode fall back to the
    movie-shaped URLs.
    """
    if not _present(video_id):
        raise ValueError("video_id is required")

    vid = str(video_id).strip()
    episode_mode = is_episode_request(media_type, season, episode)
    servers: list[EmbedServer] = []
    for provider in EMBED_PROVIDERS:
        if episode_mode:
            url = provider.episode_template.format(
                video_id=vid,
                season=str(season).strip(),
                episode=str(episode).strip(),
            )
        else:
            url = provider.movie_template.format(video_id=vid)
        servers.append(EmbedServer(name=provider.name, url=url, quality=provider.quality))
    return ServerList(servers=servers)
