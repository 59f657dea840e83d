"""
Streaming server list for the player.
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from api.schemas import CamelModel
from cinestream.servers import resolve_servers

router = APIRouter(prefix="/servers", tags=["servers"])


# --- Pydantic models ---


class EmbedServer(CamelModel):
    name: str
    url: str
    quality: str


class ServerListResponse(CamelModel):
    servers: list[EmbedServer]
    default_server: EmbedServer


# --- Endpoints ---


@router.get("", response_model=ServerListResponse)
def get_servers(
    video_id: str | None = Query(default=None),
    media_type: str | None = Query(default=None, alias="type"),
    season: str | None = Query(default=None),
    episode: str | None = Query(default=None),
) -> dict:
    """
    Embed URLs for a TMDb id. Episode URLs are used when `type=tv` and both
    `season` and `episode` are given.
    """
    try:
        server_list = resolve_servers(video_id or "", media_type, season, episode)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"servers": server_list.servers, "default_server": server_list.default}
