"""
Watchlist endpoints for the demo user.

There is no authentication: every request acts on the user configured by
WATCHLIST_USER_ID.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import Literal

from fastapi import APIRouter, HTTPException, Request
from pydantic import ConfigDict, Field, ValidationError

from api.deps import Catalog, Store, WatchlistUser
from api.schemas import CamelModel, WatchlistEntry, WatchlistItem
from cinestream.models.watchlist import WatchlistAdd

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


# --- Pydantic models ---


class WatchlistCreate(CamelModel):
    """
    Add-to-watchlist payload.

    Note: user_id is intentionally NOT accepted from the client.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    content_id: str = Field(min_length=1)
    content_type: Literal["movie", "tv"]


class WatchlistStatus(CamelModel):
    content_id: str
    in_watchlist: bool


class MessageResponse(CamelModel):
    message: str


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "body"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


# --- Endpoints ---


@router.get("", response_model=list[WatchlistEntry])
def list_watchlist(catalog: Catalog, user_id: WatchlistUser) -> list[dict]:
    """List the user's watchlist, each item populated with its movie or show."""
    return [
        {**asdict(item), "content": asdict(content)}
        for item, content in catalog.watchlist_entries(user_id)
    ]


@router.post("", response_model=WatchlistItem)
async def add_to_watchlist(request: Request, store: Store, user_id: WatchlistUser) -> dict:
    """Add a movie or TV show (by internal id) to the watchlist."""
    body = await request.body()
    try:
        payload = json.loads(body) if body.strip() else {}
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Request body must be valid JSON") from exc

    try:
        data = WatchlistCreate.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=_validation_message(exc)) from exc

    item = store.watchlist.add(
        WatchlistAdd(user_id=user_id, content_id=data.content_id, content_type=data.content_type)
    )
    logger.info(f"Added {item.content_type} {item.content_id} to watchlist of {user_id}")
    return asdict(item)


@router.get("/{content_id}", response_model=WatchlistStatus)
def get_watchlist_status(store: Store, user_id: WatchlistUser, content_id: str) -> dict:
    return {"content_id": content_id, "in_watchlist": store.watchlist.contains(user_id, content_id)}


@router.delete("/{content_id}", response_model=MessageResponse)
def remove_from_watchlist(store: Store, user_id: WatchlistUser, content_id: str) -> dict:
    if not store.watchlist.remove(user_id, content_id):
        raise HTTPException(status_code=404, detail="Item not found in watchlist")
    logger.info(f"Removed {content_id} from watchlist of {user_id}")
    return {"message": "Removed from watchlist"}
