from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ContentType = Literal["movie", "tv"]


@dataclass(frozen=True)
class WatchlistItem:
    id: str
    user_id: str
    content_id: str
    content_type: ContentType
    added_at: str  # ISO-8601, UTC


@dataclass(frozen=True)
class WatchlistAdd:
    user_id: str
    content_id: str
    content_type: ContentType
