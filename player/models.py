"""
Player data models: slots, matches, sessions and analytics rows.
"""

from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SlotPosition(IntEnum):
    LEFT = 0
    CENTER = 1
    RIGHT = 2


class EventType(str, Enum):
    NEXT = "NEXT"
    PREV = "PREV"
    AUTO_ADVANCE_START = "AUTO_ADVANCE_START"
    AUTO_ADVANCE_STOP = "AUTO_ADVANCE_STOP"


class Slot(BaseModel):
    """One playback position; video_index points into the current result set."""

    is_active: bool = False
    video_index: int = Field(0, ge=0)


class Match(BaseModel):
    """A search result as returned by the gateway. Never mutated client-side."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    access_url: Optional[str] = None
    similarity: float = 0.0


class SearchResult(BaseModel):
    matches: List[Match] = Field(default_factory=list)
    prompt: str
    threshold: float
    search_id: Optional[str] = None


class Session(BaseModel):
    id: str
    user_ref: str
    started_at: str
    ended_at: Optional[str] = None


class InteractionEvent(BaseModel):
    session_id: str
    video_id: str
    event_type: EventType
    duration_seconds: Optional[int] = None


class IntervalChange(BaseModel):
    session_id: str
    interval_seconds: int
