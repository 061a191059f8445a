"""
Search player interaction core

- session_tracker: one analytics session per visit
- slot_navigator: left/center/right slots over the result set
- auto_advance: timed stepping with toggle and interval analytics
- fullscreen: compilation-mode spans
- controller: wires the above to the gateway's /search
"""

from .analytics import (
    AnalyticsEmitter,
    AnalyticsSink,
    AnalyticsWriteFailure,
    HttpAnalyticsSink,
    MemoryAnalyticsSink,
)
from .auto_advance import AutoAdvanceController
from .bookmarks import BookmarkSet
from .config import PlayerConfig
from .controller import VideoSearchController
from .fullscreen import FullscreenModeTracker, FullscreenUnavailable, probe_fullscreen
from .models import (
    EventType,
    InteractionEvent,
    IntervalChange,
    Match,
    SearchResult,
    Session,
    Slot,
    SlotPosition,
)
from .search_client import SearchClient, SearchFailed
from .session_tracker import SessionTracker
from .slot_navigator import SlotNavigator
from .timers import SingleSlotTimer

__all__ = [
    "AnalyticsEmitter",
    "AnalyticsSink",
    "AnalyticsWriteFailure",
    "AutoAdvanceController",
    "BookmarkSet",
    "EventType",
    "FullscreenModeTracker",
    "FullscreenUnavailable",
    "HttpAnalyticsSink",
    "InteractionEvent",
    "IntervalChange",
    "Match",
    "MemoryAnalyticsSink",
    "PlayerConfig",
    "SearchClient",
    "SearchFailed",
    "SearchResult",
    "Session",
    "SessionTracker",
    "SingleSlotTimer",
    "Slot",
    "SlotNavigator",
    "SlotPosition",
    "VideoSearchController",
    "probe_fullscreen",
]
