"""
Page-level controller for the search player.

Owns one visit: the page session, the three-slot layout, auto-advance,
compilation-mode tracking and bookmarks, plus the search call that feeds
them. Every command applies its state change synchronously; analytics go
through the shared AnalyticsEmitter.
"""

import logging
import time
from typing import Callable, Optional

from .analytics import AnalyticsEmitter, AnalyticsSink
from .auto_advance import AutoAdvanceController
from .bookmarks import BookmarkSet
from .config import PlayerConfig
from .fullscreen import FullscreenCapability, FullscreenModeTracker, probe_fullscreen
from .models import SearchResult
from .search_client import SearchClient, SearchFailed
from .session_tracker import SessionTracker
from .slot_navigator import SlotNavigator
from .timers import Scheduler

logger = logging.getLogger(__name__)

SEARCH_FAILED_MESSAGE = "Search failed"


class VideoSearchController:
    def __init__(
        self,
        search_client: SearchClient,
        sink: AnalyticsSink,
        scheduler: Scheduler,
        config: Optional[PlayerConfig] = None,
        emitter: Optional[AnalyticsEmitter] = None,
        fullscreen: Optional[FullscreenCapability] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or PlayerConfig()
        self.search_client = search_client
        self.emitter = emitter or AnalyticsEmitter()
        self.session_tracker = SessionTracker(self.emitter, sink)
        session_ref = lambda: self.session_tracker.session_id
        self.navigator = SlotNavigator(self.emitter, sink, session_ref)
        self.auto_advance = AutoAdvanceController(
            self.navigator,
            self.emitter,
            sink,
            session_ref,
            scheduler,
            clock=clock,
            interval_seconds=self.config.auto_advance_seconds,
            debounce_seconds=self.config.interval_debounce_seconds,
        )
        self.fullscreen = FullscreenModeTracker(
            fullscreen or probe_fullscreen(None),
            self.emitter,
            sink,
            session_ref,
        )
        self.bookmarks = BookmarkSet()
        self.prompt = ""
        self.result: Optional[SearchResult] = None
        self.error: Optional[str] = None
        self.loading = False

    @property
    def session_id(self) -> Optional[str]:
        return self.session_tracker.session_id

    # -- lifecycle ------------------------------------------------------

    def activate(self, user_ref: Optional[str]) -> Optional[str]:
        return self.session_tracker.activate(user_ref)

    def on_before_unload(self) -> None:
        self.session_tracker.on_before_unload()

    def on_visibility_change(self, hidden: bool) -> None:
        self.session_tracker.on_visibility_change(hidden)

    def teardown(self) -> None:
        """End the session, stop timers and drain queued analytics."""
        self.session_tracker.teardown()
        self.auto_advance.close()
        self.emitter.close(wait=True)

    # -- search ---------------------------------------------------------

    def submit_search(self, prompt: str) -> bool:
        """Reset the slots, query the gateway and load the results. False on failure."""
        prompt = (prompt or "").strip()
        if not prompt:
            return False
        self.prompt = prompt
        self.error = None
        self.navigator.reset_all()
        self.loading = True
        try:
            result = self.search_client.search(
                prompt,
                similarity_threshold=self.config.similarity_threshold,
                match_count=self.config.match_count,
                session_id=self.session_id,
            )
        except SearchFailed as e:
            logger.warning("Search for %r failed: %s", prompt, e)
            self.result = None
            self.error = SEARCH_FAILED_MESSAGE
            self.navigator.set_results([])
            return False
        finally:
            self.loading = False
        self.result = result
        self.navigator.set_results(result.matches)
        logger.info("Search %s loaded %d matches", result.search_id, len(result.matches))
        return True

    # -- slots ----------------------------------------------------------

    def next(self, slot) -> bool:
        return self.navigator.next(slot)

    def previous(self, slot) -> bool:
        return self.navigator.previous(slot)

    def add_slot(self, slot) -> bool:
        return self.navigator.add(slot)

    def remove_slot(self, slot) -> bool:
        return self.navigator.remove(slot)

    # -- auto-advance ---------------------------------------------------

    def toggle_auto_advance(self, enabled: bool) -> bool:
        return self.auto_advance.set_enabled(enabled)

    def set_auto_advance_interval(self, seconds: int) -> None:
        self.auto_advance.set_interval(seconds)

    # -- compilation mode -----------------------------------------------

    def toggle_fullscreen(self) -> bool:
        return self.fullscreen.toggle()

    def on_fullscreen_change(self, active: bool) -> None:
        self.fullscreen.on_fullscreen_change(active)

    # -- bookmarks ------------------------------------------------------

    def toggle_bookmark(self, video_id: str) -> bool:
        return self.bookmarks.toggle(video_id)
