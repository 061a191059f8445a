"""
Auto-advance: timed stepping of every active slot plus its usage analytics.

Only the toggle produces interaction events (START, then STOP with whole
elapsed seconds); both are tagged with the center slot's current video.
Interval edits take effect immediately but are written once per burst, after
the debounce window goes quiet.
"""

import logging
import math
import time
from typing import Callable, Optional

from .analytics import AnalyticsEmitter, AnalyticsSink
from .models import EventType, InteractionEvent, IntervalChange, SlotPosition
from .slot_navigator import SlotNavigator
from .timers import Scheduler, SingleSlotTimer

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 5
DEFAULT_DEBOUNCE_SECONDS = 2.0


class AutoAdvanceController:
    def __init__(
        self,
        navigator: SlotNavigator,
        emitter: AnalyticsEmitter,
        sink: AnalyticsSink,
        session_ref: Callable[[], Optional[str]],
        scheduler: Scheduler,
        clock: Callable[[], float] = time.time,
        interval_seconds: int = DEFAULT_INTERVAL_SECONDS,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        if interval_seconds < 1:
            raise ValueError("interval_seconds must be at least 1")
        self._navigator = navigator
        self._emitter = emitter
        self._sink = sink
        self._session_ref = session_ref
        self._clock = clock
        self._tick = SingleSlotTimer(scheduler)
        self._debounce = SingleSlotTimer(scheduler)
        self.debounce_seconds = debounce_seconds
        self.interval_seconds = interval_seconds
        self.enabled = False
        self._started_at: Optional[float] = None
        self._started_video_id: Optional[str] = None
        self._unsubscribe = navigator.subscribe(self._rearm)

    @property
    def tick_pending(self) -> bool:
        return self._tick.pending

    def set_enabled(self, enabled: bool) -> bool:
        """
        Turn auto-advance on or off.

        Enabling is refused (returns False, nothing changes) when no video is
        showing in the center slot, since START needs a video id. Disabling
        always applies; STOP is tagged with the center video, or with the
        video that was showing at START when the results are gone.
        """
        enabled = bool(enabled)
        if enabled == self.enabled:
            return True
        current = self._navigator.current_match(SlotPosition.CENTER)

        if enabled:
            if current is None:
                logger.debug("Auto-advance enable refused: no current video")
                return False
            self._started_at = self._clock()
            self._started_video_id = current.id
            self.enabled = True
            self._rearm()
            self._log(EventType.AUTO_ADVANCE_START, current.id)
        else:
            now = self._clock()
            elapsed = now - (self._started_at if self._started_at is not None else now)
            duration = max(0, int(math.floor(elapsed)))
            self.enabled = False
            video_id = current.id if current is not None else self._started_video_id
            self._started_at = None
            self._started_video_id = None
            self._rearm()
            if video_id:
                self._log(EventType.AUTO_ADVANCE_STOP, video_id, duration)
        return True

    def set_interval(self, seconds: int) -> None:
        """Apply a new interval now; persist it once the edits settle."""
        seconds = int(seconds)
        if seconds < 1:
            raise ValueError("auto-advance interval must be at least 1 second")
        self.interval_seconds = seconds
        self._rearm()
        self._debounce.schedule(self.debounce_seconds, lambda: self._write_interval(seconds))

    def close(self) -> None:
        """Stop ticking and write any interval still waiting on the debounce."""
        self._tick.cancel()
        self._debounce.flush()
        self._unsubscribe()

    def _rearm(self) -> None:
        self._tick.cancel()
        if self.enabled and self._navigator.result_count > 0:
            self._tick.schedule(self.interval_seconds, self._on_tick)

    def _on_tick(self) -> None:
        # advance_active() notifies listeners, which rearms the tick
        self._navigator.advance_active()

    def _write_interval(self, seconds: int) -> None:
        session_id = self._session_ref()
        if not session_id:
            return
        change = IntervalChange(session_id=session_id, interval_seconds=seconds)
        self._emitter.emit("interval_change", self._sink.record_interval_change, change)

    def _log(self, event_type: EventType, video_id: str, duration: Optional[int] = None) -> None:
        session_id = self._session_ref()
        if not session_id:
            return
        event = InteractionEvent(
            session_id=session_id,
            video_id=video_id,
            event_type=event_type,
            duration_seconds=duration,
        )
        self._emitter.emit(event_type.value, self._sink.record_interaction, event)
