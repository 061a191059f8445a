"""
Three-slot layout (left, center, right) over the current result set.

The center slot is always active. Every index is kept modulo the result-set
size; with no results, navigation does nothing. User navigation logs NEXT/PREV
tagged with the video that was showing before the move; auto-advance uses
advance_active(), which logs nothing.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from .analytics import AnalyticsEmitter, AnalyticsSink
from .models import EventType, InteractionEvent, Match, Slot, SlotPosition

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


def _position(slot) -> SlotPosition:
    try:
        return SlotPosition(slot)
    except ValueError:
        raise ValueError(f"slot must be 0 (left), 1 (center) or 2 (right), got {slot!r}") from None


class SlotNavigator:
    def __init__(
        self,
        emitter: AnalyticsEmitter,
        sink: AnalyticsSink,
        session_ref: Callable[[], Optional[str]],
    ):
        self._emitter = emitter
        self._sink = sink
        self._session_ref = session_ref
        self.slots: List[Slot] = [
            Slot(is_active=False, video_index=0),
            Slot(is_active=True, video_index=0),
            Slot(is_active=False, video_index=0),
        ]
        self._matches: List[Match] = []
        self._listeners: List[Listener] = []

    # -- queries --------------------------------------------------------

    @property
    def result_count(self) -> int:
        return len(self._matches)

    @property
    def matches(self) -> Tuple[Match, ...]:
        return tuple(self._matches)

    def slot(self, position) -> Slot:
        return self.slots[_position(position)]

    def current_match(self, position) -> Optional[Match]:
        """Match shown in an active slot, or None without results."""
        slot = self.slot(position)
        if not slot.is_active or not self._matches:
            return None
        return self._matches[slot.video_index % len(self._matches)]

    def visible_matches(self) -> List[Tuple[SlotPosition, Match]]:
        out = []
        for position in SlotPosition:
            match = self.current_match(position)
            if match is not None:
                out.append((position, match))
        return out

    # -- subscriptions --------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener after every slot or result-set change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener()

    # -- commands -------------------------------------------------------

    def set_results(self, matches: Sequence[Match]) -> None:
        self._matches = list(matches)
        n = len(self._matches)
        for slot in self.slots:
            slot.video_index = slot.video_index % n if n else 0
        self._changed()

    def add(self, position) -> bool:
        position = _position(position)
        slot = self.slots[position]
        if position == SlotPosition.CENTER or slot.is_active:
            return False
        slot.is_active = True
        self._changed()
        return True

    def remove(self, position) -> bool:
        position = _position(position)
        slot = self.slots[position]
        if position == SlotPosition.CENTER or not slot.is_active:
            return False
        slot.is_active = False
        slot.video_index = 0
        self._changed()
        return True

    def next(self, position) -> bool:
        return self._step(position, 1, EventType.NEXT)

    def previous(self, position) -> bool:
        return self._step(position, -1, EventType.PREV)

    def reset_all(self) -> None:
        """New search: every index back to 0, center forced active."""
        for position, slot in zip(SlotPosition, self.slots):
            slot.video_index = 0
            if position == SlotPosition.CENTER:
                slot.is_active = True
        self._changed()

    def advance_active(self) -> int:
        """Move every active slot forward by one without logging. Returns slots moved."""
        n = len(self._matches)
        if n == 0:
            return 0
        moved = 0
        for slot in self.slots:
            if slot.is_active:
                slot.video_index = (slot.video_index + 1) % n
                moved += 1
        self._changed()
        return moved

    def _step(self, position, delta: int, event_type: EventType) -> bool:
        slot = self.slot(position)
        n = len(self._matches)
        if n == 0 or not slot.is_active:
            return False
        shown = self._matches[slot.video_index % n]
        slot.video_index = (slot.video_index + delta + n) % n
        self._changed()
        self._log(event_type, shown.id)
        return True

    def _log(self, event_type: EventType, video_id: str) -> None:
        session_id = self._session_ref()
        if not session_id:
            return
        event = InteractionEvent(session_id=session_id, video_id=video_id, event_type=event_type)
        self._emitter.emit(event_type.value, self._sink.record_interaction, event)
