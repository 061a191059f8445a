"""
Auto-Advance Tests

Timed stepping of active slots, START/STOP analytics with whole elapsed
seconds, and debounced interval writes. Time is virtual (FakeScheduler).
"""

import pytest

from player.analytics import MemoryAnalyticsSink
from player.auto_advance import AutoAdvanceController
from player.models import EventType, SlotPosition
from player.slot_navigator import SlotNavigator

from .fakes import FakeScheduler, inline_emitter, make_matches


@pytest.fixture
def sink():
    return MemoryAnalyticsSink()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def navigator(sink):
    nav = SlotNavigator(inline_emitter(), sink, lambda: "session-1")
    nav.set_results(make_matches(3))
    return nav


@pytest.fixture
def controller(navigator, sink, scheduler):
    return AutoAdvanceController(
        navigator,
        inline_emitter(),
        sink,
        lambda: "session-1",
        scheduler,
        clock=scheduler.clock,
    )


class TestToggle:

    def test_start_stop_logged_with_whole_seconds(self, controller, navigator, sink, scheduler):
        assert controller.set_enabled(True)
        scheduler.advance(12.7)
        assert controller.set_enabled(False)

        events = [(e.event_type, e.video_id, e.duration_seconds) for e in sink.interactions]
        assert events == [
            (EventType.AUTO_ADVANCE_START, "clip-0", None),
            (EventType.AUTO_ADVANCE_STOP, "clip-2", 12),
        ]

    def test_ticks_advance_without_navigation_events(self, controller, navigator, sink, scheduler):
        navigator.add(SlotPosition.RIGHT)
        controller.set_enabled(True)
        scheduler.advance(5)
        assert navigator.slot(1).video_index == 1
        assert navigator.slot(2).video_index == 1
        assert navigator.slot(0).video_index == 0
        assert [e.event_type for e in sink.interactions] == [EventType.AUTO_ADVANCE_START]

    def test_stopping_cancels_the_tick(self, controller, navigator, scheduler):
        controller.set_enabled(True)
        controller.set_enabled(False)
        assert not controller.tick_pending
        scheduler.advance(30)
        assert navigator.slot(1).video_index == 0

    def test_same_state_is_noop(self, controller, sink):
        assert controller.set_enabled(False)
        assert sink.interactions == []

    def test_refused_without_current_video(self, sink, scheduler):
        nav = SlotNavigator(inline_emitter(), sink, lambda: "session-1")
        ctrl = AutoAdvanceController(nav, inline_emitter(), sink, lambda: "session-1", scheduler, clock=scheduler.clock)
        assert not ctrl.set_enabled(True)
        assert not ctrl.enabled
        assert not ctrl.tick_pending
        assert sink.interactions == []

    def test_disable_applies_once_results_are_gone(self, controller, navigator, sink, scheduler):
        controller.set_enabled(True)
        scheduler.advance(3)
        navigator.set_results([])
        assert controller.set_enabled(False)
        assert not controller.enabled
        assert not controller.tick_pending

        stop = sink.interactions[-1]
        assert stop.event_type == EventType.AUTO_ADVANCE_STOP
        assert stop.video_id == "clip-0"
        assert stop.duration_seconds == 3

        # new results do not restart the countdown
        navigator.set_results(make_matches(3))
        assert not controller.tick_pending
        scheduler.advance(20)
        assert navigator.slot(1).video_index == 0

    def test_manual_navigation_restarts_the_countdown(self, controller, navigator, scheduler):
        controller.set_enabled(True)
        scheduler.advance(4)
        navigator.next(SlotPosition.CENTER)
        scheduler.advance(4)
        assert navigator.slot(1).video_index == 1
        scheduler.advance(1)
        assert navigator.slot(1).video_index == 2


class TestInterval:

    def test_burst_of_edits_writes_last_value_once(self, controller, sink, scheduler):
        controller.set_interval(5)
        scheduler.advance(0.5)
        controller.set_interval(6)
        scheduler.advance(0.5)
        controller.set_interval(7)
        scheduler.advance(1.5)
        assert sink.interval_changes == []
        scheduler.advance(0.5)
        assert [c.interval_seconds for c in sink.interval_changes] == [7]
        assert sink.interval_changes[0].session_id == "session-1"

    def test_separate_bursts_write_separately(self, controller, sink, scheduler):
        controller.set_interval(3)
        scheduler.advance(2.5)
        controller.set_interval(8)
        scheduler.advance(2.5)
        assert [c.interval_seconds for c in sink.interval_changes] == [3, 8]

    def test_new_interval_applies_immediately(self, controller, navigator, scheduler):
        controller.set_enabled(True)
        scheduler.advance(3)
        controller.set_interval(10)
        scheduler.advance(9)
        assert navigator.slot(1).video_index == 0
        scheduler.advance(1)
        assert navigator.slot(1).video_index == 1

    @pytest.mark.parametrize("seconds", [0, -4])
    def test_interval_below_one_rejected(self, controller, seconds):
        with pytest.raises(ValueError):
            controller.set_interval(seconds)
        assert controller.interval_seconds == 5

    def test_close_flushes_pending_write(self, controller, sink):
        controller.set_enabled(True)
        controller.set_interval(9)
        controller.close()
        assert [c.interval_seconds for c in sink.interval_changes] == [9]
        assert not controller.tick_pending

    def test_no_session_applies_but_does_not_write(self, navigator, sink, scheduler):
        ctrl = AutoAdvanceController(navigator, inline_emitter(), sink, lambda: None, scheduler, clock=scheduler.clock)
        ctrl.set_interval(4)
        scheduler.advance(5)
        assert ctrl.interval_seconds == 4
        assert sink.interval_changes == []
