"""
Search Player Controller Tests

Search submission feeding the slot layout, failure handling, bookmarks and
teardown of a visit.
"""

import pytest

from player.analytics import MemoryAnalyticsSink
from player.config import PlayerConfig
from player.controller import VideoSearchController
from player.models import EventType, SearchResult, SlotPosition
from player.search_client import SearchFailed

from .fakes import FakeFullscreen, FakeScheduler, inline_emitter, make_matches


class FakeSearchClient:
    def __init__(self, result=None, error=None):
        self.calls = []
        self.result = result
        self.error = error

    def search(self, prompt, similarity_threshold, match_count, session_id=None):
        self.calls.append(
            {
                "prompt": prompt,
                "similarity_threshold": similarity_threshold,
                "match_count": match_count,
                "session_id": session_id,
            }
        )
        if self.error:
            raise self.error
        return self.result


def _result(n=3):
    return SearchResult(matches=make_matches(n), prompt="ocean waves", threshold=0.1, search_id="search-1")


@pytest.fixture
def sink():
    return MemoryAnalyticsSink()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def search_client():
    return FakeSearchClient(result=_result())


@pytest.fixture
def controller(search_client, sink, scheduler):
    ctrl = VideoSearchController(
        search_client,
        sink,
        scheduler,
        config=PlayerConfig(auto_advance_seconds=5, interval_debounce_seconds=2.0),
        emitter=inline_emitter(),
        fullscreen=FakeFullscreen(),
        clock=scheduler.clock,
    )
    ctrl.activate("user-1")
    return ctrl


class TestSubmitSearch:

    def test_loads_results_into_slots(self, controller, search_client):
        assert controller.submit_search("  ocean waves ")
        assert controller.navigator.result_count == 3
        assert controller.navigator.current_match(SlotPosition.CENTER).id == "clip-0"
        assert controller.error is None
        assert not controller.loading
        call = search_client.calls[0]
        assert call["prompt"] == "ocean waves"
        assert call["similarity_threshold"] == 0.1
        assert call["match_count"] == 20
        assert call["session_id"] == controller.session_id

    def test_new_search_resets_slots(self, controller):
        controller.submit_search("ocean waves")
        controller.add_slot(SlotPosition.LEFT)
        controller.next(SlotPosition.CENTER)
        controller.next(SlotPosition.LEFT)
        controller.submit_search("mountains")
        assert [s.video_index for s in controller.navigator.slots] == [0, 0, 0]

    def test_failure_clears_results(self, controller, search_client):
        controller.submit_search("ocean waves")
        search_client.error = SearchFailed("Search failed", status_code=500)
        assert not controller.submit_search("mountains")
        assert controller.error == "Search failed"
        assert controller.result is None
        assert controller.navigator.result_count == 0
        assert not controller.next(SlotPosition.CENTER)

    def test_blank_prompt_not_sent(self, controller, search_client):
        assert not controller.submit_search("   ")
        assert search_client.calls == []


class TestPlayerCommands:

    def test_navigation_logged_against_session(self, controller, sink):
        controller.submit_search("ocean waves")
        controller.next(SlotPosition.CENTER)
        [event] = sink.interactions
        assert event.event_type == EventType.NEXT
        assert event.session_id == controller.session_id

    def test_auto_advance_and_fullscreen(self, controller, sink, scheduler):
        controller.submit_search("ocean waves")
        assert controller.toggle_auto_advance(True)
        scheduler.advance(5)
        assert controller.navigator.slot(SlotPosition.CENTER).video_index == 1
        assert controller.toggle_fullscreen()
        assert len(sink.compilation_sessions) == 1

    def test_bookmarks(self, controller):
        assert controller.toggle_bookmark("clip-1")
        assert "clip-1" in controller.bookmarks
        assert not controller.toggle_bookmark("clip-1")
        assert len(controller.bookmarks) == 0

    def test_auto_advance_can_be_turned_off_after_failed_search(self, controller, search_client, scheduler):
        controller.submit_search("ocean waves")
        assert controller.toggle_auto_advance(True)
        search_client.error = SearchFailed("Search failed", status_code=500)
        controller.submit_search("mountains")

        assert controller.toggle_auto_advance(False)
        assert not controller.auto_advance.enabled

        search_client.error = None
        controller.submit_search("ocean waves")
        scheduler.advance(10)
        assert controller.navigator.slot(SlotPosition.CENTER).video_index == 0

    def test_no_fullscreen_api(self, search_client, sink, scheduler):
        ctrl = VideoSearchController(search_client, sink, scheduler, emitter=inline_emitter())
        assert not ctrl.toggle_fullscreen()


class TestTeardown:

    def test_ends_session_and_flushes_interval(self, controller, sink, scheduler):
        controller.submit_search("ocean waves")
        controller.toggle_auto_advance(True)
        controller.set_auto_advance_interval(8)
        controller.teardown()

        assert len(sink.session_ends) == 1
        assert [c.interval_seconds for c in sink.interval_changes] == [8]
        assert not controller.auto_advance.tick_pending

        # later writes are dropped once the emitter is closed
        controller.on_before_unload()
        controller.next(SlotPosition.CENTER)
        assert len(sink.session_ends) == 1
        assert len(sink.interactions) == 1
