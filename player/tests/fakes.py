"""Deterministic scheduler, inline emitter and platform doubles for player tests."""

from player.analytics import AnalyticsEmitter, MemoryAnalyticsSink
from player.models import Match


def make_matches(n):
    return [Match(id=f"clip-{i}", title=f"Clip {i}", access_url=f"https://signed.example.com/{i}") for i in range(n)]


def inline_emitter():
    return AnalyticsEmitter(dispatch=lambda job: job())


class DeferredDispatch:
    """Holds queued analytics jobs until the test runs them."""

    def __init__(self):
        self.jobs = []

    def __call__(self, job):
        self.jobs.append(job)

    def run_all(self):
        jobs, self.jobs = self.jobs, []
        for job in jobs:
            job()


class _Handle:
    def __init__(self, scheduler, when, callback):
        self._scheduler = scheduler
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Virtual-time stand-in for an event loop's call_later."""

    def __init__(self):
        self.now = 0.0
        self._handles = []

    def clock(self):
        return self.now

    def call_later(self, delay, callback, *args):
        handle = _Handle(self, self.now + delay, lambda: callback(*args))
        self._handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self._handles if not h.cancelled]

    def advance(self, seconds):
        """Move time forward, firing due callbacks in deadline order."""
        target = self.now + seconds
        while True:
            due = [h for h in self.pending if h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self._handles.remove(handle)
            self.now = handle.when
            handle.callback()
        self.now = target


class FailingSink(MemoryAnalyticsSink):
    """Every analytics write raises."""

    def _fail(self, *args, **kwargs):
        raise RuntimeError("analytics backend unavailable")

    create_page_session = _fail
    end_page_session = _fail
    record_interaction = _fail
    record_interval_change = _fail
    open_compilation_session = _fail
    close_compilation_session = _fail


class FakeFullscreen:
    def __init__(self, fail_enter=False, fail_exit=False):
        self.fail_enter = fail_enter
        self.fail_exit = fail_exit
        self.calls = []

    def enter(self):
        self.calls.append("enter")
        if self.fail_enter:
            raise RuntimeError("fullscreen denied")

    def exit(self):
        self.calls.append("exit")
        if self.fail_exit:
            raise RuntimeError("not in fullscreen")
