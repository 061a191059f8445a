"""
Single-slot cancellable timer.

At most one callback is outstanding per timer; scheduling again cancels the
previous one. The scheduler is anything exposing ``call_later(delay, cb)``
that returns a handle with ``cancel()``, such as an asyncio event loop.
"""

from typing import Any, Callable, Optional, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        ...


class SingleSlotTimer:
    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._handle: Optional[TimerHandle] = None
        self._callback: Optional[Callable[[], Any]] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, delay: float, callback: Callable[[], Any]) -> None:
        """Run callback after delay seconds, replacing any pending callback."""
        self.cancel()
        self._callback = callback
        self._handle = self._scheduler.call_later(delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None

    def flush(self) -> None:
        """Run the pending callback now, if any."""
        callback = self._callback
        self.cancel()
        if callback is not None:
            callback()

    def _fire(self) -> None:
        callback = self._callback
        self._handle = None
        self._callback = None
        if callback is not None:
            callback()
