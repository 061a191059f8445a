"""
Fullscreen ("compilation mode") tracking.

The platform owns the real fullscreen state; the tracker follows it through
on_fullscreen_change() and never assumes its own requests succeeded. Each
fullscreen span is logged as one compilation session: opened after the enter
request, closed by id after the exit request (or when the platform leaves
fullscreen on its own). If the open write fails or lands after the span was
already closed, the close is skipped. There is no retry.
"""

import logging
import threading
from typing import Callable, Optional, Protocol, Sequence

from .analytics import AnalyticsEmitter, AnalyticsSink
from .models import utc_now_iso

logger = logging.getLogger(__name__)

# Primary API first, vendor-prefixed fallback second
ENTER_METHODS = ("request_fullscreen", "webkit_request_fullscreen")
EXIT_METHODS = ("exit_fullscreen", "webkit_exit_fullscreen")


class FullscreenUnavailable(RuntimeError):
    """The platform exposes no usable fullscreen API."""


class FullscreenCapability(Protocol):
    def enter(self) -> None:
        ...

    def exit(self) -> None:
        ...


class _ProbedFullscreen:
    def __init__(self, enter_fn: Optional[Callable[[], object]], exit_fn: Optional[Callable[[], object]]):
        self._enter_fn = enter_fn
        self._exit_fn = exit_fn

    @property
    def available(self) -> bool:
        return self._enter_fn is not None

    def enter(self) -> None:
        if self._enter_fn is None:
            raise FullscreenUnavailable("no fullscreen request method")
        self._enter_fn()

    def exit(self) -> None:
        if self._exit_fn is None:
            raise FullscreenUnavailable("no fullscreen exit method")
        self._exit_fn()


def _first_available(target, names: Sequence[str]) -> Optional[Callable[[], object]]:
    if target is None:
        return None
    for name in names:
        fn = getattr(target, name, None)
        if callable(fn):
            return fn
    return None


def probe_fullscreen(element, document=None) -> _ProbedFullscreen:
    """Build a uniform enter/exit capability from whichever API the platform offers.

    Enter is looked up on ``element``, exit on ``document`` (falling back to
    ``element`` when no document is given).
    """
    return _ProbedFullscreen(
        _first_available(element, ENTER_METHODS),
        _first_available(document if document is not None else element, EXIT_METHODS),
    )


class FullscreenModeTracker:
    def __init__(
        self,
        capability: FullscreenCapability,
        emitter: AnalyticsEmitter,
        sink: AnalyticsSink,
        session_ref: Callable[[], Optional[str]],
    ):
        self._capability = capability
        self._emitter = emitter
        self._sink = sink
        self._session_ref = session_ref
        # open-write results come back on the analytics worker
        self._lock = threading.Lock()
        self.is_fullscreen = False
        self._compilation_id: Optional[str] = None
        self._opening = False
        self._generation = 0

    @property
    def compilation_id(self) -> Optional[str]:
        return self._compilation_id

    def toggle(self) -> bool:
        """Request the opposite of the current platform state. False if the request failed."""
        if not self.is_fullscreen:
            try:
                self._capability.enter()
            except Exception as e:
                logger.warning("Fullscreen enter request failed: %s", e)
                return False
            self._open_compilation()
            return True
        try:
            self._capability.exit()
        except Exception as e:
            logger.warning("Fullscreen exit request failed: %s", e)
            return False
        self._close_compilation()
        return True

    def on_fullscreen_change(self, active: bool) -> None:
        """Platform notification; leaving fullscreen by any route ends the span."""
        self.is_fullscreen = bool(active)
        if not self.is_fullscreen:
            self._close_compilation()

    def _open_compilation(self) -> None:
        session_id = self._session_ref()
        if not session_id:
            return
        with self._lock:
            if self._compilation_id is not None or self._opening:
                return
            self._opening = True
            self._generation += 1
            generation = self._generation
        entered_at = utc_now_iso()

        def write():
            compilation_id = None
            try:
                compilation_id = self._sink.open_compilation_session(session_id, entered_at)
            finally:
                self._finish_open(generation, compilation_id)
            return compilation_id

        self._emitter.emit("compilation_open", write)

    def _finish_open(self, generation: int, compilation_id: Optional[str]) -> None:
        with self._lock:
            if generation != self._generation or not self._opening:
                if compilation_id:
                    logger.info("Compilation session %s opened after its span ended; left open", compilation_id)
                return
            self._opening = False
            if compilation_id:
                self._compilation_id = str(compilation_id)

    def _close_compilation(self) -> None:
        with self._lock:
            compilation_id = self._compilation_id
            self._compilation_id = None
            if self._opening:
                self._opening = False
                self._generation += 1
        if compilation_id is None:
            return
        self._emitter.emit(
            "compilation_close",
            self._sink.close_compilation_session,
            compilation_id,
            utc_now_iso(),
        )
