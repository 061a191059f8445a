"""
Analytics sinks and the best-effort emission queue.

State transitions in the player never wait on analytics. Components apply
their state change first, then hand the write to AnalyticsEmitter, which runs
it on a single background worker. A failed write is logged and dropped; it is
never retried and never reaches the caller.

Sinks: HttpAnalyticsSink (gateway ingestion routes), MemoryAnalyticsSink
(offline runs and tests).
"""

import logging
import threading
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Protocol

import requests

from .models import InteractionEvent, IntervalChange

logger = logging.getLogger(__name__)


class AnalyticsWriteFailure(Exception):
    """An analytics insert or update was not accepted by the sink."""


class AnalyticsSink(Protocol):
    """Write-only view of the analytics tables used by the player."""

    def create_page_session(self, session_id: str, user_ref: str, started_at: str) -> None:
        ...

    def end_page_session(self, session_id: str, ended_at: str) -> None:
        ...

    def record_interaction(self, event: InteractionEvent) -> None:
        ...

    def record_interval_change(self, change: IntervalChange) -> None:
        ...

    def open_compilation_session(self, session_id: str, entered_at: str) -> str:
        ...

    def close_compilation_session(self, compilation_id: str, exited_at: str) -> None:
        ...


class AnalyticsEmitter:
    """
    Fire-and-forget queue for analytics writes.

    ``dispatch`` receives a zero-argument job; the default submits it to a
    one-worker thread pool so writes keep their relative order. Tests pass an
    inline dispatcher (``lambda job: job()``).
    """

    def __init__(self, dispatch: Optional[Callable[[Callable[[], Any]], Any]] = None):
        self._executor: Optional[ThreadPoolExecutor] = None
        if dispatch is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="analytics")
            dispatch = self._executor.submit
        self._dispatch = dispatch
        self._closed = False

    def emit(self, label: str, fn: Callable[..., Any], *args: Any) -> None:
        if self._closed:
            logger.debug("Analytics emitter closed, dropping %s", label)
            return

        def job():
            try:
                return fn(*args)
            except Exception as e:
                logger.warning("Analytics write %s failed: %s: %s", label, type(e).__name__, e)
                return None

        try:
            self._dispatch(job)
        except RuntimeError as e:
            logger.warning("Analytics write %s not queued: %s", label, e)

    def close(self, wait: bool = True) -> None:
        """Stop accepting writes; with wait=True, block until queued writes finish."""
        self._closed = True
        if self._executor is not None:
            self._executor.shutdown(wait=wait)


class MemoryAnalyticsSink:
    """Keeps every write in lists; useful offline and as a test double."""

    def __init__(self):
        self._lock = threading.Lock()
        self.page_sessions: Dict[str, Dict] = {}
        self.session_ends: List[Dict] = []
        self.interactions: List[InteractionEvent] = []
        self.interval_changes: List[IntervalChange] = []
        self.compilation_sessions: Dict[str, Dict] = {}

    def create_page_session(self, session_id: str, user_ref: str, started_at: str) -> None:
        with self._lock:
            self.page_sessions[session_id] = {
                "id": session_id,
                "user_id": user_ref,
                "started_at": started_at,
                "ended_at": None,
            }

    def end_page_session(self, session_id: str, ended_at: str) -> None:
        with self._lock:
            self.session_ends.append({"session_id": session_id, "ended_at": ended_at})
            if session_id in self.page_sessions:
                self.page_sessions[session_id]["ended_at"] = ended_at

    def record_interaction(self, event: InteractionEvent) -> None:
        with self._lock:
            self.interactions.append(event)

    def record_interval_change(self, change: IntervalChange) -> None:
        with self._lock:
            self.interval_changes.append(change)

    def open_compilation_session(self, session_id: str, entered_at: str) -> str:
        compilation_id = str(uuid.uuid4())
        with self._lock:
            self.compilation_sessions[compilation_id] = {
                "session_id": session_id,
                "entered_at": entered_at,
                "exited_at": None,
            }
        return compilation_id

    def close_compilation_session(self, compilation_id: str, exited_at: str) -> None:
        with self._lock:
            if compilation_id not in self.compilation_sessions:
                raise AnalyticsWriteFailure(f"unknown compilation session {compilation_id}")
            self.compilation_sessions[compilation_id]["exited_at"] = exited_at


class HttpAnalyticsSink:
    """Sink that posts to the gateway's /api/analytics routes."""

    def __init__(
        self,
        api_base: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._session = session or requests.Session()

    def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        url = f"{self.api_base}/api/analytics{path}"
        try:
            response = self._session.post(url, json=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise AnalyticsWriteFailure(f"POST {path}: {e}") from e
        if not response.ok:
            raise AnalyticsWriteFailure(f"POST {path}: status {response.status_code}")
        try:
            return response.json()
        except ValueError:
            return {}

    def create_page_session(self, session_id: str, user_ref: str, started_at: str) -> None:
        # user is resolved server-side from the bearer token
        self._post("/page-sessions", {"session_id": session_id, "started_at": started_at})

    def end_page_session(self, session_id: str, ended_at: str) -> None:
        self._post(f"/page-sessions/{session_id}/end", {"ended_at": ended_at})

    def record_interaction(self, event: InteractionEvent) -> None:
        self._post("/interactions", event.model_dump(mode="json", exclude_none=True))

    def record_interval_change(self, change: IntervalChange) -> None:
        self._post("/intervals", change.model_dump(mode="json"))

    def open_compilation_session(self, session_id: str, entered_at: str) -> str:
        data = self._post("/compilation-sessions", {"session_id": session_id, "entered_at": entered_at})
        compilation_id = data.get("id")
        if not compilation_id:
            raise AnalyticsWriteFailure("compilation session response carried no id")
        return str(compilation_id)

    def close_compilation_session(self, compilation_id: str, exited_at: str) -> None:
        self._post(f"/compilation-sessions/{compilation_id}/exit", {"exited_at": exited_at})
