"""
Analytics Store abstraction.

Append/update sink for page sessions, slot interactions, auto-advance interval
changes, compilation-mode spans and search logs. Implementations: in-memory
(local runs, tests), Firestore (production). Swap via config for local vs cloud.
"""

import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class AnalyticsStore(Protocol):
    """Protocol for analytics writes. Implement for in-memory or Firestore."""

    def create_page_session(
        self,
        session_id: str,
        user_id: str,
        started_at: Optional[str] = None,
    ) -> None:
        """Insert the page_sessions row for a new visit."""
        ...

    def end_page_session(self, session_id: str, ended_at: Optional[str] = None) -> None:
        """Set ended_at on an existing page session."""
        ...

    def record_interaction(
        self,
        session_id: str,
        video_id: str,
        event_type: str,
        duration_seconds: Optional[int] = None,
    ) -> None:
        """Append one video_interactions row (NEXT, PREV, AUTO_ADVANCE_START/STOP)."""
        ...

    def record_interval_change(self, session_id: str, interval_seconds: int) -> None:
        """Append one auto_advance_intervals row."""
        ...

    def open_compilation_session(self, session_id: str, entered_at: Optional[str] = None) -> str:
        """Insert a compilation_mode_sessions row and return its id."""
        ...

    def close_compilation_session(self, compilation_id: str, exited_at: Optional[str] = None) -> None:
        """Set exited_at on a compilation_mode_sessions row."""
        ...

    def log_search(self, session_id: Optional[str], user_id: str, prompt: str) -> str:
        """Insert a searches row and return its id."""
        ...


class InMemoryAnalyticsStore:
    """
    Analytics store kept in process memory (no persistence).
    Used for local runs without Firestore credentials and for tests.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.page_sessions: Dict[str, Dict] = {}
        self.interactions: List[Dict] = []
        self.interval_changes: List[Dict] = []
        self.compilation_sessions: Dict[str, Dict] = {}
        self.searches: Dict[str, Dict] = {}

    def create_page_session(
        self,
        session_id: str,
        user_id: str,
        started_at: Optional[str] = None,
    ) -> None:
        with self._lock:
            self.page_sessions[session_id] = {
                "id": session_id,
                "user_id": user_id,
                "started_at": started_at or utc_now_iso(),
                "ended_at": None,
            }

    def end_page_session(self, session_id: str, ended_at: Optional[str] = None) -> None:
        with self._lock:
            row = self.page_sessions.get(session_id)
            if row is None:
                raise KeyError(f"page session not found: {session_id}")
            row["ended_at"] = ended_at or utc_now_iso()

    def record_interaction(
        self,
        session_id: str,
        video_id: str,
        event_type: str,
        duration_seconds: Optional[int] = None,
    ) -> None:
        row = {
            "session_id": session_id,
            "video_id": video_id,
            "event_type": event_type,
            "created_at": utc_now_iso(),
        }
        if duration_seconds is not None:
            row["auto_advance_duration"] = duration_seconds
        with self._lock:
            self.interactions.append(row)

    def record_interval_change(self, session_id: str, interval_seconds: int) -> None:
        with self._lock:
            self.interval_changes.append({
                "session_id": session_id,
                "interval_set": interval_seconds,
                "created_at": utc_now_iso(),
            })

    def open_compilation_session(self, session_id: str, entered_at: Optional[str] = None) -> str:
        compilation_id = str(uuid.uuid4())
        with self._lock:
            self.compilation_sessions[compilation_id] = {
                "id": compilation_id,
                "session_id": session_id,
                "entered_at": entered_at or utc_now_iso(),
                "exited_at": None,
            }
        return compilation_id

    def close_compilation_session(self, compilation_id: str, exited_at: Optional[str] = None) -> None:
        with self._lock:
            row = self.compilation_sessions.get(compilation_id)
            if row is None:
                raise KeyError(f"compilation session not found: {compilation_id}")
            row["exited_at"] = exited_at or utc_now_iso()

    def log_search(self, session_id: Optional[str], user_id: str, prompt: str) -> str:
        search_id = str(uuid.uuid4())
        with self._lock:
            self.searches[search_id] = {
                "id": search_id,
                "session_id": session_id,
                "user_id": user_id,
                "prompt": prompt,
                "created_at": utc_now_iso(),
            }
        return search_id
