"""
Page session lifecycle.

One session per visit. The id is assigned synchronously on activation and is
usable right away, while the insert is still queued. Unload, visibility loss
and teardown all funnel into end(); only the first call writes.
"""

import logging
import threading
import uuid
from typing import Callable, Optional

from .analytics import AnalyticsEmitter, AnalyticsSink
from .models import Session, utc_now_iso

logger = logging.getLogger(__name__)


class SessionTracker:
    def __init__(
        self,
        emitter: AnalyticsEmitter,
        sink: AnalyticsSink,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._emitter = emitter
        self._sink = sink
        self._id_factory = id_factory
        self._lock = threading.Lock()
        self.session: Optional[Session] = None

    @property
    def session_id(self) -> Optional[str]:
        return self.session.id if self.session else None

    @property
    def ended(self) -> bool:
        return self.session is not None and self.session.ended_at is not None

    def activate(self, user_ref: Optional[str]) -> Optional[str]:
        """Start the visit's session. No identity, no session."""
        if not user_ref:
            logger.debug("No identity available; session not started")
            return None
        with self._lock:
            if self.session is not None:
                return self.session.id
            self.session = Session(id=self._id_factory(), user_ref=user_ref, started_at=utc_now_iso())
            session = self.session
        self._emitter.emit(
            "session_start",
            self._sink.create_page_session,
            session.id,
            session.user_ref,
            session.started_at,
        )
        logger.info("Page session %s started", session.id)
        return session.id

    def end(self) -> bool:
        """Close the session once. Returns False when there was nothing to close."""
        with self._lock:
            session = self.session
            if session is None or session.ended_at is not None:
                return False
            session.ended_at = utc_now_iso()
        self._emitter.emit("session_end", self._sink.end_page_session, session.id, session.ended_at)
        logger.info("Page session %s ended", session.id)
        return True

    def on_before_unload(self) -> None:
        self.end()

    def on_visibility_change(self, hidden: bool) -> None:
        if hidden:
            self.end()

    def teardown(self) -> None:
        self.end()
