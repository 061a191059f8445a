"""
Firestore analytics store: one top-level collection per analytics table.

page_sessions/{session_id}, video_interactions, auto_advance_intervals,
compilation_mode_sessions and searches (auto-generated document ids).
Used when FIREBASE_CREDENTIALS_PATH points at a service account JSON file.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .analytics_store import utc_now_iso

logger = logging.getLogger(__name__)

PAGE_SESSIONS = "page_sessions"
VIDEO_INTERACTIONS = "video_interactions"
AUTO_ADVANCE_INTERVALS = "auto_advance_intervals"
COMPILATION_MODE_SESSIONS = "compilation_mode_sessions"
SEARCHES = "searches"


def init_firebase_app(
    project_id: Optional[str] = None,
    credentials_path: Optional[Union[Path, str]] = None,
) -> None:
    """Initialize the default Firebase app once (shared with the identity verifier)."""
    import firebase_admin
    from firebase_admin import credentials

    if firebase_admin._apps:
        return
    if credentials_path:
        cred = credentials.Certificate(str(Path(credentials_path).resolve()))
        opts = {"projectId": project_id} if project_id else None
        firebase_admin.initialize_app(cred, opts)
    else:
        firebase_admin.initialize_app(options={"projectId": project_id} if project_id else None)


class FirestoreAnalyticsStore:
    """
    Analytics store backed by Firestore.
    page_sessions documents use the client-generated session id as document ID
    so the close write can address them directly.
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        client=None,
    ):
        if client is None:
            from firebase_admin import firestore

            init_firebase_app(project_id=project_id, credentials_path=credentials_path)
            client = firestore.client()
        self._db = client
        self._project_id = project_id

    def create_page_session(
        self,
        session_id: str,
        user_id: str,
        started_at: Optional[str] = None,
    ) -> None:
        self._db.collection(PAGE_SESSIONS).document(session_id).set({
            "user_id": user_id,
            "started_at": started_at or utc_now_iso(),
            "ended_at": None,
        })

    def end_page_session(self, session_id: str, ended_at: Optional[str] = None) -> None:
        self._db.collection(PAGE_SESSIONS).document(session_id).update({
            "ended_at": ended_at or utc_now_iso(),
        })

    def record_interaction(
        self,
        session_id: str,
        video_id: str,
        event_type: str,
        duration_seconds: Optional[int] = None,
    ) -> None:
        data = {
            "session_id": session_id,
            "video_id": video_id,
            "event_type": event_type,
            "created_at": utc_now_iso(),
        }
        if duration_seconds is not None:
            data["auto_advance_duration"] = duration_seconds
        self._db.collection(VIDEO_INTERACTIONS).add(data)

    def record_interval_change(self, session_id: str, interval_seconds: int) -> None:
        self._db.collection(AUTO_ADVANCE_INTERVALS).add({
            "session_id": session_id,
            "interval_set": interval_seconds,
            "created_at": utc_now_iso(),
        })

    def open_compilation_session(self, session_id: str, entered_at: Optional[str] = None) -> str:
        _, doc_ref = self._db.collection(COMPILATION_MODE_SESSIONS).add({
            "session_id": session_id,
            "entered_at": entered_at or utc_now_iso(),
            "exited_at": None,
        })
        return doc_ref.id

    def close_compilation_session(self, compilation_id: str, exited_at: Optional[str] = None) -> None:
        self._db.collection(COMPILATION_MODE_SESSIONS).document(compilation_id).update({
            "exited_at": exited_at or utc_now_iso(),
        })

    def log_search(self, session_id: Optional[str], user_id: str, prompt: str) -> str:
        try:
            _, doc_ref = self._db.collection(SEARCHES).add({
                "session_id": session_id,
                "user_id": user_id,
                "prompt": prompt,
                "created_at": utc_now_iso(),
            })
        except Exception as e:
            logger.error("log_search failed for user=%r: %s", user_id, e)
            raise
        return doc_ref.id
