"""Analytics ingestion: page sessions, interactions, interval changes, compilation spans."""

import logging

from fastapi import APIRouter, Depends

from ..errors import AnalyticsIngestFailure
from ..models import (
    CompilationSessionExit,
    CompilationSessionOpen,
    CompilationSessionResponse,
    IntervalChangeCreate,
    InteractionCreate,
    PageSessionCreate,
    PageSessionEnd,
)
from ..state import get_state
from .deps import current_user

router = APIRouter()
logger = logging.getLogger(__name__)


def _write(label: str, fn, *args):
    """Run one store write, mapping any store error to AnalyticsIngestFailure."""
    try:
        return fn(*args)
    except Exception as e:
        logger.warning("[analytics] %s failed: %s: %s", label, type(e).__name__, e)
        raise AnalyticsIngestFailure(f"{label} failed") from e


@router.post("/page-sessions", status_code=201)
def create_page_session(request: PageSessionCreate, user_id: str = Depends(current_user)):
    store = get_state().analytics_store
    _write("create_page_session", store.create_page_session, request.session_id, user_id, request.started_at)
    return {"status": "ok", "session_id": request.session_id}


@router.post("/page-sessions/{session_id}/end")
def end_page_session(
    session_id: str,
    request: PageSessionEnd = PageSessionEnd(),
    user_id: str = Depends(current_user),
):
    store = get_state().analytics_store
    _write("end_page_session", store.end_page_session, session_id, request.ended_at)
    return {"status": "ok", "session_id": session_id}


@router.post("/interactions", status_code=201)
def record_interaction(request: InteractionCreate, user_id: str = Depends(current_user)):
    store = get_state().analytics_store
    _write(
        "record_interaction",
        store.record_interaction,
        request.session_id,
        request.video_id,
        request.event_type,
        request.duration_seconds,
    )
    return {"status": "ok", "event_type": request.event_type}


@router.post("/intervals", status_code=201)
def record_interval_change(request: IntervalChangeCreate, user_id: str = Depends(current_user)):
    store = get_state().analytics_store
    _write("record_interval_change", store.record_interval_change, request.session_id, request.interval_seconds)
    return {"status": "ok", "interval_seconds": request.interval_seconds}


@router.post("/compilation-sessions", status_code=201, response_model=CompilationSessionResponse)
def open_compilation_session(request: CompilationSessionOpen, user_id: str = Depends(current_user)):
    store = get_state().analytics_store
    compilation_id = _write(
        "open_compilation_session",
        store.open_compilation_session,
        request.session_id,
        request.entered_at,
    )
    return CompilationSessionResponse(id=str(compilation_id))


@router.post("/compilation-sessions/{compilation_id}/exit")
def close_compilation_session(
    compilation_id: str,
    request: CompilationSessionExit = CompilationSessionExit(),
    user_id: str = Depends(current_user),
):
    store = get_state().analytics_store
    _write("close_compilation_session", store.close_compilation_session, compilation_id, request.exited_at)
    return {"status": "ok", "id": compilation_id}
