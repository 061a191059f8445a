"""Clip search endpoint: log, query the model, sign matches."""

import logging

from fastapi import APIRouter, Depends

from ..errors import GatewayError
from ..models import ErrorResponse, SearchRequest, SearchResponse
from ..state import get_state
from .deps import current_user

router = APIRouter()
logger = logging.getLogger(__name__)


def _log_search(msg: str) -> None:
    logger.info("[search] %s", msg)


@router.post(
    "/search",
    response_model=SearchResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def search(request: SearchRequest, user_id: str = Depends(current_user)):
    """Run one clip search for the authenticated caller. Single attempt, no retries."""
    _log_search(f"search started: user={user_id!r} session={request.session_id!r} match_count={request.match_count}")
    state = get_state()
    try:
        response = state.search_gateway.search(request, user_id)
    except GatewayError as e:
        _log_search(f"search failed: {type(e).__name__}: {e}")
        raise
    except Exception as e:
        logger.exception("[search] unexpected failure")
        raise GatewayError(f"unexpected {type(e).__name__}: {e}") from e
    _log_search(f"search done: search_id={response.search_id} matches={len(response.matches)}")
    return response
