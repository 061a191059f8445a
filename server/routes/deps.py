"""Shared route dependencies."""

from typing import Optional

from fastapi import Header

from ..services import bearer_token
from ..state import get_state


def current_user(authorization: Optional[str] = Header(None)) -> str:
    """Resolve the caller's user id from the bearer credential.

    Raises AuthenticationFailure (rendered as 401 by the app) before the route
    body runs, so a rejected request never touches the store or the model.
    """
    state = get_state()
    return state.identity_verifier.verify(bearer_token(authorization))
