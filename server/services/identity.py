"""
Identity verification for incoming requests.

The identity provider is external; the server only checks the bearer
credential and resolves it to a user reference. Implementations: static
token table (local runs, tests) and Firebase ID tokens (production).
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from ..errors import AuthenticationFailure
from .firestore_analytics_store import init_firebase_app

logger = logging.getLogger(__name__)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an "Authorization: Bearer <token>" header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class IdentityVerifier(Protocol):
    """Resolve a credential to a user reference or raise AuthenticationFailure."""

    def verify(self, token: Optional[str]) -> str:
        ...


class StaticTokenVerifier:
    """Verifier backed by a fixed token -> user id table (API_TOKENS)."""

    def __init__(self, tokens: Dict[str, str]):
        self._tokens = dict(tokens)

    def verify(self, token: Optional[str]) -> str:
        if not token:
            raise AuthenticationFailure("missing credential")
        user_id = self._tokens.get(token)
        if not user_id:
            raise AuthenticationFailure("unknown token")
        return user_id


class FirebaseIdentityVerifier:
    """Verifier that checks Firebase ID tokens and returns the token's uid."""

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
    ):
        from firebase_admin import auth

        init_firebase_app(project_id=project_id, credentials_path=credentials_path)
        self._auth = auth

    def verify(self, token: Optional[str]) -> str:
        if not token:
            raise AuthenticationFailure("missing credential")
        try:
            decoded = self._auth.verify_id_token(token)
        except Exception as e:
            logger.info("Rejected Firebase ID token: %s", e)
            raise AuthenticationFailure("invalid token") from e
        uid = decoded.get("uid")
        if not uid:
            raise AuthenticationFailure("token carries no uid")
        return uid
