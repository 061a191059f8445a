"""Application state: analytics store, identity verifier, model client, signer, gateway."""

import logging
from pathlib import Path
from typing import Any, Optional

from .config import get_config, ServerConfig
from .services import (
    FirebaseIdentityVerifier,
    FirestoreAnalyticsStore,
    InferenceClient,
    InMemoryAnalyticsStore,
    S3UrlSigner,
    SearchGateway,
    StaticTokenVerifier,
)

logger = logging.getLogger(__name__)


class AppState:
    """Global application state. Services are built once and shared read-only across requests."""

    def __init__(
        self,
        config: ServerConfig,
        analytics_store: Optional[Any] = None,
        identity_verifier: Optional[Any] = None,
        inference_client: Optional[Any] = None,
        url_signer: Optional[Any] = None,
    ):
        self.config = config

        # Analytics store: Firestore when creds set, else in-memory
        self.analytics_store = analytics_store or self._create_analytics_store(config)
        logger.info("[startup] Analytics store: %s", type(self.analytics_store).__name__)

        self.identity_verifier = identity_verifier or self._create_identity_verifier(config)
        logger.info("[startup] Identity verifier: %s", type(self.identity_verifier).__name__)

        self.inference_client = inference_client or InferenceClient(
            url=config.inference_url,
            api_key=config.inference_api_key,
            timeout=config.inference_timeout_seconds,
        )
        self.url_signer = url_signer or S3UrlSigner(
            access_key=config.storage_access_key,
            secret_key=config.storage_secret_key,
            endpoint_url=config.storage_endpoint,
            region_name=config.storage_region,
            expires_in=config.signed_url_expiry_seconds,
        )

        self.search_gateway = SearchGateway(
            analytics_store=self.analytics_store,
            inference_client=self.inference_client,
            url_signer=self.url_signer,
        )

    def _create_analytics_store(self, config: ServerConfig) -> Any:
        """Create analytics store (Firestore when creds set, else in-memory)."""
        if config.firebase_credentials_path:
            cred_path = Path(config.firebase_credentials_path)
            if not cred_path.exists() or not cred_path.is_file():
                logger.warning(
                    "[startup] Firestore analytics store skipped: credentials path not found or not a file: %s",
                    cred_path,
                )
            else:
                try:
                    return FirestoreAnalyticsStore(
                        project_id=config.firebase_project_id,
                        credentials_path=config.firebase_credentials_path,
                    )
                except Exception as e:
                    logger.warning("[startup] Firestore analytics store init failed: %s, using in-memory", e)
        return InMemoryAnalyticsStore()

    def _create_identity_verifier(self, config: ServerConfig) -> Any:
        """Create identity verifier from AUTH_MODE."""
        if config.auth_mode == "firebase":
            return FirebaseIdentityVerifier(
                project_id=config.firebase_project_id,
                credentials_path=config.firebase_credentials_path,
            )
        if not config.api_tokens:
            logger.warning("[startup] API_TOKENS is empty: every authenticated request will be rejected")
        return StaticTokenVerifier(config.api_tokens)


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        config = get_config()
        _state = AppState(config)
    return _state


def set_state(state: Optional[AppState]) -> None:
    """Replace the process-wide state (None resets it to be rebuilt from config)."""
    global _state
    _state = state
