"""Backing logic: stores, identity, model client, signer, search gateway."""

from .analytics_store import AnalyticsStore, InMemoryAnalyticsStore
from .firestore_analytics_store import FirestoreAnalyticsStore, init_firebase_app
from .identity import (
    FirebaseIdentityVerifier,
    IdentityVerifier,
    StaticTokenVerifier,
    bearer_token,
)
from .inference_client import InferenceClient
from .search_gateway import SearchGateway
from .url_signer import S3UrlSigner, UrlSigner, parse_storage_locator

__all__ = [
    "AnalyticsStore",
    "InMemoryAnalyticsStore",
    "FirestoreAnalyticsStore",
    "init_firebase_app",
    "IdentityVerifier",
    "FirebaseIdentityVerifier",
    "StaticTokenVerifier",
    "bearer_token",
    "InferenceClient",
    "SearchGateway",
    "S3UrlSigner",
    "UrlSigner",
    "parse_storage_locator",
]
