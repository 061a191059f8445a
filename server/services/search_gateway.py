"""
Search gateway: log the search, query the model, sign every match.

Steps run in order and each one is a hard dependency on the previous:
search-log write, inference call, per-match URL signing. Any failure aborts
the whole request with a GatewayError subclass; nothing is retried and no
partially-signed list is ever returned.
"""

import logging
from typing import Any, Dict, List, Optional

from ..errors import SearchLogFailure, SigningFailure, UpstreamInferenceFailure
from ..models.search import MatchOut, SearchRequest, SearchResponse
from .analytics_store import AnalyticsStore
from .inference_client import InferenceClient
from .url_signer import UrlSigner

logger = logging.getLogger(__name__)

# Field names the model may use for a match's storage locator
STORAGE_REF_FIELDS = ("storage_ref", "s3_url")


def storage_ref_of(match: Dict[str, Any]) -> Optional[str]:
    for field in STORAGE_REF_FIELDS:
        value = match.get(field)
        if value:
            return value
    return None


class SearchGateway:
    """Request-scoped search pipeline over injected store, model and signer."""

    def __init__(
        self,
        analytics_store: AnalyticsStore,
        inference_client: InferenceClient,
        url_signer: UrlSigner,
    ):
        self.analytics_store = analytics_store
        self.inference_client = inference_client
        self.url_signer = url_signer

    def _log_search(self, request: SearchRequest, user_id: str) -> str:
        try:
            search_id = self.analytics_store.log_search(request.session_id, user_id, request.prompt)
        except Exception as e:
            raise SearchLogFailure(f"search log write failed: {e}") from e
        if not search_id:
            raise SearchLogFailure("search log write returned no id")
        return str(search_id)

    def _sign_matches(self, raw_matches: List[Dict[str, Any]]) -> List[MatchOut]:
        """Sign each match in input order. The first failure aborts the batch."""
        out = []
        for position, match in enumerate(raw_matches):
            if not isinstance(match, dict) or match.get("id") is None:
                raise UpstreamInferenceFailure(f"malformed match at position {position}")
            access_url = None
            locator = storage_ref_of(match)
            if locator:
                try:
                    access_url = self.url_signer.sign(locator)
                except SigningFailure:
                    raise
                except Exception as e:
                    raise SigningFailure(f"signing failed for match {match.get('id')!r}: {e}") from e
            try:
                similarity = float(match.get("similarity", 0.0))
            except (TypeError, ValueError) as e:
                raise UpstreamInferenceFailure(f"bad similarity for match {match.get('id')!r}") from e
            out.append(MatchOut(
                id=str(match["id"]),
                title=match.get("title") or "",
                access_url=access_url,
                similarity=similarity,
            ))
        return out

    def search(self, request: SearchRequest, user_id: str) -> SearchResponse:
        """Run one search for an already-authenticated user."""
        search_id = self._log_search(request, user_id)
        logger.info("Logged search %s for session=%r", search_id, request.session_id)

        data = self.inference_client.predict(request.model_dump())
        raw_matches = data.get("matches") or []
        logger.info("Inference returned %d matches for search %s", len(raw_matches), search_id)

        matches = self._sign_matches(raw_matches)

        threshold = data.get("threshold", request.similarity_threshold)
        try:
            threshold = float(threshold)
        except (TypeError, ValueError):
            threshold = request.similarity_threshold
        return SearchResponse(
            matches=matches,
            prompt=data.get("prompt") or request.prompt,
            threshold=threshold,
            search_id=search_id,
        )

