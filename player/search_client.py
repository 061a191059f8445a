"""HTTP client for the gateway's POST /search."""

import logging
from typing import Optional

import requests
from pydantic import ValidationError

from .models import SearchResult

logger = logging.getLogger(__name__)


class SearchFailed(Exception):
    """Search request did not produce a result set."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SearchClient:
    def __init__(
        self,
        api_base: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._session = session or requests.Session()

    def search(
        self,
        prompt: str,
        similarity_threshold: float,
        match_count: int,
        session_id: Optional[str] = None,
    ) -> SearchResult:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        body = {
            "prompt": prompt,
            "similarity_threshold": similarity_threshold,
            "match_count": match_count,
            "session_id": session_id,
        }
        try:
            response = self._session.post(
                f"{self.api_base}/search",
                json=body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SearchFailed(f"transport error: {e}") from e

        if not response.ok:
            try:
                message = response.json().get("error") or "Search failed"
            except (ValueError, AttributeError):
                message = "Search failed"
            raise SearchFailed(message, status_code=response.status_code)

        try:
            return SearchResult.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise SearchFailed(f"malformed search response: {e}") from e
