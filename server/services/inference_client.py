"""
Inference endpoint client.

Forwards the search payload to the hosted clip-matching model and returns its
JSON body. One attempt per call; any non-success status, transport error or
malformed body raises UpstreamInferenceFailure.
"""

import logging
from typing import Any, Dict, Optional

import requests

from ..errors import UpstreamInferenceFailure

logger = logging.getLogger(__name__)


class InferenceClient:
    """Synchronous client for the clip-matching model's predict endpoint."""

    def __init__(
        self,
        url: Optional[str],
        api_key: Optional[str] = None,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self._session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Api-Key {self.api_key}"
        return headers

    def predict(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST payload to the model and return the decoded response body."""
        if not self.url:
            raise UpstreamInferenceFailure("INFERENCE_URL is not configured")
        try:
            response = self._session.post(
                self.url,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Inference request failed: %s", e)
            raise UpstreamInferenceFailure(f"transport error: {e}") from e

        if not response.ok:
            logger.error(
                "Inference endpoint returned %s: %s",
                response.status_code,
                response.text[:500],
            )
            raise UpstreamInferenceFailure(f"status {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamInferenceFailure("response body is not JSON") from e
        if not isinstance(data, dict):
            raise UpstreamInferenceFailure("response body is not an object")
        matches = data.get("matches", [])
        if matches is None:
            data["matches"] = []
        elif not isinstance(matches, list):
            raise UpstreamInferenceFailure("matches is not a list")
        return data
