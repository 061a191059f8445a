"""
Search gateway error taxonomy.

Every failure on the search path is terminal for the request. Each error
carries the HTTP status and the public message the boundary returns; the
underlying cause stays in the server log.
"""


class GatewayError(Exception):
    """Base class for failures that abort a gateway request."""

    status_code = 500
    public_message = "Search failed"


class AuthenticationFailure(GatewayError):
    """Missing or invalid caller credential."""

    status_code = 401
    public_message = "Unauthorized"


class SearchLogFailure(GatewayError):
    """The search-log row could not be written."""


class UpstreamInferenceFailure(GatewayError):
    """Inference endpoint returned non-success, a bad body, or was unreachable."""


class SigningFailure(GatewayError):
    """Storage backend could not issue a signed URL for a match."""


class AnalyticsIngestFailure(GatewayError):
    """An analytics row could not be written by the ingestion routes."""

    public_message = "Analytics write failed"
