"""
Usage module exceptions.

Raised by usage sources. The billing module lets them propagate so the
HTTP layer can turn them into error responses.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    CostshareError,
    ExternalServiceError,
)

UPSTREAM_SERVICE = "admin-api"


class UsageError(CostshareError):
    """Base exception for usage-related errors."""

    pass


class UpstreamUnavailableError(ExternalServiceError):
    """Raised when the upstream admin API cannot be reached or returns an error status."""

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(
            f"Upstream admin API unavailable: {message}",
            service=UPSTREAM_SERVICE,
            code="UPSTREAM_UNAVAILABLE",
            details={"upstream_status": upstream_status} if upstream_status else {},
        )
        self.upstream_status = upstream_status


class UpstreamResponseError(ExternalServiceError):
    """Raised when the upstream admin API answers with an unexpected payload."""

    def __init__(self, endpoint: str, message: str):
        super().__init__(
            f"Invalid response from {endpoint}: {message}",
            service=UPSTREAM_SERVICE,
            code="UPSTREAM_BAD_RESPONSE",
            details={"endpoint": endpoint, "error": message},
        )


class UpstreamAuthError(ExternalServiceError):
    """Raised when logging in to the upstream admin API fails after all retries."""

    def __init__(self, attempts: int, message: str):
        super().__init__(
            f"Login failed after {attempts} attempts: {message}",
            service=UPSTREAM_SERVICE,
            code="UPSTREAM_AUTH_FAILED",
            details={"attempts": attempts, "error": message},
        )


class InvalidApiKeyError(AuthenticationError):
    """Raised when an API key is rejected by the upstream key lookup."""

    def __init__(self, reason: str = "Invalid API key"):
        super().__init__(reason, code="INVALID_API_KEY")
