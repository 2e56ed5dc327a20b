"""
Base exception classes for the Costshare backend.

Each module defines its own exceptions on top of these bases. A base
fixes the HTTP status the error maps to and whether its message may be
shown to the dashboard: client errors (404, 401) explain themselves,
server errors are reported with a generic message and logged in full.
"""

from typing import Optional, Any

INTERNAL_ERROR_DETAIL = "Internal server error"


class CostshareError(Exception):
    """
    Base exception for all Costshare errors.

    Attributes:
        status_code: HTTP status the API answers with
        message: Human-readable description
        code: Stable machine-readable identifier (class name by default)
        details: Structured context for logs
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    @property
    def is_client_error(self) -> bool:
        return self.status_code < 500

    def to_dict(self, fallback: str = INTERNAL_ERROR_DETAIL) -> dict[str, Any]:
        """
        Describe the error as an API response body.

        Args:
            fallback: Detail shown for server errors, whose own message
                may name upstream endpoints or snapshot contents

        Returns:
            {"error": code, "detail": text}
        """
        return {
            "error": self.code,
            "detail": self.message if self.is_client_error else fallback,
        }

    def log_context(self) -> str:
        """One-line summary for server logs."""
        context = ", ".join(f"{key}={value}" for key, value in sorted(self.details.items()))
        return f"[{self.code}] {self.message}" + (f" ({context})" if context else "")


class NotFoundError(CostshareError):
    """A period or a user within a period does not exist."""

    status_code = 404


class ValidationError(CostshareError):
    """Stored data failed validation (e.g. a corrupt snapshot payload)."""


class AuthenticationError(CostshareError):
    """The caller's API key was rejected."""

    status_code = 401


class ExternalServiceError(CostshareError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
