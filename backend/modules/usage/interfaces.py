"""
Usage module interface.

Other modules should depend on IUsageSource, not the concrete implementation.
This lets the billing module compute live deltas without knowing anything
about the upstream admin API.
"""

from typing import Protocol, runtime_checkable

from .models import UserUsageRecord


@runtime_checkable
class IUsageSource(Protocol):
    """
    Interface for reading live usage.

    Implementations may fetch from a remote API (AdminApiUsageSource) or
    serve injected data (StaticUsageSource).
    """

    async def get_current_usage(self) -> list[UserUsageRecord]:
        """
        Get the cumulative usage of every shared user as of now.

        Returns:
            Validated usage records, one per user

        Raises:
            UpstreamUnavailableError: If the upstream API cannot be reached
            UpstreamResponseError: If the upstream payload is malformed
        """
        ...

    async def get_key_id(self, api_key: str) -> str:
        """
        Resolve an API key to the user id it belongs to.

        Args:
            api_key: The caller's raw API key

        Returns:
            The user id used in usage records

        Raises:
            InvalidApiKeyError: If the key is unknown or rejected
        """
        ...
