"""
Usage module.

Reads live cumulative usage for every user from the upstream admin API
and validates it at the ingestion boundary.

Public API:
- IUsageSource: Interface for live usage
- UserUsageRecord: One user's cumulative usage
- UsageTotals: Cumulative counters
- StaticUsageSource / AdminApiUsageSource: Implementations
"""

from .interfaces import IUsageSource
from .models import UserUsageRecord, UsageTotals, UsageBreakdown
from .exceptions import (
    UsageError,
    UpstreamUnavailableError,
    UpstreamResponseError,
    UpstreamAuthError,
    InvalidApiKeyError,
)
from .sources import StaticUsageSource, AdminApiUsageSource, NOSHARE_TAG

__all__ = [
    # Interfaces
    "IUsageSource",
    # Models
    "UserUsageRecord",
    "UsageTotals",
    "UsageBreakdown",
    # Exceptions
    "UsageError",
    "UpstreamUnavailableError",
    "UpstreamResponseError",
    "UpstreamAuthError",
    "InvalidApiKeyError",
    # Sources
    "StaticUsageSource",
    "AdminApiUsageSource",
    "NOSHARE_TAG",
]
