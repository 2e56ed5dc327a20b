"""
Shared infrastructure for Costshare backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes and their HTTP status
- models: ApiKeyUser and the camelCase ApiModel base
- repository: Base class for Supabase repositories

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import create_snapshot_client, get_supabase_client, reset_client_cache
from .exceptions import (
    CostshareError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    ExternalServiceError,
)
from .models import ApiKeyUser, ApiModel

__all__ = [
    "Settings",
    "get_settings",
    "create_snapshot_client",
    "get_supabase_client",
    "reset_client_cache",
    "CostshareError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "ExternalServiceError",
    "ApiKeyUser",
    "ApiModel",
]
