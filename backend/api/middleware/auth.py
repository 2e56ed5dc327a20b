"""
API key authentication middleware.

Callers identify themselves with the same API key they use against the
upstream service. The key is resolved to its key id, which doubles as
the user id in usage records.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

from shared.exceptions import ExternalServiceError
from shared.models import ApiKeyUser
from modules.usage.exceptions import InvalidApiKeyError
from modules.usage.interfaces import IUsageSource
from ..dependencies import get_usage_source

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"

# Header extractor
api_key_scheme = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
        )


async def resolve_api_key(api_key: str, usage_source: IUsageSource) -> ApiKeyUser:
    """
    Resolve an API key to the caller.

    Raises:
        AuthError: If the key is rejected
        HTTPException: 503 if the upstream lookup is unavailable
    """
    try:
        key_id = await usage_source.get_key_id(api_key)
    except InvalidApiKeyError:
        logger.warning("Rejected invalid API key")
        raise AuthError("Invalid API key")
    except ExternalServiceError as e:
        logger.warning(f"API key validation unavailable: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="API key validation unavailable",
        )
    return ApiKeyUser(id=key_id)


async def get_current_user(
    api_key: Optional[str] = Depends(api_key_scheme),
    usage_source: IUsageSource = Depends(get_usage_source),
) -> ApiKeyUser:
    """
    Dependency that requires a valid API key.

    Usage:
        @router.get("/protected")
        async def protected_route(user: ApiKeyUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if not api_key:
        raise AuthError("API key required")
    return await resolve_api_key(api_key, usage_source)
