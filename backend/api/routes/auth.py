"""
API key test endpoint.

Lets the dashboard check a key before storing it client-side.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from modules.usage.interfaces import IUsageSource
from shared.models import ApiModel
from ..dependencies import get_usage_source
from ..middleware.auth import resolve_api_key

router = APIRouter()


class ApiKeyTestRequest(ApiModel):
    """Request body for a key check ({"apiKey": ...})."""

    api_key: Optional[str] = None


class ApiKeyTestResponse(ApiModel):
    """Successful key check."""

    success: bool
    user_id: str


@router.post("/test", response_model=ApiKeyTestResponse)
async def test_api_key(
    request: ApiKeyTestRequest,
    usage_source: IUsageSource = Depends(get_usage_source),
) -> ApiKeyTestResponse:
    """
    Validate an API key.

    Returns the key's user ID, 400 without a key and 401 for a rejected key.
    """
    if not request.api_key:
        raise HTTPException(status_code=400, detail="API key required")

    user = await resolve_api_key(request.api_key, usage_source)
    return ApiKeyTestResponse(success=True, user_id=user.id)
