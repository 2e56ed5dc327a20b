"""
Billing period API endpoints.

Provides REST endpoints for the period list, period rankings and the
caller's own cost. The caller is identified by the x-api-key header.
"""

from fastapi import APIRouter, Depends

from api.errors import to_http_exception
from api.middleware.auth import get_current_user
from api.dependencies import get_billing_calculator
from shared.exceptions import CostshareError
from shared.models import ApiKeyUser

from .interfaces import IBillingCalculator
from .models import PeriodListResponse, PeriodSummary, UserDetail

router = APIRouter()


@router.get("", response_model=PeriodListResponse)
async def list_periods(
    user: ApiKeyUser = Depends(get_current_user),
    calculator: IBillingCalculator = Depends(get_billing_calculator),
) -> PeriodListResponse:
    """
    List all billing periods, oldest first.

    The last entry is the current (open) period. Indices shift after a
    period close, so clients should refetch rather than cache them.
    """
    try:
        return PeriodListResponse(periods=await calculator.get_periods())
    except CostshareError as e:
        raise to_http_exception(e, "Failed to get periods") from e


@router.get("/{period_index}/summary", response_model=PeriodSummary)
async def get_period_summary(
    period_index: int,
    user: ApiKeyUser = Depends(get_current_user),
    calculator: IBillingCalculator = Depends(get_billing_calculator),
) -> PeriodSummary:
    """
    Get the cost ranking for a period.

    Only the caller's own entry carries a user ID.
    """
    try:
        return await calculator.get_period_summary(period_index, user.id)
    except CostshareError as e:
        raise to_http_exception(e, "Failed to get period summary") from e


@router.get("/{period_index}/me", response_model=UserDetail)
async def get_user_detail(
    period_index: int,
    user: ApiKeyUser = Depends(get_current_user),
    calculator: IBillingCalculator = Depends(get_billing_calculator),
) -> UserDetail:
    """
    Get the caller's own cost for a period.
    """
    try:
        return await calculator.get_user_detail(period_index, user.id)
    except CostshareError as e:
        raise to_http_exception(e, "Failed to get user details") from e
