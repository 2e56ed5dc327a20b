"""
Billing module data models.

These models define billing periods and the per-period results the
billing module exposes to the API layer. Nothing here is persisted;
everything is derived from snapshots and live usage on each request.
Fields go over the wire in camelCase (see ApiModel).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from modules.usage.models import UserUsageRecord
from shared.models import ApiModel


class Period(ApiModel):
    """
    A billing period between two snapshots.

    Period 0 starts at the beginning of time. The current period has no
    end snapshot and ``end_at`` is None until a summary materializes it.
    """

    index: int = Field(..., ge=0, description="Position in the period sequence")
    start_snapshot_id: Optional[int] = Field(None, description="Snapshot opening the period")
    end_snapshot_id: Optional[int] = Field(None, description="Snapshot closing the period")
    start_at: Optional[datetime] = Field(None, description="Period start (None = beginning)")
    end_at: Optional[datetime] = Field(None, description="Period end (None = now)")
    is_current: bool = Field(..., description="Whether this is the open period")

    model_config = ConfigDict(frozen=True)


class UserRanking(ApiModel):
    """
    One user's share of a period's cost.

    ``id`` is blank for everyone except the caller. The real id is kept
    in ``user_id`` for ordering and lookups but never serialized.
    """

    user_id: str = Field(default="", exclude=True, repr=False)
    id: str = Field(default="", description="User ID (only for the caller)")
    name: str = Field(..., description="Display name")
    cost: float = Field(..., ge=0, description="Cost incurred in the period")
    share: float = Field(..., ge=0, description="Fraction of the period total")
    is_me: bool = Field(default=False, description="Whether this is the caller")
    raw_start: Optional[UserUsageRecord] = Field(None, description="Cumulative usage at period start")
    raw_end: Optional[UserUsageRecord] = Field(None, description="Cumulative usage at period end")
    period_tokens: int = Field(default=0, ge=0, description="Tokens used in the period")
    period_requests: int = Field(default=0, ge=0, description="Requests made in the period")


class DeltaResult(BaseModel):
    """Output of the delta engine."""

    ranking: list[UserRanking] = Field(default_factory=list)
    total_cost: float = Field(default=0.0, ge=0)
    me: Optional[UserRanking] = Field(None, description="The caller's entry, if ranked")


class PeriodTotals(ApiModel):
    """Aggregates shown above a ranking."""

    total_cost: float = Field(..., description="Total cost of the period")
    user_count: int = Field(..., description="Users with a non-zero cost")


class PeriodSummary(ApiModel):
    """
    Cost breakdown of one period.

    ``period.end_at`` is always set; for the current period it is the
    time the summary was computed.
    """

    period: Period
    totals: PeriodTotals
    ranking: list[UserRanking]


class UserDetailRaw(ApiModel):
    """Raw usage records bounding the caller's period."""

    start: Optional[UserUsageRecord] = None
    end: Optional[UserUsageRecord] = None


class UserDetail(ApiModel):
    """The caller's own cost for a period."""

    id: str = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    start_cost: float = Field(..., description="Cumulative cost at period start")
    end_cost: float = Field(..., description="Cumulative cost at period end")
    delta_cost: float = Field(..., description="Cost incurred in the period")
    raw: UserDetailRaw = Field(default_factory=UserDetailRaw)


class PeriodListResponse(ApiModel):
    """API response for the period list."""

    periods: list[Period] = Field(..., description="Periods in index order")
