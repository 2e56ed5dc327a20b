"""
Billing calculator.

Answers period queries by combining the snapshot store (historical
boundaries) with the usage source (the live end of the current period)
and handing both datasets to the delta engine.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from modules.snapshots.codec import decode_payload
from modules.snapshots.interfaces import ISnapshotStore
from modules.snapshots.models import Snapshot
from modules.usage.interfaces import IUsageSource
from modules.usage.models import UserUsageRecord

from .delta import compute_delta
from .exceptions import PeriodNotFoundError, UserNotInPeriodError
from .models import (
    DeltaResult,
    Period,
    PeriodSummary,
    PeriodTotals,
    UserDetail,
    UserDetailRaw,
)
from .periods import derive_periods, find_period

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BillingCalculator:
    """
    Period and cost-share queries over the snapshot log.

    Holds no state between calls. Every query lists the snapshots once
    and resolves the period and its boundary payloads from that single
    listing, so a snapshot appended mid-request cannot mix two views.
    """

    def __init__(
        self,
        snapshot_store: ISnapshotStore,
        usage_source: IUsageSource,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the calculator.

        Args:
            snapshot_store: Source of historical period boundaries
            usage_source: Live usage for the open end of the current period
            clock: Optional source of "now" used to close the current period
        """
        self._store = snapshot_store
        self._usage = usage_source
        self._clock = clock or _utc_now

    async def get_periods(self) -> list[Period]:
        """List all billing periods in index order."""
        return derive_periods(self._store.list_snapshots())

    async def get_period_summary(
        self,
        period_index: int,
        self_id: Optional[str] = None,
    ) -> PeriodSummary:
        """Compute the ranking for one period."""
        period, result = await self._compute(period_index, self_id)
        return PeriodSummary(
            period=period,
            totals=PeriodTotals(
                total_cost=result.total_cost,
                user_count=sum(1 for entry in result.ranking if entry.cost > 0),
            ),
            ranking=result.ranking,
        )

    async def get_user_detail(self, period_index: int, self_id: str) -> UserDetail:
        """Return the caller's own entry of a period."""
        _, result = await self._compute(period_index, self_id)
        me = result.me
        if me is None:
            raise UserNotInPeriodError(self_id, period_index)

        return UserDetail(
            id=me.id,
            name=me.name,
            start_cost=me.raw_start.totals.cost if me.raw_start else 0.0,
            end_cost=me.raw_end.totals.cost if me.raw_end else 0.0,
            delta_cost=me.cost,
            raw=UserDetailRaw(start=me.raw_start, end=me.raw_end),
        )

    async def _compute(
        self,
        period_index: int,
        self_id: Optional[str],
    ) -> tuple[Period, DeltaResult]:
        """Resolve a period and run the delta engine over its boundaries."""
        snapshots = self._store.list_snapshots()
        period = find_period(derive_periods(snapshots), period_index)
        if period is None:
            raise PeriodNotFoundError(period_index)

        by_id = {snapshot.id: snapshot for snapshot in snapshots}
        start_data = self._load_records(by_id, period.start_snapshot_id)
        if period.end_snapshot_id is None:
            # Open period: ends now
            end_data = await self._usage.get_current_usage()
        else:
            end_data = self._load_records(by_id, period.end_snapshot_id)

        result = compute_delta(start_data, end_data, self_id)
        logger.debug(
            f"Period {period.index}: {len(result.ranking)} users, "
            f"total cost {result.total_cost}"
        )
        return period.model_copy(update={"end_at": period.end_at or self._clock()}), result

    def _load_records(
        self,
        snapshots_by_id: dict[int, Snapshot],
        snapshot_id: Optional[int],
    ) -> list[UserUsageRecord]:
        if snapshot_id is None:
            return []
        snapshot = snapshots_by_id[snapshot_id]
        return decode_payload(snapshot.raw_json, snapshot.id)
