"""
Billing module interface.

The API layer depends on IBillingCalculator, not the concrete implementation.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import Period, PeriodSummary, UserDetail


@runtime_checkable
class IBillingCalculator(Protocol):
    """
    Interface for period and cost-share queries.

    None of the operations mutate state. Each call re-reads the snapshot
    store, so results reflect the latest period close.
    """

    async def get_periods(self) -> list[Period]:
        """
        List all billing periods.

        Returns:
            Periods in index order; the last one is the current period
        """
        ...

    async def get_period_summary(
        self,
        period_index: int,
        self_id: Optional[str] = None,
    ) -> PeriodSummary:
        """
        Compute the cost ranking of one period.

        Args:
            period_index: Index from get_periods()
            self_id: Caller's user ID; only this entry keeps its ID

        Returns:
            PeriodSummary with a concrete end time

        Raises:
            PeriodNotFoundError: If the index does not exist
            MalformedSnapshotPayloadError: If a bounding snapshot is corrupt
            UpstreamUnavailableError: If live usage is needed and unavailable
        """
        ...

    async def get_user_detail(self, period_index: int, self_id: str) -> UserDetail:
        """
        Get the caller's own cost for a period.

        Raises:
            PeriodNotFoundError: If the index does not exist
            UserNotInPeriodError: If the caller is not in the period's ranking
        """
        ...
