"""
Billing period derivation.

N snapshots split time into N + 1 periods:

    period 0      beginning of time -> snapshot 1
    period i      snapshot i        -> snapshot i + 1
    period N      snapshot N        -> now (current)

With no snapshots there is a single current period covering all time.
"""

from typing import Optional, Sequence

from modules.snapshots.models import Snapshot
from .models import Period


def derive_periods(snapshots: Sequence[Snapshot]) -> list[Period]:
    """
    Build the period sequence from snapshots in ascending creation order.

    Returns:
        Periods ordered by index; exactly one is current
    """
    if not snapshots:
        return [
            Period(
                index=0,
                start_snapshot_id=None,
                end_snapshot_id=None,
                start_at=None,
                end_at=None,
                is_current=True,
            )
        ]

    first = snapshots[0]
    periods = [
        Period(
            index=0,
            start_snapshot_id=None,
            end_snapshot_id=first.id,
            start_at=None,
            end_at=first.created_at,
            is_current=False,
        )
    ]

    for i in range(1, len(snapshots)):
        start, end = snapshots[i - 1], snapshots[i]
        periods.append(
            Period(
                index=i,
                start_snapshot_id=start.id,
                end_snapshot_id=end.id,
                start_at=start.created_at,
                end_at=end.created_at,
                is_current=False,
            )
        )

    last = snapshots[-1]
    periods.append(
        Period(
            index=len(snapshots),
            start_snapshot_id=last.id,
            end_snapshot_id=None,
            start_at=last.created_at,
            end_at=None,
            is_current=True,
        )
    )
    return periods


def find_period(periods: Sequence[Period], index: int) -> Optional[Period]:
    for period in periods:
        if period.index == index:
            return period
    return None
