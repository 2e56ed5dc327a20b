"""
Period delta computation.

Usage records are cumulative, so a user's cost for a period is the
difference between the record at the period's end and the one at its
start. The rules:

- a user missing at the start started from zero (new key);
- a user missing at the end is left out entirely (deleted key);
- every difference is clamped to >= 0, which absorbs counter resets
  and non-finite upstream values;
- costs are rounded to 6 decimals before they are summed.
"""

import math
from typing import Any, Optional, Sequence

from modules.usage.models import UsageTotals, UserUsageRecord
from .models import DeltaResult, UserRanking

COST_PRECISION = 6
DEFAULT_USER_NAME = "User"

_ZERO = UsageTotals()


def _clamp(delta: float) -> float:
    if not math.isfinite(delta) or delta < 0:
        return 0.0
    return delta


def index_by_user(records: Optional[Sequence[UserUsageRecord]]) -> dict[str, UserUsageRecord]:
    """Map records by user ID; a later duplicate replaces an earlier one."""
    return {record.id: record for record in records or []}


def _redact(record: Optional[UserUsageRecord]) -> Optional[UserUsageRecord]:
    if record is None:
        return None
    return record.model_copy(update={"id": ""})


def compute_delta(
    start_records: Optional[Sequence[UserUsageRecord]],
    end_records: Optional[Sequence[UserUsageRecord]],
    self_id: Optional[str] = None,
) -> DeltaResult:
    """
    Rank users by the cost they incurred between two datasets.

    Args:
        start_records: Cumulative usage at the period start ([] for period 0)
        end_records: Cumulative usage at the period end
        self_id: Caller's user ID. Every other entry has its ID blanked,
            including inside the raw records.

    Returns:
        DeltaResult with the ranking sorted by descending cost (ties by
        user ID) and shares that sum to 1 when the total is positive
    """
    start = index_by_user(start_records)
    end = index_by_user(end_records)

    rows: list[dict[str, Any]] = []
    for user_id in dict.fromkeys([*start, *end]):
        end_record = end.get(user_id)
        if end_record is None:
            continue

        start_record = start.get(user_id)
        start_totals = start_record.totals if start_record else _ZERO
        end_totals = end_record.totals
        is_me = bool(self_id) and user_id == self_id

        rows.append({
            "user_id": user_id,
            "id": user_id if is_me else "",
            "name": end_record.name or DEFAULT_USER_NAME,
            "cost": round(_clamp(end_totals.cost - start_totals.cost), COST_PRECISION),
            "is_me": is_me,
            "raw_start": start_record if is_me else _redact(start_record),
            "raw_end": end_record if is_me else _redact(end_record),
            "period_tokens": max(0, end_totals.tokens - start_totals.tokens),
            "period_requests": max(0, end_totals.requests - start_totals.requests),
        })

    total_cost = round(sum(row["cost"] for row in rows), COST_PRECISION)

    ranking = [
        UserRanking(
            **row,
            share=row["cost"] / total_cost if total_cost > 0 else 0.0,
        )
        for row in rows
    ]
    ranking.sort(key=lambda entry: (-entry.cost, entry.user_id))

    me = next((entry for entry in ranking if entry.is_me), None)
    return DeltaResult(ranking=ranking, total_cost=total_cost, me=me)
