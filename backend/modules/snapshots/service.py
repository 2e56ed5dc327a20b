"""
Snapshot service.

Closing a billing period means capturing everyone's live cumulative usage
into a new snapshot. The snapshot ends the current period and starts the
next one; period deltas are computed later by the billing module.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Optional

from shared.config import get_settings
from modules.usage.interfaces import IUsageSource
from .codec import encode_payload
from .interfaces import ISnapshotStore
from .models import SnapshotCapture

logger = logging.getLogger(__name__)


class SnapshotService:
    """Captures live usage into the snapshot store."""

    def __init__(self, snapshot_store: ISnapshotStore, usage_source: IUsageSource):
        self._store = snapshot_store
        self._usage = usage_source

    async def close_period(self, timezone_name: Optional[str] = None) -> SnapshotCapture:
        """
        Snapshot the live usage of all users.

        Nothing is written if the usage fetch fails.

        Args:
            timezone_name: Timezone label to store. Defaults to
                the SNAPSHOT_TIMEZONE setting.

        Returns:
            Summary of the new snapshot
        """
        timezone_name = timezone_name or get_settings().snapshot_timezone

        records = await self._usage.get_current_usage()
        snapshot_id = self._store.append(encode_payload(records), timezone_name)
        snapshot = self._store.get_by_id(snapshot_id)

        total_cost = round(
            sum(r.totals.cost for r in records if math.isfinite(r.totals.cost)),
            6,
        )
        logger.info(
            f"Created snapshot {snapshot_id} with {len(records)} users "
            f"(cumulative cost ${total_cost:.2f})"
        )

        return SnapshotCapture(
            snapshot_id=snapshot_id,
            created_at=snapshot.created_at if snapshot else datetime.now(timezone.utc),
            timezone=timezone_name,
            user_count=len(records),
            total_cost=total_cost,
        )
