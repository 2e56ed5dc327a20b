"""
Snapshot store implementations.

Provides an in-memory store (for testing and local development) and a
Supabase-backed store (for production) behind the same interface.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from shared.repository import BaseRepository
from .models import Snapshot, DEFAULT_SNAPSHOT_TIMEZONE


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemorySnapshotStore:
    """
    Snapshot store with in-memory storage.

    Creation timestamps are forced to be strictly increasing so the
    insertion order and the time order always agree.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize the store.

        Args:
            clock: Optional source of "now" (UTC). Tests inject a fixed clock.
        """
        self._snapshots: list[Snapshot] = []
        self._clock = clock or _utc_now

    def append(
        self,
        raw_json: str,
        timezone_name: str = DEFAULT_SNAPSHOT_TIMEZONE,
    ) -> int:
        created_at = self._clock()
        if self._snapshots and created_at <= self._snapshots[-1].created_at:
            created_at = self._snapshots[-1].created_at + timedelta(microseconds=1)

        snapshot = Snapshot(
            id=len(self._snapshots) + 1,
            created_at=created_at,
            timezone=timezone_name,
            raw_json=raw_json,
        )
        self._snapshots.append(snapshot)
        return snapshot.id

    def list_snapshots(self) -> list[Snapshot]:
        return list(self._snapshots)

    def get_by_id(self, snapshot_id: int) -> Optional[Snapshot]:
        for snapshot in self._snapshots:
            if snapshot.id == snapshot_id:
                return snapshot
        return None

    def get_latest(self) -> Optional[Snapshot]:
        return self._snapshots[-1] if self._snapshots else None


class SupabaseSnapshotStore(BaseRepository[Snapshot]):
    """
    Snapshot store backed by the ``billing_snapshots`` Supabase table.

    The table is append-only; nothing in the application updates or
    deletes rows.
    """

    TABLE = "billing_snapshots"

    def append(
        self,
        raw_json: str,
        timezone_name: str = DEFAULT_SNAPSHOT_TIMEZONE,
    ) -> int:
        """
        Insert a new snapshot row.

        Returns:
            The generated snapshot ID.
        """
        result = self._db.table(self.TABLE).insert({
            "created_at": _utc_now().isoformat(),
            "timezone": timezone_name,
            "raw_json": raw_json,
        }).execute()
        return int(result.data[0]["id"])

    def list_snapshots(self) -> list[Snapshot]:
        """List all snapshots, oldest first."""
        result = (
            self._db.table(self.TABLE)
            .select("id, created_at, timezone, raw_json")
            .order("created_at")
            .order("id")
            .execute()
        )
        return [self._map_to_snapshot(row) for row in result.data]

    def get_by_id(self, snapshot_id: int) -> Optional[Snapshot]:
        result = (
            self._db.table(self.TABLE)
            .select("id, created_at, timezone, raw_json")
            .eq("id", snapshot_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_snapshot(result.data[0])

    def get_latest(self) -> Optional[Snapshot]:
        result = (
            self._db.table(self.TABLE)
            .select("id, created_at, timezone, raw_json")
            .order("created_at", desc=True)
            .order("id", desc=True)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_snapshot(result.data[0])

    def _map_to_snapshot(self, row: dict[str, Any]) -> Snapshot:
        """Map a database row to a Snapshot."""
        raw_json = row["raw_json"]
        if not isinstance(raw_json, str):
            # jsonb column: re-serialize so the model stays opaque text
            raw_json = json.dumps(raw_json)

        created_at = row["created_at"]
        if isinstance(created_at, str):
            created_at = self._parse_timestamp(created_at)

        return Snapshot(
            id=int(row["id"]),
            created_at=created_at,
            timezone=row.get("timezone") or DEFAULT_SNAPSHOT_TIMEZONE,
            raw_json=raw_json,
        )
