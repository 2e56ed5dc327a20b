"""
Snapshot module interface.

The billing module reads snapshots through ISnapshotStore only, so the
in-memory and Supabase stores are interchangeable.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import Snapshot


@runtime_checkable
class ISnapshotStore(Protocol):
    """
    Append-only, time-ordered log of usage snapshots.

    Snapshots are immutable once written.
    """

    def append(self, raw_json: str, timezone_name: str = ...) -> int:
        """
        Store a new snapshot stamped with the current time.

        Args:
            raw_json: Serialized usage dataset
            timezone_name: Informational timezone label

        Returns:
            The new snapshot ID
        """
        ...

    def list_snapshots(self) -> list[Snapshot]:
        """
        List all snapshots.

        Returns:
            Snapshots in ascending creation order (ties by ID)
        """
        ...

    def get_by_id(self, snapshot_id: int) -> Optional[Snapshot]:
        """Get a snapshot by ID, or None."""
        ...

    def get_latest(self) -> Optional[Snapshot]:
        """Get the most recently created snapshot, or None."""
        ...
