"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and shared row-mapping helpers.
"""

from datetime import datetime
from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class SnapshotRepository(BaseRepository[Snapshot]):
            def get_by_id(self, snapshot_id: int) -> Optional[Snapshot]:
                result = self._db.table("billing_snapshots").select("*").eq("id", snapshot_id).execute()
                if not result.data:
                    return None
                return self._map_to_snapshot(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _parse_timestamp(value: str) -> datetime:
        """Parse a PostgREST timestamp, accepting a trailing 'Z'."""
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
