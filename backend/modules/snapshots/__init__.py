"""
Snapshots module.

Append-only log of cumulative usage snapshots. Each snapshot closes one
billing period and opens the next.

Public API:
- ISnapshotStore: Interface for snapshot persistence
- Snapshot / SnapshotCapture: Models
- InMemorySnapshotStore / SupabaseSnapshotStore: Implementations
- SnapshotService: Period close
- encode_payload / decode_payload: Payload codec
"""

from .interfaces import ISnapshotStore
from .models import Snapshot, SnapshotCapture, DEFAULT_SNAPSHOT_TIMEZONE
from .exceptions import SnapshotError, MalformedSnapshotPayloadError
from .codec import encode_payload, decode_payload
from .store import InMemorySnapshotStore, SupabaseSnapshotStore
from .service import SnapshotService

__all__ = [
    # Interface
    "ISnapshotStore",
    # Models
    "Snapshot",
    "SnapshotCapture",
    "DEFAULT_SNAPSHOT_TIMEZONE",
    # Exceptions
    "SnapshotError",
    "MalformedSnapshotPayloadError",
    # Codec
    "encode_payload",
    "decode_payload",
    # Stores
    "InMemorySnapshotStore",
    "SupabaseSnapshotStore",
    # Service
    "SnapshotService",
]
