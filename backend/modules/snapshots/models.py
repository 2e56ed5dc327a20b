"""
Snapshot module data models.
"""

from datetime import datetime

from pydantic import BaseModel, Field

DEFAULT_SNAPSHOT_TIMEZONE = "Asia/Shanghai"


class Snapshot(BaseModel):
    """
    A persisted copy of every user's cumulative usage at one instant.

    ``raw_json`` is the serialized usage dataset, treated as opaque by the
    store. Use ``modules.snapshots.codec.decode_payload`` to read it.
    """

    id: int = Field(..., description="Snapshot ID, increasing by insertion")
    created_at: datetime = Field(..., description="Creation time (UTC)")
    timezone: str = Field(
        default=DEFAULT_SNAPSHOT_TIMEZONE,
        description="Operator timezone at capture (informational only)",
    )
    raw_json: str = Field(..., description="Serialized list of usage records")

    model_config = {"frozen": True}


class SnapshotCapture(BaseModel):
    """Result of closing a billing period."""

    snapshot_id: int = Field(..., description="ID of the new snapshot")
    created_at: datetime = Field(..., description="Snapshot timestamp")
    timezone: str = Field(..., description="Timezone recorded with the snapshot")
    user_count: int = Field(..., description="Users captured")
    total_cost: float = Field(..., description="Sum of cumulative cost at capture")
