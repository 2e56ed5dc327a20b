"""
Snapshot module exceptions.
"""

from typing import Optional

from shared.exceptions import CostshareError, ValidationError


class SnapshotError(CostshareError):
    """Base exception for snapshot-related errors."""

    pass


class MalformedSnapshotPayloadError(ValidationError):
    """
    Raised when a stored snapshot payload cannot be decoded.

    No partial recovery is attempted; a corrupt snapshot makes every
    period that touches it unreadable.
    """

    def __init__(self, reason: str, snapshot_id: Optional[int] = None):
        message = "Malformed snapshot payload"
        if snapshot_id is not None:
            message += f" (snapshot {snapshot_id})"
        super().__init__(
            f"{message}: {reason}",
            code="MALFORMED_SNAPSHOT_PAYLOAD",
            details={"reason": reason},
        )
        if snapshot_id is not None:
            self.details["snapshot_id"] = snapshot_id
