"""
Snapshot payload encoding.

Older snapshots were written with the usage list serialized twice, so the
stored text is a JSON string whose content is the JSON array. Reads unwrap
that extra layer; writes always produce a single encoding.
"""

import json
from typing import Any, Optional, Union

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from modules.usage.models import UserUsageRecord
from .exceptions import MalformedSnapshotPayloadError

_records_adapter = TypeAdapter(list[UserUsageRecord])


def encode_payload(records: list[UserUsageRecord]) -> str:
    """Serialize usage records with their upstream field names."""
    return _records_adapter.dump_json(records, by_alias=True).decode("utf-8")


def decode_payload(
    raw: Union[str, list[Any]],
    snapshot_id: Optional[int] = None,
) -> list[UserUsageRecord]:
    """
    Decode a stored payload into usage records.

    Args:
        raw: Stored text, or an already-decoded list (JSON column)
        snapshot_id: Included in the error for context

    Returns:
        Validated usage records

    Raises:
        MalformedSnapshotPayloadError: On JSON or schema failure
    """
    data: Any = raw
    try:
        if isinstance(data, str) and data.startswith('"'):
            data = json.loads(data)
        if isinstance(data, str):
            data = json.loads(data)
    except json.JSONDecodeError as e:
        raise MalformedSnapshotPayloadError(str(e), snapshot_id) from e

    if not isinstance(data, list):
        raise MalformedSnapshotPayloadError(
            f"expected a JSON array, got {type(data).__name__}",
            snapshot_id,
        )

    try:
        return _records_adapter.validate_python(data)
    except PydanticValidationError as e:
        raise MalformedSnapshotPayloadError(
            f"invalid usage record: {e.error_count()} validation error(s)",
            snapshot_id,
        ) from e
