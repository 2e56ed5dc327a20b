"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest

from api.dependencies import reset_container
from shared.config import get_settings
from modules.snapshots.store import InMemorySnapshotStore
from modules.usage.sources import StaticUsageSource


# Test API keys and the user ids they resolve to
TEST_API_KEYS = {
    "key-alice": "u1",
    "key-bob": "u2",
    "key-carol": "u3",
}

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_record(
    user_id: str,
    cost: float = 0.0,
    tokens: int = 0,
    requests: int = 0,
    name: Optional[str] = None,
    **extra: Any,
) -> dict[str, Any]:
    """
    Create an upstream-format usage record.

    Args:
        user_id: Key ID
        cost: Cumulative cost
        tokens: Cumulative tokens
        requests: Cumulative requests
        name: Display name (defaults to the ID)
        extra: Additional top-level fields (e.g. tags)

    Returns:
        Dict in the upstream wire format
    """
    return {
        "id": user_id,
        "name": name if name is not None else user_id,
        "usage": {
            "total": {
                "cost": cost,
                "tokens": tokens,
                "inputTokens": tokens // 2,
                "outputTokens": tokens - tokens // 2,
                "cacheCreateTokens": 0,
                "cacheReadTokens": 0,
                "requests": requests,
                "formattedCost": f"${cost:.2f}",
            }
        },
        **extra,
    }


def dump_records(*records: dict[str, Any]) -> str:
    """Serialize records the way a snapshot stores them."""
    return json.dumps(list(records))


class StepClock:
    """Clock that advances by a fixed step on every call."""

    def __init__(self, start: datetime = T0, step: timedelta = timedelta(days=30)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.now
        self.now = self.now + self.step
        return value


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container and settings cache around each test."""
    reset_container()
    get_settings.cache_clear()
    yield
    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def clock() -> StepClock:
    """Clock for the snapshot store (30 days per snapshot)."""
    return StepClock()


@pytest.fixture
def snapshot_store(clock) -> InMemorySnapshotStore:
    """Empty in-memory snapshot store."""
    return InMemorySnapshotStore(clock=clock)


@pytest.fixture
def usage_source() -> StaticUsageSource:
    """Static usage source with no live data and the test API keys."""
    return StaticUsageSource([], key_ids=TEST_API_KEYS)
