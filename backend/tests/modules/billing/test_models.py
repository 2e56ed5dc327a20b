"""Tests for billing module models."""

import pytest
from pydantic import ValidationError

from modules.billing.models import (
    Period,
    PeriodSummary,
    PeriodTotals,
    UserDetail,
    UserRanking,
)
from modules.usage.models import UserUsageRecord
from tests.conftest import T0, make_record


class TestPeriod:
    def test_current_period_defaults(self):
        """Boundaries should default to None."""
        period = Period(index=0, is_current=True)
        assert period.start_snapshot_id is None
        assert period.end_snapshot_id is None
        assert period.start_at is None
        assert period.end_at is None

    def test_negative_index_rejected(self):
        """Period indices start at 0."""
        with pytest.raises(ValidationError):
            Period(index=-1, is_current=False)

    def test_frozen(self):
        """Periods should be immutable."""
        period = Period(index=0, is_current=True)
        with pytest.raises(ValidationError):
            period.index = 1

    def test_serialized_timestamps(self):
        """Timestamps should serialize as ISO-8601."""
        period = Period(index=1, start_snapshot_id=1, start_at=T0, is_current=True)
        data = period.model_dump(mode="json", by_alias=True)
        assert data["startAt"].startswith("2026-01-01T00:00:00")
        assert data["endAt"] is None
        assert data["isCurrent"] is True


class TestUserRanking:
    def test_user_id_not_serialized(self):
        """The internal user ID should never be exposed."""
        entry = UserRanking(user_id="u2", id="", name="Bob", cost=1.0, share=0.5)

        data = entry.model_dump()

        assert "user_id" not in data
        assert "userId" not in entry.model_dump(by_alias=True)
        assert data["id"] == ""
        assert "u2" not in repr(entry)

    def test_negative_cost_rejected(self):
        """Costs are clamped before a ranking is built."""
        with pytest.raises(ValidationError):
            UserRanking(name="Bob", cost=-1.0, share=0.0)

    def test_raw_records_use_upstream_names(self):
        """Raw records should serialize with upstream field names."""
        raw = UserUsageRecord.model_validate(make_record("u1", cost=2, tokens=10))
        entry = UserRanking(id="u1", name="u1", cost=2, share=1, raw_end=raw)

        data = entry.model_dump(mode="json", by_alias=True)

        assert data["rawEnd"]["usage"]["total"]["inputTokens"] == 5
        assert data["rawStart"] is None
        assert data["isMe"] is False

    def test_accepts_wire_names(self):
        """Should validate from camelCase keys as well as field names."""
        entry = UserRanking.model_validate(
            {"name": "Bob", "cost": 1, "share": 1, "isMe": True, "periodTokens": 4}
        )
        assert entry.is_me is True
        assert entry.period_tokens == 4


class TestPeriodSummary:
    def test_summary(self):
        """Should combine period, totals and ranking."""
        summary = PeriodSummary(
            period=Period(index=0, end_at=T0, is_current=True),
            totals=PeriodTotals(total_cost=3.0, user_count=1),
            ranking=[UserRanking(name="A", cost=3.0, share=1.0)],
        )
        assert summary.totals.user_count == 1
        assert summary.ranking[0].share == 1.0

    def test_totals_alias(self):
        """Totals should serialize as totalCost and userCount."""
        totals = PeriodTotals(total_cost=3.0, user_count=1)
        assert totals.model_dump(by_alias=True) == {"totalCost": 3.0, "userCount": 1}


class TestUserDetail:
    def test_raw_defaults_to_empty(self):
        """Raw boundary records should default to None."""
        detail = UserDetail(
            id="u1",
            name="Alice",
            start_cost=0.0,
            end_cost=1.0,
            delta_cost=1.0,
        )
        assert detail.raw.start is None
        assert detail.raw.end is None
