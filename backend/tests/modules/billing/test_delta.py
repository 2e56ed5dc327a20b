"""Tests for the period delta engine."""

import math

import pytest

from modules.billing.delta import compute_delta, index_by_user
from modules.usage.models import UserUsageRecord
from tests.conftest import make_record


def records(*raw: dict) -> list[UserUsageRecord]:
    return [UserUsageRecord.model_validate(r) for r in raw]


class TestComputeDelta:
    def test_basic_example(self):
        """Should rank users by period cost with proportional shares."""
        start = records(make_record("u1", cost=10))
        end = records(make_record("u1", cost=15), make_record("u2", cost=3))

        result = compute_delta(start, end)

        assert result.total_cost == 8
        assert [(r.name, r.cost) for r in result.ranking] == [("u1", 5), ("u2", 3)]
        assert result.ranking[0].share == pytest.approx(0.625)
        assert result.ranking[1].share == pytest.approx(0.375)
        assert all(r.id == "" for r in result.ranking)
        assert result.me is None

    def test_deleted_user_excluded(self):
        """A user missing from the end data should not be ranked."""
        start = records(make_record("u1", cost=10))

        result = compute_delta(start, [])

        assert result.ranking == []
        assert result.total_cost == 0

    def test_deleted_user_excluded_among_others(self):
        """Removing one user should not affect the others."""
        start = records(make_record("u1", cost=10), make_record("u2", cost=4))
        end = records(make_record("u2", cost=6))

        result = compute_delta(start, end)

        assert [r.user_id for r in result.ranking] == ["u2"]
        assert result.total_cost == 2

    def test_counter_reset_clamped_to_zero(self):
        """A decreasing counter should produce a zero, not negative, delta."""
        start = records(make_record("u1", cost=50, tokens=1000, requests=10))
        end = records(make_record("u1", cost=40, tokens=500, requests=5))

        entry = compute_delta(start, end).ranking[0]

        assert entry.cost == 0
        assert entry.period_tokens == 0
        assert entry.period_requests == 0

    def test_new_user_starts_from_zero(self):
        """A user only in the end data should be charged their full cost."""
        end = records(make_record("u9", cost=7.25, tokens=300, requests=4))

        entry = compute_delta([], end).ranking[0]

        assert entry.cost == 7.25
        assert entry.period_tokens == 300
        assert entry.period_requests == 4
        assert entry.raw_start is None

    def test_token_and_request_deltas(self):
        """Should report period tokens and requests."""
        start = records(make_record("u1", cost=1, tokens=100, requests=2))
        end = records(make_record("u1", cost=2, tokens=350, requests=9))

        entry = compute_delta(start, end).ranking[0]

        assert entry.period_tokens == 250
        assert entry.period_requests == 7

    def test_self_user_keeps_id(self):
        """Only the caller's entry should carry an ID."""
        end = records(make_record("u1", cost=2), make_record("u2", cost=1))

        result = compute_delta([], end, self_id="u2")

        by_name = {r.name: r for r in result.ranking}
        assert by_name["u2"].id == "u2"
        assert by_name["u2"].is_me is True
        assert by_name["u1"].id == ""
        assert by_name["u1"].is_me is False
        assert result.me is by_name["u2"]

    def test_other_users_raw_records_redacted(self):
        """Raw records of other users should not leak their IDs."""
        start = records(make_record("u1", cost=1), make_record("u2", cost=1))
        end = records(make_record("u1", cost=2), make_record("u2", cost=2))

        result = compute_delta(start, end, self_id="u1")

        me = result.me
        other = next(r for r in result.ranking if not r.is_me)
        assert me.raw_start.id == "u1"
        assert me.raw_end.id == "u1"
        assert other.raw_start.id == ""
        assert other.raw_end.id == ""
        assert other.raw_end.totals.cost == 2

    def test_empty_self_id_matches_nobody(self):
        """An empty self ID should not mark any entry."""
        end = records(make_record("", cost=1))

        result = compute_delta([], end, self_id="")

        assert result.me is None
        assert result.ranking[0].is_me is False

    def test_zero_total_gives_zero_shares(self):
        """All shares should be 0 when nothing was spent."""
        start = records(make_record("u1", cost=5), make_record("u2", cost=5))
        end = records(make_record("u1", cost=5), make_record("u2", cost=5))

        result = compute_delta(start, end)

        assert result.total_cost == 0
        assert [r.share for r in result.ranking] == [0, 0]

    def test_costs_sum_to_total_and_shares_to_one(self):
        """Costs should add up to the total and shares to 1."""
        start = records(
            make_record("a", cost=0.1),
            make_record("b", cost=1.333333),
            make_record("c", cost=2.5),
        )
        end = records(
            make_record("a", cost=0.3),
            make_record("b", cost=2.0),
            make_record("c", cost=2.5000001),
            make_record("d", cost=0.7777777),
        )

        result = compute_delta(start, end)

        assert sum(r.cost for r in result.ranking) == pytest.approx(result.total_cost, abs=1e-6)
        assert sum(r.share for r in result.ranking) == pytest.approx(1.0)
        assert all(r.cost >= 0 for r in result.ranking)

    def test_cost_rounded_to_six_decimals(self):
        """Floating point noise should be rounded away."""
        start = records(make_record("u1", cost=0.1))
        end = records(make_record("u1", cost=0.3))

        result = compute_delta(start, end)

        assert result.ranking[0].cost == 0.2
        assert result.total_cost == 0.2

    def test_sorted_by_descending_cost(self):
        """Ranking should be ordered from most to least expensive."""
        end = records(
            make_record("u1", cost=1),
            make_record("u2", cost=9),
            make_record("u3", cost=4),
        )

        result = compute_delta([], end)

        assert [r.user_id for r in result.ranking] == ["u2", "u3", "u1"]

    def test_ties_broken_by_user_id(self):
        """Equal costs should be ordered by user ID."""
        end = records(
            make_record("zed", cost=3),
            make_record("amy", cost=3),
            make_record("kim", cost=3),
        )

        result = compute_delta([], end)

        assert [r.user_id for r in result.ranking] == ["amy", "kim", "zed"]

    @pytest.mark.parametrize("bad_cost", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_cost_clamped(self, bad_cost):
        """Non-finite deltas should count as zero."""
        start = records(make_record("u1", cost=1))
        end = records(make_record("u1", cost=bad_cost), make_record("u2", cost=2))

        result = compute_delta(start, end)

        entry = next(r for r in result.ranking if r.user_id == "u1")
        assert entry.cost == 0
        assert result.total_cost == 2
        assert math.isfinite(result.total_cost)

    def test_negative_raw_cost_kept_in_raw_record(self):
        """Clamping applies to the delta, not to the raw field."""
        end = records(make_record("u1", cost=-5))

        entry = compute_delta([], end, self_id="u1").ranking[0]

        assert entry.cost == 0
        assert entry.raw_end.totals.cost == -5

    def test_duplicate_ids_last_wins(self):
        """A duplicated user ID should use the later record."""
        end = records(make_record("u1", cost=1), make_record("u1", cost=4))

        result = compute_delta([], end)

        assert len(result.ranking) == 1
        assert result.ranking[0].cost == 4

    def test_empty_name_falls_back(self):
        """A user without a name should be shown as 'User'."""
        end = records(make_record("u1", cost=1, name=""))

        assert compute_delta([], end).ranking[0].name == "User"

    def test_none_inputs(self):
        """Missing datasets should be treated as empty."""
        result = compute_delta(None, None)

        assert result.ranking == []
        assert result.total_cost == 0


class TestIndexByUser:
    def test_indexes_by_id(self):
        """Should map records by ID."""
        indexed = index_by_user(records(make_record("a"), make_record("b")))
        assert set(indexed) == {"a", "b"}

    def test_none(self):
        """Should accept None."""
        assert index_by_user(None) == {}
