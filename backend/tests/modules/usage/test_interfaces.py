"""Tests for usage module interfaces."""

import pytest

from modules.usage.interfaces import IUsageSource
from modules.usage.sources import StaticUsageSource
from modules.usage.exceptions import InvalidApiKeyError
from tests.conftest import make_record


class TestStaticUsageSource:
    def test_implements_protocol(self):
        """StaticUsageSource should satisfy IUsageSource."""
        assert isinstance(StaticUsageSource(), IUsageSource)

    @pytest.mark.asyncio
    async def test_accepts_dicts_and_models(self):
        """Should validate raw upstream dicts."""
        source = StaticUsageSource([make_record("u1", cost=2)])

        records = await source.get_current_usage()

        assert records[0].totals.cost == 2

    @pytest.mark.asyncio
    async def test_set_records_replaces_data(self):
        """Should serve the latest dataset."""
        source = StaticUsageSource([make_record("u1", cost=1)])
        source.set_records([make_record("u1", cost=5), make_record("u2")])

        records = await source.get_current_usage()

        assert [r.id for r in records] == ["u1", "u2"]
        assert records[0].totals.cost == 5

    @pytest.mark.asyncio
    async def test_returns_copy(self):
        """Callers should not be able to mutate the dataset."""
        source = StaticUsageSource([make_record("u1")])
        (await source.get_current_usage()).clear()
        assert len(await source.get_current_usage()) == 1

    @pytest.mark.asyncio
    async def test_get_key_id(self, usage_source):
        """Should resolve known keys."""
        assert await usage_source.get_key_id("key-bob") == "u2"

    @pytest.mark.asyncio
    async def test_unknown_key(self, usage_source):
        """Should reject unknown keys."""
        with pytest.raises(InvalidApiKeyError):
            await usage_source.get_key_id("nope")
