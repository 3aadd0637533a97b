"""Tests for the channel activation cache."""

import asyncio
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from activation import ChannelActivationCache


class TestChannelActivationCache:
    @pytest.mark.asyncio
    async def test_active_when_lookup_returns_config(self):
        lookup = AsyncMock(return_value={"enabled_by": "mod"})
        cache = ChannelActivationCache(lookup)

        assert await cache.is_active(channel_id=20, guild_id=10) is True
        lookup.assert_awaited_once_with(10, 20)

    @pytest.mark.asyncio
    async def test_inactive_when_lookup_returns_none(self):
        cache = ChannelActivationCache(AsyncMock(return_value=None))
        assert await cache.is_active(20, 10) is False

    @pytest.mark.asyncio
    async def test_second_call_uses_cache(self):
        lookup = AsyncMock(return_value={})
        cache = ChannelActivationCache(lookup)

        assert await cache.is_active(20, 10) is True
        assert await cache.is_active(20, 10) is True
        assert lookup.await_count == 1

    @pytest.mark.asyncio
    async def test_disabled_answers_are_cached_too(self):
        lookup = AsyncMock(return_value=None)
        cache = ChannelActivationCache(lookup)

        await cache.is_active(20, 10)
        await cache.is_active(20, 10)
        assert lookup.await_count == 1

    @pytest.mark.asyncio
    async def test_keys_include_guild(self):
        lookup = AsyncMock(return_value={})
        cache = ChannelActivationCache(lookup)

        await cache.is_active(20, 10)
        await cache.is_active(20, 11)
        assert lookup.await_count == 2

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self):
        lookup = AsyncMock(return_value={})
        cache = ChannelActivationCache(lookup, ttl=0.05)

        await cache.is_active(20, 10)
        await asyncio.sleep(0.1)
        assert len(cache) == 0

        await cache.is_active(20, 10)
        assert lookup.await_count == 2

    @pytest.mark.asyncio
    async def test_ttl_is_not_extended_by_reads(self):
        lookup = AsyncMock(return_value={})
        cache = ChannelActivationCache(lookup, ttl=0.1)

        await cache.is_active(20, 10)
        for _ in range(3):
            await asyncio.sleep(0.04)
            await cache.is_active(20, 10)
        # 0.12s after the store; reads did not push expiry out
        await cache.is_active(20, 10)
        assert lookup.await_count == 2

    @pytest.mark.asyncio
    async def test_lookup_failure_fails_closed_and_is_not_cached(self):
        lookup = AsyncMock(side_effect=[RuntimeError("db down"), {"enabled_by": "mod"}])
        cache = ChannelActivationCache(lookup)

        assert await cache.is_active(20, 10) is False
        assert len(cache) == 0
        assert await cache.is_active(20, 10) is True

    @pytest.mark.asyncio
    async def test_invalidate_forces_new_lookup(self):
        lookup = AsyncMock(side_effect=[None, {}])
        cache = ChannelActivationCache(lookup)

        assert await cache.is_active(20, 10) is False
        cache.invalidate(10, 20)
        assert await cache.is_active(20, 10) is True
