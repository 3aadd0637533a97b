"""
Shiva - Channel Activation Cache
Memoizes "is AI chat enabled here?" answers for a few minutes.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from constants import ACTIVATION_CACHE_TTL
from prometheus_metrics import metrics_manager
import logger as log

# (guild_id, channel_id) -> channel config or None
ActivationLookup = Callable[[int, int], Awaitable[Optional[Any]]]


class ChannelActivationCache:
    """Caches the activation lookup per (guild, channel).

    Entries expire a fixed TTL after they were stored, regardless of how
    often they are read. Enabled and disabled answers are cached alike.
    Failed lookups are not cached and count as disabled.
    """

    def __init__(self, lookup: ActivationLookup, ttl: float = ACTIVATION_CACHE_TTL):
        self.lookup = lookup
        self.ttl = ttl
        self._cache: Dict[Tuple[int, int], bool] = {}
        self._expiry: Dict[Tuple[int, int], asyncio.TimerHandle] = {}

    async def is_active(self, channel_id: int, guild_id: int) -> bool:
        """Check whether AI chat is enabled for a channel."""
        key = (guild_id, channel_id)
        if key in self._cache:
            metrics_manager.record_activation_lookup("hit")
            return self._cache[key]

        try:
            channel_config = await self.lookup(guild_id, channel_id)
        except Exception as e:
            metrics_manager.record_activation_lookup("error")
            log.error(f"Activation lookup failed for {guild_id}/{channel_id}: {e}")
            return False

        metrics_manager.record_activation_lookup("miss")
        active = channel_config is not None
        self._store(key, active)
        return active

    def _store(self, key: Tuple[int, int], active: bool):
        self._cache[key] = active

        # Concurrent misses may both land here; the latest timer wins
        previous = self._expiry.pop(key, None)
        if previous:
            previous.cancel()
        loop = asyncio.get_running_loop()
        self._expiry[key] = loop.call_later(self.ttl, self._expire, key)

    def _expire(self, key: Tuple[int, int]):
        self._cache.pop(key, None)
        self._expiry.pop(key, None)

    def invalidate(self, guild_id: int, channel_id: int):
        """Drop a cached answer so the next check hits the lookup again."""
        key = (guild_id, channel_id)
        handle = self._expiry.pop(key, None)
        if handle:
            handle.cancel()
        self._cache.pop(key, None)

    def __len__(self) -> int:
        return len(self._cache)
