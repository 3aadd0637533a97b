"""
Shiva - AI Channel Registry
Persists which channels have AI chat switched on.
"""

import json
import os
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional

from config import AI_CHANNELS_FILE
import logger as log


class ActiveChannelStore:
    """JSON-backed registry of AI-enabled channels.

    Layout on disk: {guild_id: {channel_id: {"enabled_by": ..., "enabled_at": ...}}}
    Keys are strings because JSON object keys have to be.
    """

    def __init__(self, path: str = AI_CHANNELS_FILE):
        self.path = path
        self._lock = threading.Lock()
        self._channels: Dict[str, Dict[str, dict]] = self._load()

    def _load(self) -> Dict[str, Dict[str, dict]]:
        """Load the registry from disk, empty if missing or unreadable."""
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            log.error(f"Failed to load AI channels from {self.path}: {e}")
            return {}

    def _save(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(self._channels, f, indent=2)

    async def find_active_channel(self, guild_id: int, channel_id: int) -> Optional[dict]:
        """Get the AI chat config for a channel, or None if AI chat is off there."""
        with self._lock:
            channel_config = self._channels.get(str(guild_id), {}).get(str(channel_id))
            return dict(channel_config) if channel_config is not None else None

    def enable(self, guild_id: int, channel_id: int, enabled_by: str = None) -> dict:
        """Turn AI chat on for a channel."""
        with self._lock:
            channel_config = {
                "enabled_by": enabled_by,
                "enabled_at": datetime.now(timezone.utc).isoformat(),
            }
            self._channels.setdefault(str(guild_id), {})[str(channel_id)] = channel_config
            self._save()
            return dict(channel_config)

    def disable(self, guild_id: int, channel_id: int) -> bool:
        """Turn AI chat off for a channel.

        Returns:
            True if it was on, False if there was nothing to disable
        """
        with self._lock:
            guild_channels = self._channels.get(str(guild_id), {})
            if str(channel_id) not in guild_channels:
                return False
            del guild_channels[str(channel_id)]
            if not guild_channels:
                del self._channels[str(guild_id)]
            self._save()
            return True

    def list_channels(self, guild_id: int) -> List[int]:
        """Get the AI-enabled channel IDs for a guild."""
        with self._lock:
            return [int(c) for c in self._channels.get(str(guild_id), {})]
